"""Renderers turning a Document back into text.

Available:
- TextRenderer: exact plain-text reconstruction (round-trip)
"""

from rfctree.renderers.protocol import LineRenderer
from rfctree.renderers.text import TextRenderer, render_node

__all__ = ["LineRenderer", "TextRenderer", "render_node"]
