"""LineRenderer protocol: stable interface for tree renderers.

Any renderer that turns a Document back into lines conforms to this
protocol. The built-in ``TextRenderer`` is the reference implementation.

Example:
    from rfctree.renderers.protocol import LineRenderer

    def write_rfc(renderer: LineRenderer, doc: Document) -> str:
        return "\\n".join(renderer.render(doc))

"""

from typing import Protocol

from rfctree.nodes import Document


class LineRenderer(Protocol):
    """Protocol for renderers producing ordered output lines."""

    def render(self, node: Document) -> list[str]:
        """Render a Document to its lines, without line terminators."""
        ...
