"""
rfctree: round-trip block parser for plain-text RFCs

Turns paginated, line-oriented RFC text into a typed block tree (titles,
headings, lists, tables, figures, grammar, protocol examples) that renders
back to the original text byte-for-byte. Zero runtime dependencies.

Quick Start:
    >>> from rfctree import parse_text, render_to_string
    >>> text = "Abstract\\n\\n   o  First\\n   o  Second"
    >>> doc = parse_text(text)
    >>> [type(n).__name__ for n in doc.children]
    ['SectionTitle', 'BlankLine', 'List']
    >>> render_to_string(doc) == text
    True

Editing:
    >>> from rfctree import patch_document
    >>> doc = patch_document(doc, [{"op": "remove", "path": "/children/2/items/1"}])
    >>> render_to_string(doc)
    'Abstract\\n\\n   o  First'

Custom Matchers:
    >>> from rfctree import ParseConfig, parse
    >>> config = ParseConfig(extra_matchers=(MyMatcher(),), disabled_matchers=frozenset({"abnf"}))
    >>> doc = parse(lines, config=config)
"""

__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "parse",
    "parse_text",
    "render",
    "render_to_string",
    "Parser",
    "TextRenderer",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
    # Matchers
    "Matcher",
    "MatcherRegistry",
    "MatcherRegistryBuilder",
    "create_default_registry",
    # Nodes
    "Abnf",
    "BitLayoutDiagram",
    "BlankLine",
    "Block",
    "Document",
    "Figure",
    "HttpRequest",
    "HttpResponse",
    "IndentedBlock",
    "List",
    "ListItem",
    "Metadata",
    "Node",
    "PageBreak",
    "PageFooter",
    "PageHeader",
    "Paragraph",
    "SectionTitle",
    "SourceLocation",
    "Table",
    "TableOfContents",
    "Title",
    "TocEntry",
    # Serialization and patching
    "apply_patch",
    "from_dict",
    "from_json",
    "patch_document",
    "to_dict",
    "to_json",
    # Errors
    "CursorError",
    "MatcherRegistryError",
    "ParseError",
    "PatchBoundsError",
    "PatchError",
    "PatchTestError",
    "PointerError",
    "RenderError",
    "RfcTreeError",
    "SerializationError",
]

__version__ = "0.1.0"

from rfctree.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from rfctree.errors import (
    CursorError,
    MatcherRegistryError,
    ParseError,
    PatchBoundsError,
    PatchError,
    PatchTestError,
    PointerError,
    RenderError,
    RfcTreeError,
    SerializationError,
)
from rfctree.location import SourceLocation
from rfctree.matchers import (
    Matcher,
    MatcherRegistry,
    MatcherRegistryBuilder,
    create_default_registry,
)
from rfctree.nodes import (
    Abnf,
    BitLayoutDiagram,
    BlankLine,
    Block,
    Document,
    Figure,
    HttpRequest,
    HttpResponse,
    IndentedBlock,
    List,
    ListItem,
    Metadata,
    Node,
    PageBreak,
    PageFooter,
    PageHeader,
    Paragraph,
    SectionTitle,
    Table,
    TableOfContents,
    Title,
    TocEntry,
)
from rfctree.parser import Parser, parse, parse_text
from rfctree.patch import apply_patch, patch_document
from rfctree.renderers.text import TextRenderer
from rfctree.serialization import from_dict, from_json, to_dict, to_json

_RENDERER = TextRenderer()


def render(doc: Document) -> list[str]:
    """Render a Document back to its ordered lines.

    Example:
        >>> render(parse(["   o  First"]))
        ['   o  First']
    """
    return _RENDERER.render(doc)


def render_to_string(doc: Document) -> str:
    """Render a Document joined with newlines, no trailing terminator."""
    return _RENDERER.render_to_string(doc)
