"""Typed block nodes for rfctree.

All nodes are frozen dataclasses with slots for:
- Immutability: a parsed tree is never modified by the core
- Structural equality: re-parsing a rendered tree compares equal
- Pattern matching: the renderer dispatches with match statements

Node Hierarchy:
Node (base)
├── Document
├── Metadata, Title, SectionTitle
├── BlankLine, PageBreak, PageHeader, PageFooter
├── Paragraph, IndentedBlock
├── TableOfContents (entries: TocEntry)
├── Figure, Table, BitLayoutDiagram
├── Abnf, HttpRequest, HttpResponse
└── List
    └── ListItem (children: Paragraph | List | pagination)

Indentation is stored once per block as an integer; lines are kept with that
common indentation removed. Blocks whose exact layout matters (figures,
section titles, grammar, protocol messages) keep their raw lines.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from rfctree.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes.

    Parsed nodes record the source lines they came from. The location is
    keyword-only and left out of equality and repr, so a tree built by hand
    compares equal to the same tree parsed from text.

    """

    location: SourceLocation | None = field(default=None, compare=False, repr=False, kw_only=True)


# =============================================================================
# Front matter and headings
# =============================================================================


@dataclass(frozen=True, slots=True)
class Metadata(Node):
    """Document header block (working group, RFC number, category, authors).

    Lines are raw: the header is a two-column layout whose spacing is content.

    """

    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Title(Node):
    """Centered document title following the header block."""

    indent: int
    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SectionTitle(Node):
    """Column-0 heading, possibly wrapped onto indented continuation lines."""

    lines: tuple[str, ...]


# =============================================================================
# Separators and pagination
# =============================================================================


@dataclass(frozen=True, slots=True)
class BlankLine(Node):
    """An empty or space-only line. Always renders as ''."""


@dataclass(frozen=True, slots=True)
class PageBreak(Node):
    """Form-feed line between pages, kept with any surrounding whitespace."""

    text: str = "\f"


@dataclass(frozen=True, slots=True)
class PageHeader(Node):
    """Running header immediately after a page break."""

    text: str


@dataclass(frozen=True, slots=True)
class PageFooter(Node):
    """Running footer immediately before a page break."""

    text: str


# =============================================================================
# Prose
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Run of non-blank lines sharing a common indentation."""

    indent: int
    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class IndentedBlock(Node):
    """Deeply indented run (code, examples) with its base indent stripped."""

    indent: int
    lines: tuple[str, ...]


# =============================================================================
# Table of contents
# =============================================================================


@dataclass(frozen=True, slots=True)
class TocEntry:
    """One logical table-of-contents entry.

    Attributes:
        raw: Physical lines of the entry joined with a newline
        indent: Indentation of the entry's first line
        title: Title with whitespace collapsed, leaders and page removed
        page: Trailing page number, if the entry has one

    """

    raw: str
    indent: int
    title: str | None
    page: int | None


@dataclass(frozen=True, slots=True)
class TableOfContents(Node):
    """Table of contents block, raw lines plus the entries derived from them."""

    lines: tuple[str, ...]
    entries: tuple[TocEntry, ...] = ()


# =============================================================================
# Diagrams and tables
# =============================================================================


@dataclass(frozen=True, slots=True)
class Figure(Node):
    """ASCII-art diagram, optional Note paragraph, optional caption.

    Lines are raw. Blank lines inside the figure are stored as ''.

    """

    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Table(Node):
    """ASCII grid table with an optional "Table N:" caption."""

    indent: int
    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class BitLayoutDiagram(Node):
    """Packet bit-layout diagram with its bit rulers and field rows."""

    indent: int
    lines: tuple[str, ...]


# =============================================================================
# Grammar and protocol examples
# =============================================================================


@dataclass(frozen=True, slots=True)
class Abnf(Node):
    """ABNF rule block, raw lines."""

    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class HttpRequest(Node):
    """HTTP request example.

    Renders as request lines, header lines, then ('' + body) when a body is
    present. All lines are raw.

    """

    request_lines: tuple[str, ...]
    header_lines: tuple[str, ...] = ()
    body_lines: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class HttpResponse(Node):
    """HTTP response example: status line, headers, optional body."""

    status_line: str
    header_lines: tuple[str, ...] = ()
    body_lines: tuple[str, ...] | None = None


# =============================================================================
# Lists
# =============================================================================


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """Bullet, numbered, bracketed or definition item.

    Attributes:
        marker: Marker text; a wrapped definition term spans lines joined
            with a newline, each sliced at marker_indent
        marker_indent: Column of the marker
        content_indent: Column where the item's wrapped text aligns
        marker_only: The marker occupies its own line(s)
        inline: The first paragraph line shares the marker's last line
        children: Paragraphs (indent relative to content_indent), nested
            lists and pagination nodes

    """

    marker: str
    marker_indent: int
    content_indent: int
    marker_only: bool = False
    inline: bool = False
    children: tuple[ListItemChild, ...] = ()


@dataclass(frozen=True, slots=True)
class List(Node):
    """Sequence of items, with pagination threaded between them."""

    items: tuple[ListEntry, ...]


# =============================================================================
# Root
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node, top-level blocks in document order."""

    children: tuple[Block, ...]


# Type aliases for the closed unions
ListItemChild: TypeAlias = Paragraph | List | BlankLine | PageHeader | PageFooter | PageBreak
ListEntry: TypeAlias = ListItem | BlankLine | PageHeader | PageFooter | PageBreak
Block: TypeAlias = (
    Metadata
    | Title
    | SectionTitle
    | BlankLine
    | PageBreak
    | PageHeader
    | PageFooter
    | Paragraph
    | IndentedBlock
    | TableOfContents
    | Figure
    | Table
    | BitLayoutDiagram
    | Abnf
    | HttpRequest
    | HttpResponse
    | List
)

PAGINATION_TYPES: tuple[type[Node], ...] = (BlankLine, PageHeader, PageFooter, PageBreak)
LIST_ITEM_CHILD_TYPES: tuple[type[Node], ...] = (Paragraph, List, *PAGINATION_TYPES)
LIST_ENTRY_TYPES: tuple[type[Node], ...] = (ListItem, *PAGINATION_TYPES)
BLOCK_TYPES: tuple[type[Node], ...] = (
    Metadata,
    Title,
    SectionTitle,
    BlankLine,
    PageBreak,
    PageHeader,
    PageFooter,
    Paragraph,
    IndentedBlock,
    TableOfContents,
    Figure,
    Table,
    BitLayoutDiagram,
    Abnf,
    HttpRequest,
    HttpResponse,
    List,
)
