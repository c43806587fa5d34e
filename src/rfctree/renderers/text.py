"""Plain-text renderer: the inverse of the parser.

Each node kind has one pure function returning its lines. Leading
whitespace is rebuilt from the stored indentation integers and blank lines
are always emitted as empty strings. List markers are re-padded from their
columns, so an edited marker realigns its content instead of keeping a
stale gap.

Example:
    >>> from rfctree import parse, render
    >>> lines = ["   o  First", "   o  Second"]
    >>> render(parse(lines)) == lines
    True
"""

from __future__ import annotations

from rfctree.errors import RenderError
from rfctree.matchers.list.marker import marker_gap
from rfctree.matchers.pagination import is_page_break_line
from rfctree.nodes import (
    Abnf,
    BitLayoutDiagram,
    BlankLine,
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
)
from rfctree.text import apply_indent


def render_metadata(node: Metadata) -> list[str]:
    return list(node.lines)


def render_title(node: Title) -> list[str]:
    return apply_indent(node.lines, node.indent)


def render_section_title(node: SectionTitle) -> list[str]:
    return list(node.lines)


def render_blank_line(node: BlankLine) -> list[str]:
    return [""]


def render_page_break(node: PageBreak) -> list[str]:
    if not is_page_break_line(node.text):
        raise RenderError(f"PageBreak text must be whitespace with a form feed, got {node.text!r}")
    return [node.text]


def render_page_header(node: PageHeader) -> list[str]:
    return [node.text]


def render_page_footer(node: PageFooter) -> list[str]:
    return [node.text]


def render_paragraph(node: Paragraph) -> list[str]:
    return apply_indent(node.lines, node.indent)


def render_indented_block(node: IndentedBlock) -> list[str]:
    return apply_indent(node.lines, node.indent)


def render_table_of_contents(node: TableOfContents) -> list[str]:
    return list(node.lines)


def render_figure(node: Figure) -> list[str]:
    return list(node.lines)


def render_table(node: Table) -> list[str]:
    return apply_indent(node.lines, node.indent)


def render_bit_layout_diagram(node: BitLayoutDiagram) -> list[str]:
    return apply_indent(node.lines, node.indent)


def render_abnf(node: Abnf) -> list[str]:
    return list(node.lines)


def _with_body(lines: list[str], body: tuple[str, ...] | None) -> list[str]:
    if body is not None:
        lines.append("")
        lines.extend(body)
    return lines


def render_http_request(node: HttpRequest) -> list[str]:
    return _with_body([*node.request_lines, *node.header_lines], node.body_lines)


def render_http_response(node: HttpResponse) -> list[str]:
    return _with_body([node.status_line, *node.header_lines], node.body_lines)


def render_list_item(item: ListItem) -> list[str]:
    """Render one item: marker line(s), then content at the content column.

    An inline item puts the first line of its first paragraph on the last
    marker line, after the recomputed gap.
    """
    out = apply_indent(item.marker.split("\n"), item.marker_indent)
    children = list(item.children)

    if item.inline and children and isinstance(children[0], Paragraph) and children[0].lines:
        first = children.pop(0)
        gap = marker_gap(item.marker, item.marker_indent, item.content_indent)
        out[-1] = f"{out[-1]}{' ' * (gap + first.indent)}{first.lines[0]}"
        out.extend(apply_indent(first.lines[1:], item.content_indent + first.indent))

    for child in children:
        if isinstance(child, Paragraph):
            out.extend(apply_indent(child.lines, item.content_indent + child.indent))
        else:
            out.extend(render_node(child))
    return out


def render_list(node: List) -> list[str]:
    out: list[str] = []
    for entry in node.items:
        out.extend(render_node(entry))
    return out


def render_document(node: Document) -> list[str]:
    out: list[str] = []
    for child in node.children:
        out.extend(render_node(child))
    return out


def render_node(node: Node) -> list[str]:
    """Render any node to its lines.

    Raises:
        RenderError: If the node kind has no renderer
    """
    match node:
        case Document():
            return render_document(node)
        case Metadata():
            return render_metadata(node)
        case Title():
            return render_title(node)
        case SectionTitle():
            return render_section_title(node)
        case BlankLine():
            return render_blank_line(node)
        case PageBreak():
            return render_page_break(node)
        case PageHeader():
            return render_page_header(node)
        case PageFooter():
            return render_page_footer(node)
        case Paragraph():
            return render_paragraph(node)
        case IndentedBlock():
            return render_indented_block(node)
        case TableOfContents():
            return render_table_of_contents(node)
        case Figure():
            return render_figure(node)
        case Table():
            return render_table(node)
        case BitLayoutDiagram():
            return render_bit_layout_diagram(node)
        case Abnf():
            return render_abnf(node)
        case HttpRequest():
            return render_http_request(node)
        case HttpResponse():
            return render_http_response(node)
        case List():
            return render_list(node)
        case ListItem():
            return render_list_item(node)
        case _:
            raise RenderError(f"Cannot render {type(node).__name__}")


class TextRenderer:
    """Render a Document back to the plain-text lines it was parsed from.

    Stateless; one instance can be shared.
    """

    __slots__ = ()

    def render(self, node: Document) -> list[str]:
        """Render document to ordered output lines."""
        return render_document(node)

    def render_to_string(self, node: Document) -> str:
        """Render document joined with newlines, no trailing terminator."""
        return "\n".join(self.render(node))
