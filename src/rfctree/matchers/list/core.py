"""List and definition-list parsing.

Bullet lists and definition lists share one model: a List of ListItems, each
with a marker and children. A list keeps going while the next item has the
same marker style at the same column; blank lines and page boundaries between
items become entries of the list itself.

Item content is any line at or past the item's content column. Content lines
are sliced at that column and grouped into paragraphs; a deeper item start
opens a nested list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rfctree.errors import ParseError
from rfctree.matchers.list.blank_line import (
    continues_item,
    scan_separators,
    take_separators,
)
from rfctree.matchers.list.definition import match_definition
from rfctree.matchers.list.marker import match_bracket_only, match_bullet
from rfctree.matchers.list.types import ItemStart
from rfctree.matchers.pagination import is_pagination
from rfctree.matchers.toc import follows_toc_heading, starts_toc
from rfctree.nodes import List, ListEntry, ListItem, ListItemChild, Paragraph
from rfctree.text import get_indentation, is_blank_line, slice_line, strip_common_indent

if TYPE_CHECKING:
    from rfctree.context import BlockContext
    from rfctree.matchers.protocol import LinePeeker


def _numbered_at_margin_is_heading(view: LinePeeker) -> bool:
    """A column-0 "1. Title" is a heading when followed by a blank line or
    by indented text that is not itself a list item."""
    following = view.peek(1)
    if following is None:
        return False
    if is_blank_line(following):
        return True
    if get_indentation(following) == 0:
        return False
    return detect_item_start(view.shifted(1), allow_deep=True, continuing=True) is None


def detect_item_start(
    view: LinePeeker, *, allow_deep: bool, continuing: bool = False
) -> ItemStart | None:
    """Detect an item start at the current line without consuming it.

    Args:
        view: Lines to inspect, current line at offset 0
        allow_deep: Accept deeply indented terms (inside an enclosing item)
        continuing: The line follows an item of an open list, so
            list-opening guards do not apply

    """
    line = view.peek()
    if line is None or is_blank_line(line) or is_pagination(view):
        return None
    start = match_bullet(line)
    if start is not None:
        if (
            not continuing
            and start.style == "number"
            and start.marker_indent == 0
            and _numbered_at_margin_is_heading(view)
        ):
            return None
        return start
    start = match_bracket_only(line, view.peek(1))
    if start is not None:
        return start
    return match_definition(view, allow_deep=allow_deep)


class _ContentBuilder:
    """Groups item content lines into paragraphs around nested blocks."""

    __slots__ = ("_children", "_lines")

    def __init__(self) -> None:
        self._children: list[ListItemChild] = []
        self._lines: list[str] = []

    @property
    def in_paragraph(self) -> bool:
        return bool(self._lines)

    def add_line(self, line: str) -> None:
        self._lines.append(line)

    def add_node(self, node: ListItemChild) -> None:
        self._flush()
        self._children.append(node)

    def finish(self) -> tuple[ListItemChild, ...]:
        self._flush()
        return tuple(self._children)

    def _flush(self) -> None:
        if not self._lines:
            return
        indent, lines = strip_common_indent(self._lines)
        self._children.append(Paragraph(indent=indent, lines=lines))
        self._lines = []


_ALWAYS_NESTS = frozenset({"circle", "star", "dash", "definition"})
_MIN_NESTING_GAP = 2


def _nests_mid_paragraph(start: ItemStart) -> bool:
    """Decide whether an item start inside a paragraph opens a nested list.

    Numbered, parenthesized and bracketed markers nest only with inline text
    after a gap of at least two spaces. A single space, as in
    "(PKIX) working group", or a marker alone on its line is continuation text.
    """
    if start.style in _ALWAYS_NESTS:
        return True
    if start.marker_only:
        return False
    gap = start.content_indent - start.marker_indent - len(start.marker)
    return gap >= _MIN_NESTING_GAP


def parse_item(ctx: BlockContext, start: ItemStart) -> ListItem:
    """Consume one item: its marker line(s) and all of its content."""
    first_line = ctx.cursor.index
    for _ in range(start.line_count):
        ctx.advance()

    content_indent = start.content_indent
    builder = _ContentBuilder()
    if start.inline_text is not None:
        builder.add_line(start.inline_text)

    while (line := ctx.peek()) is not None:
        if is_blank_line(line) or is_pagination(ctx):
            run = scan_separators(ctx)
            if not continues_item(run, content_indent):
                break
            for node in take_separators(ctx, run):
                builder.add_node(node)
            continue
        if get_indentation(line) < content_indent:
            break
        nested = detect_item_start(ctx, allow_deep=True)
        if nested is not None and (not builder.in_paragraph or _nests_mid_paragraph(nested)):
            builder.add_node(parse_list(ctx, allow_deep=True))
            continue
        builder.add_line(slice_line(ctx.advance(), content_indent))

    return ListItem(
        marker=start.marker,
        marker_indent=start.marker_indent,
        content_indent=content_indent,
        marker_only=start.marker_only,
        inline=not start.marker_only,
        children=builder.finish(),
        location=ctx.cursor.span(first_line),
    )


def parse_list(ctx: BlockContext, *, allow_deep: bool) -> List:
    """Consume a list starting at the cursor.

    Raises:
        ParseError: If no item starts at the current line
    """
    first_line = ctx.cursor.index
    first = detect_item_start(ctx, allow_deep=allow_deep)
    if first is None:
        raise ParseError(
            "No list item starts here",
            lineno=first_line + 1,
            source_file=ctx.cursor.source_file,
        )
    entries: list[ListEntry] = [parse_item(ctx, first)]

    while not ctx.at_end():
        run = scan_separators(ctx)
        following = detect_item_start(
            ctx.shifted(run.length), allow_deep=allow_deep, continuing=True
        )
        if following is None or not following.continues(first):
            break
        entries.extend(take_separators(ctx, run))
        entries.append(parse_item(ctx, following))

    return List(items=tuple(entries), location=ctx.cursor.span(first_line))


class ListMatcher:
    """Bullet, numbered, bracketed and definition lists."""

    name = "list"
    priority = 35

    def test(self, ctx: BlockContext) -> bool:
        line = ctx.peek()
        if line is None or is_blank_line(line):
            return False
        if follows_toc_heading(ctx) or starts_toc(ctx):
            return False
        return detect_item_start(ctx, allow_deep=False) is not None

    def parse(self, ctx: BlockContext) -> List:
        return parse_list(ctx, allow_deep=False)
