"""Separator matchers: blank lines and page boundaries.

Paginated text repeats a footer, a form feed and a header at every page
boundary:

    Hardt                        Standards Track                   [Page 27]
    \\f
    RFC 6749                        OAuth 2.0                   October 2012

A page-break line holds at least one form feed and otherwise only whitespace;
its text is kept as found. The footer is the content line right before it,
the header the content line right after.
Block matchers that span lines (lists, figures, paragraphs) use the helpers
here to stop at, or thread through, a page boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rfctree.nodes import BlankLine, PageBreak, PageFooter, PageHeader
from rfctree.text import is_blank_line

if TYPE_CHECKING:
    from rfctree.context import BlockContext
    from rfctree.matchers.protocol import LinePeeker

PAGE_BREAK = "\f"


def is_page_break_line(line: str | None) -> bool:
    return line is not None and PAGE_BREAK in line and line.strip() == ""


def _is_content(line: str | None) -> bool:
    return line is not None and not is_blank_line(line) and not is_page_break_line(line)


def is_page_footer(view: LinePeeker, offset: int = 0) -> bool:
    return _is_content(view.peek(offset)) and is_page_break_line(view.peek(offset + 1))


def is_page_header(view: LinePeeker, offset: int = 0) -> bool:
    return _is_content(view.peek(offset)) and is_page_break_line(view.peek(offset - 1))


def is_pagination(view: LinePeeker, offset: int = 0) -> bool:
    """True if the line at ``offset`` is a footer, page break or header."""
    return (
        is_page_break_line(view.peek(offset))
        or is_page_footer(view, offset)
        or is_page_header(view, offset)
    )


def skip_blank_and_pagination(view: LinePeeker, offset: int = 0) -> int:
    """Offset of the next content line at or after ``offset``.

    Skips blank lines and page-boundary lines. The returned offset may point
    past the end of input (peek returns None there).
    """
    while True:
        line = view.peek(offset)
        if line is None:
            return offset
        if is_blank_line(line) or is_pagination(view, offset):
            offset += 1
            continue
        return offset


def read_pagination(ctx: BlockContext) -> PageFooter | PageBreak | PageHeader:
    """Consume one page-boundary line and return its node.

    Callers must have checked is_pagination() first.
    """
    if is_page_footer(ctx):
        return PageFooter(text=ctx.advance())
    if is_page_break_line(ctx.peek()):
        return PageBreak(text=ctx.advance())
    return PageHeader(text=ctx.advance())


class PageBreakMatcher:
    """Whitespace line holding a form feed."""

    name = "page_break"
    priority = 2

    def test(self, ctx: BlockContext) -> bool:
        return is_page_break_line(ctx.peek())

    def parse(self, ctx: BlockContext) -> PageBreak:
        return PageBreak(text=ctx.advance())


class PageFooterMatcher:
    """Content line immediately before a page break."""

    name = "page_footer"
    priority = 3

    def test(self, ctx: BlockContext) -> bool:
        return is_page_footer(ctx)

    def parse(self, ctx: BlockContext) -> PageFooter:
        return PageFooter(text=ctx.advance())


class PageHeaderMatcher:
    """Content line immediately after a page break."""

    name = "page_header"
    priority = 3

    def test(self, ctx: BlockContext) -> bool:
        return is_page_header(ctx)

    def parse(self, ctx: BlockContext) -> PageHeader:
        return PageHeader(text=ctx.advance())


class BlankLineMatcher:
    """Empty or space-only line. One node per line."""

    name = "blank_line"
    priority = 5

    def test(self, ctx: BlockContext) -> bool:
        return is_blank_line(ctx.peek())

    def parse(self, ctx: BlockContext) -> BlankLine:
        ctx.advance()
        return BlankLine()
