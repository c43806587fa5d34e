"""Document front matter: the header block and the title.

An RFC opens with a two-column header block, a blank line, then a centered
title:

    Internet Engineering Task Force (IETF)                     D. Hardt, Ed.
    Request for Comments: 6749                                     Microsoft
    Category: Standards Track

                     The OAuth 2.0 Authorization Framework

Each fires at most once per parse; ParseState records that they have.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rfctree.matchers.pagination import is_page_break_line, is_pagination
from rfctree.nodes import Metadata, Title
from rfctree.text import get_indentation, is_blank_line, strip_common_indent

if TYPE_CHECKING:
    from rfctree.context import BlockContext

# Header phrases that may appear anywhere on a header line
_SOURCE_PHRASES = (
    "Internet Engineering Task Force",
    "Internet Architecture Board",
    "Internet Research Task Force",
    "Independent Submission",
)

# Header fields that start a header line
_FIELD_PREFIXES = (
    "Network Working Group",
    "Request for Comments:",
    "Category:",
    "Obsoletes:",
    "Updates:",
    "ISSN:",
)

_LOOKAHEAD = 8


def _is_header_line(line: str) -> bool:
    stripped = line.strip()
    return any(phrase in line for phrase in _SOURCE_PHRASES) or stripped.startswith(
        _FIELD_PREFIXES
    )


def _take_until_blank(ctx: BlockContext) -> list[str]:
    lines = [ctx.advance()]
    while (line := ctx.peek()) is not None and not is_blank_line(line):
        if is_pagination(ctx):
            break
        lines.append(ctx.advance())
    return lines


class MetadataMatcher:
    """Header block at the very start of the document."""

    name = "metadata"
    priority = 1

    def test(self, ctx: BlockContext) -> bool:
        if ctx.state.seen_metadata:
            return False
        line = ctx.peek()
        if line is None or is_blank_line(line) or is_page_break_line(line):
            return False
        if any(
            not (is_blank_line(prev) or is_page_break_line(prev)) for prev in ctx.cursor.consumed()
        ):
            return False
        for offset in range(_LOOKAHEAD):
            candidate = ctx.peek(offset)
            if candidate is None or is_blank_line(candidate):
                break
            if _is_header_line(candidate):
                return True
        return False

    def parse(self, ctx: BlockContext) -> Metadata:
        lines = _take_until_blank(ctx)
        ctx.state.seen_metadata = True
        ctx.state.metadata_end = ctx.cursor.index
        return Metadata(lines=tuple(lines))


class TitleMatcher:
    """First indented run after the header block, separated only by blanks."""

    name = "title"
    priority = 20

    def test(self, ctx: BlockContext) -> bool:
        state = ctx.state
        if not state.seen_metadata or state.seen_title or state.metadata_end is None:
            return False
        line = ctx.peek()
        if line is None or is_blank_line(line) or get_indentation(line) < 2:
            return False
        since = ctx.cursor.index - state.metadata_end
        return all(is_blank_line(ctx.peek(-back)) for back in range(1, since + 1))

    def parse(self, ctx: BlockContext) -> Title:
        indent, lines = strip_common_indent(_take_until_blank(ctx))
        ctx.state.seen_title = True
        return Title(indent=indent, lines=lines)
