"""ASCII grid tables.

    +======+======+
    | H1   | H2   |
    +======+======+
    | a    | b    |
    +------+------+

    Table 1: Heading

A table needs three consecutive border or row lines, starting at column 3 or
deeper. Rows are lines with at least two column separators. Lines are stored
with the base indentation stripped once.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rfctree.matchers.captions import TABLE_CAPTION_RE, blank_run, matches_trimmed, take_blanks
from rfctree.matchers.pagination import is_pagination
from rfctree.nodes import Table
from rfctree.text import get_indentation, is_blank_line, slice_line

if TYPE_CHECKING:
    from rfctree.context import BlockContext

_CLOSED_BORDER_RE = re.compile(r"\+[=\-]+(?:\+[=\-]+)+\+")
_OPEN_BORDER_RE = re.compile(r"\+[=\-]{2,}\+")

_MIN_INDENT = 3
_MAX_BASE = 4
_REQUIRED_LINES = 3


def is_table_border(line: str) -> bool:
    trimmed = line.strip()
    if trimmed.startswith("+") and trimmed.endswith("+"):
        return _CLOSED_BORDER_RE.fullmatch(trimmed) is not None
    # Truncated borders such as "+------+------+-"
    return _OPEN_BORDER_RE.search(trimmed) is not None


def is_table_row(line: str) -> bool:
    return line.count("|") >= 2


def _is_table_line(line: str | None) -> bool:
    if line is None or is_blank_line(line):
        return False
    return is_table_border(line) or is_table_row(line)


def _continues_table(line: str) -> bool:
    trimmed = line.strip()
    return _is_table_line(line) or trimmed.startswith(("|", "+"))


class TableMatcher:
    name = "table"
    priority = 11

    def test(self, ctx: BlockContext) -> bool:
        first = ctx.peek()
        if first is None or get_indentation(first) < _MIN_INDENT:
            return False
        return all(_is_table_line(ctx.peek(offset)) for offset in range(_REQUIRED_LINES))

    def parse(self, ctx: BlockContext) -> Table:
        base = min(_MAX_BASE, get_indentation(ctx.peek() or ""))
        lines = [slice_line(ctx.advance(), base)]
        while (line := ctx.peek()) is not None:
            if is_blank_line(line) or is_pagination(ctx):
                break
            if get_indentation(line) < base or not _continues_table(line):
                break
            lines.append(slice_line(ctx.advance(), base))

        blanks = blank_run(ctx)
        caption = ctx.peek(blanks)
        if (
            caption is not None
            and get_indentation(caption) >= base
            and matches_trimmed(TABLE_CAPTION_RE, caption)
        ):
            lines.extend(take_blanks(ctx, blanks))
            lines.append(slice_line(ctx.advance(), base))

        return Table(indent=base, lines=tuple(lines))
