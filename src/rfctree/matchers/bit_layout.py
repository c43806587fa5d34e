"""Packet bit-layout diagrams.

     0                   1                   2                   3
     0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |                          time_low                             |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+

Recognized by its two rulers: a tens ruler of strictly consecutive integers,
then a units ruler counting modulo 10, then a "+-+-" rule.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rfctree.matchers.captions import FIGURE_CAPTION_RE, blank_run, matches_trimmed, take_blanks
from rfctree.matchers.pagination import is_pagination
from rfctree.nodes import BitLayoutDiagram
from rfctree.text import get_indentation, is_blank_line, slice_line

if TYPE_CHECKING:
    from rfctree.context import BlockContext

_RULER_RE = re.compile(r"^[0-9 ]+$")
_RULE_RE = re.compile(r"^[+-]+$")

_MIN_INDENT = 3
_MAX_BASE = 3


def _ruler_numbers(line: str | None) -> list[int] | None:
    if line is None:
        return None
    trimmed = line.strip()
    if not trimmed or _RULER_RE.match(trimmed) is None:
        return None
    return [int(token) for token in trimmed.split()]


def is_consecutive(numbers: list[int]) -> bool:
    """Strictly ascending or strictly descending by one."""
    if len(numbers) < 2:
        return len(numbers) == 1
    step = numbers[1] - numbers[0]
    if step not in (1, -1):
        return False
    return all(b - a == step for a, b in zip(numbers, numbers[1:]))


def is_cycled(numbers: list[int]) -> bool:
    """Each number is the previous plus one, modulo 10."""
    if len(numbers) < 2:
        return False
    return all(b == (a + 1) % 10 for a, b in zip(numbers, numbers[1:]))


def _is_byte_ruler(line: str | None) -> bool:
    numbers = _ruler_numbers(line)
    return numbers is not None and is_consecutive(numbers)


def _is_bit_ruler(line: str | None) -> bool:
    numbers = _ruler_numbers(line)
    return numbers is not None and is_cycled(numbers)


def _continues_diagram(line: str) -> bool:
    trimmed = line.strip()
    return _is_byte_ruler(line) or _is_bit_ruler(line) or trimmed.startswith(("+", "|"))


class BitLayoutDiagramMatcher:
    name = "bit_layout_diagram"
    priority = 10

    def test(self, ctx: BlockContext) -> bool:
        first = ctx.peek()
        if first is None or is_blank_line(first) or get_indentation(first) < _MIN_INDENT:
            return False
        if not _is_byte_ruler(first) or not _is_bit_ruler(ctx.peek(1)):
            return False
        rule = ctx.peek(2)
        return rule is not None and _RULE_RE.match(rule.strip()) is not None

    def parse(self, ctx: BlockContext) -> BitLayoutDiagram:
        base = min(_MAX_BASE, get_indentation(ctx.peek() or ""))
        lines = [slice_line(ctx.advance(), base)]
        while (line := ctx.peek()) is not None:
            if is_blank_line(line) or is_pagination(ctx):
                break
            if get_indentation(line) < base or not _continues_diagram(line):
                break
            lines.append(slice_line(ctx.advance(), base))

        blanks = blank_run(ctx)
        caption = ctx.peek(blanks)
        if (
            caption is not None
            and get_indentation(caption) >= base
            and matches_trimmed(FIGURE_CAPTION_RE, caption)
        ):
            lines.extend(take_blanks(ctx, blanks))
            lines.append(slice_line(ctx.advance(), base))

        return BitLayoutDiagram(indent=base, lines=tuple(lines))
