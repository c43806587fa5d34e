"""ASCII-art figures.

A figure is at least three consecutive diagram-like lines: box borders,
vertical bars, arrows or standalone "(A)" step labels. The diagram may be
followed by a "Note:" paragraph and a "Figure N:" caption; both are kept in
the same node so the figure renders as one unit.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rfctree.matchers.captions import (
    FIGURE_CAPTION_RE,
    NOTE_RE,
    blank_run,
    matches_trimmed,
    take_blanks,
)
from rfctree.matchers.pagination import is_pagination
from rfctree.nodes import Figure
from rfctree.text import is_blank_line

if TYPE_CHECKING:
    from rfctree.context import BlockContext

_LABEL_RE = re.compile(r"^\s*\([A-Za-z0-9]+\)\s*$")
_BOX_RE = re.compile(r"\+[\-+]{2,}\+")
_ARROW_RE = re.compile(r"<-+|-+>|\^|\bv\b")
_ANNOTATION_RE = re.compile(r"^\([A-Za-z0-9]+\)(?:\s*\([A-Za-z0-9]+\))*[\sA-Za-z0-9\-]*$")

_REQUIRED_LINES = 3


def is_diagram_line(line: str | None) -> bool:
    if line is None or is_blank_line(line):
        return False
    return (
        _LABEL_RE.match(line) is not None
        or "|" in line
        or _BOX_RE.search(line) is not None
        or _ARROW_RE.search(line) is not None
    )


def _is_annotation_line(line: str) -> bool:
    # "(A) (G) Access Token" inside a diagram, never at column 0
    return line[:1] == " " and _ANNOTATION_RE.match(line.strip()) is not None


class FigureMatcher:
    name = "figure"
    priority = 12

    def test(self, ctx: BlockContext) -> bool:
        return all(is_diagram_line(ctx.peek(offset)) for offset in range(_REQUIRED_LINES))

    def parse(self, ctx: BlockContext) -> Figure:
        lines = [ctx.advance()]
        while (line := ctx.peek()) is not None:
            if is_blank_line(line) or is_pagination(ctx):
                break
            if matches_trimmed(FIGURE_CAPTION_RE, line) or matches_trimmed(NOTE_RE, line):
                break
            if not (is_diagram_line(line) or _is_annotation_line(line)):
                break
            lines.append(ctx.advance())

        blanks = blank_run(ctx)
        if matches_trimmed(NOTE_RE, ctx.peek(blanks)):
            lines.extend(take_blanks(ctx, blanks))
            lines.append(ctx.advance())
            while (line := ctx.peek()) is not None and not is_blank_line(line):
                if is_pagination(ctx):
                    break
                lines.append(ctx.advance())
            blanks = blank_run(ctx)

        if matches_trimmed(FIGURE_CAPTION_RE, ctx.peek(blanks)):
            lines.extend(take_blanks(ctx, blanks))
            lines.append(ctx.advance())

        return Figure(lines=tuple(lines))
