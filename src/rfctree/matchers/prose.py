"""Prose blocks: indented runs and the paragraph catch-all.

ParagraphMatcher claims any non-blank line, which makes the matcher set total.
It must stay last in priority order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rfctree.matchers.pagination import is_pagination
from rfctree.nodes import IndentedBlock, Paragraph
from rfctree.text import get_indentation, is_blank_line, slice_line, strip_common_indent

if TYPE_CHECKING:
    from rfctree.context import BlockContext
    from rfctree.matchers.protocol import LinePeeker

INDENTED_BLOCK_MIN = 4


def starts_indented_block(view: LinePeeker, offset: int = 0) -> bool:
    line = view.peek(offset)
    return (
        line is not None
        and not is_blank_line(line)
        and get_indentation(line) >= INDENTED_BLOCK_MIN
    )


class IndentedBlockMatcher:
    """Run of lines indented at least four columns."""

    name = "indented_block"
    priority = 50

    def test(self, ctx: BlockContext) -> bool:
        return starts_indented_block(ctx)

    def parse(self, ctx: BlockContext) -> IndentedBlock:
        base = min(INDENTED_BLOCK_MIN, get_indentation(ctx.peek() or ""))
        lines = [slice_line(ctx.advance(), base)]
        while (line := ctx.peek()) is not None:
            if is_blank_line(line) or get_indentation(line) < base or is_pagination(ctx):
                break
            lines.append(slice_line(ctx.advance(), base))
        return IndentedBlock(indent=base, lines=tuple(lines))


class ParagraphMatcher:
    """Fallback: consecutive non-blank lines up to a blank or an indented run."""

    name = "paragraph"
    priority = 90

    def test(self, ctx: BlockContext) -> bool:
        line = ctx.peek()
        return line is not None and not is_blank_line(line)

    def parse(self, ctx: BlockContext) -> Paragraph:
        raw = [ctx.advance()]
        while (line := ctx.peek()) is not None:
            if is_blank_line(line) or is_pagination(ctx) or starts_indented_block(ctx):
                break
            raw.append(ctx.advance())
        indent, lines = strip_common_indent(raw)
        return Paragraph(indent=indent, lines=lines)
