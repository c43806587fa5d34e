"""Caption and trailing-blank handling shared by figures, tables and diagrams.

A captioned block is followed by blank lines and then its caption:

         +-------+
         | a | b |
         +-------+

       Table 1: Example

Blank lines are absorbed into the block only when a caption (or, for
figures, a Note paragraph) follows them. Otherwise they stay in the document
as BlankLine nodes.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rfctree.text import is_blank_line

if TYPE_CHECKING:
    from rfctree.context import BlockContext
    from rfctree.matchers.protocol import LinePeeker

FIGURE_CAPTION_RE = re.compile(r"^Figure\s+[0-9]+\s*:")
TABLE_CAPTION_RE = re.compile(r"^Table\s+[0-9]+\s*:")
NOTE_RE = re.compile(r"^Note:")


def matches_trimmed(pattern: re.Pattern[str], line: str | None) -> bool:
    return line is not None and pattern.match(line.lstrip()) is not None


def blank_run(view: LinePeeker, offset: int = 0) -> int:
    """Number of consecutive blank lines at ``offset``."""
    count = 0
    while is_blank_line(view.peek(offset + count)):
        count += 1
    return count


def take_blanks(ctx: BlockContext, count: int) -> list[str]:
    """Consume ``count`` blank lines, returning them normalized to ''."""
    for _ in range(count):
        ctx.advance()
    return [""] * count
