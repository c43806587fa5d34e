"""Section headings.

A heading starts at column 0 and runs to the next blank line, so a long title
wrapped onto an indented second line stays one node:

    4.5.  Client Sends the Authorization Code and the Code Verifier to the
          Token Endpoint
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rfctree.matchers.pagination import is_pagination
from rfctree.nodes import SectionTitle
from rfctree.text import get_indentation, is_blank_line

if TYPE_CHECKING:
    from rfctree.context import BlockContext

# "1.  Introduction ..........4" belongs to a table of contents
TOC_LEADER_RE = re.compile(r"\.{2,}\s*[0-9]+\s*$")


class SectionTitleMatcher:
    name = "section_title"
    priority = 49

    def test(self, ctx: BlockContext) -> bool:
        line = ctx.peek()
        if line is None or is_blank_line(line) or get_indentation(line) != 0:
            return False
        return TOC_LEADER_RE.search(line.strip()) is None

    def parse(self, ctx: BlockContext) -> SectionTitle:
        lines = [ctx.advance()]
        while (line := ctx.peek()) is not None and not is_blank_line(line):
            if is_pagination(ctx):
                break
            lines.append(ctx.advance())
        return SectionTitle(lines=tuple(lines))
