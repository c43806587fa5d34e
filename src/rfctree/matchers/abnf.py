"""ABNF grammar blocks (RFC 5234).

    VSCHAR     = %x20-7E
    NQCHAR     = %x21 / %x23-5B / %x5D-7E

A block starts at a rule line ("name = elements" or "name =/ elements") and
runs while lines stay at or right of that rule's indentation. Grammar lines
are counted as evidence (rule starts, comments, %x/%d/%b values, leading "/"
alternatives, quoted literals). An indented rule needs one piece of evidence;
a rule at column 0 needs a second one, since flush-left prose such as
"x = y is ..." is far more common than flush-left grammar.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rfctree.matchers.pagination import is_pagination
from rfctree.nodes import Abnf
from rfctree.text import get_indentation, is_blank_line

if TYPE_CHECKING:
    from rfctree.context import BlockContext
    from rfctree.matchers.protocol import LinePeeker

RULE_START_RE = re.compile(r"^\s*[A-Za-z][A-Za-z0-9-]*\s*=/?\s+.+$")
_COMMENT_RE = re.compile(r"^\s*;")
_VALUE_RE = re.compile(r"(?:^|\s)%[xdb][0-9A-Fa-f]")
_ALTERNATIVE_RE = re.compile(r"^/.+")
_QUOTED_RE = re.compile(r'^".*"\s*(?:/.+)?$')

_LOOKAHEAD = 12


def is_rule_start(line: str | None) -> bool:
    return line is not None and RULE_START_RE.match(line) is not None


def has_grammar_evidence(line: str) -> bool:
    if is_blank_line(line):
        return False
    if is_rule_start(line) or _COMMENT_RE.match(line):
        return True
    trimmed = line.strip()
    return (
        _VALUE_RE.search(trimmed) is not None
        or _ALTERNATIVE_RE.match(trimmed) is not None
        or _QUOTED_RE.match(trimmed) is not None
    )


def _in_block(view: LinePeeker, offset: int, base: int) -> bool:
    line = view.peek(offset)
    return (
        line is not None
        and not is_blank_line(line)
        and not is_pagination(view, offset)
        and get_indentation(line) >= base
    )


class AbnfMatcher:
    name = "abnf"
    priority = 48

    def test(self, ctx: BlockContext) -> bool:
        first = ctx.peek()
        if not is_rule_start(first) or is_pagination(ctx):
            return False
        base = get_indentation(first or "")
        required = 1 if base >= 1 else 2
        evidence = 0
        for offset in range(_LOOKAHEAD + 1):
            if not _in_block(ctx, offset, base):
                break
            if has_grammar_evidence(ctx.peek(offset) or ""):
                evidence += 1
                if evidence >= required:
                    return True
        return False

    def parse(self, ctx: BlockContext) -> Abnf:
        base = get_indentation(ctx.peek() or "")
        lines = [ctx.advance()]
        while _in_block(ctx, 0, base):
            lines.append(ctx.advance())
        return Abnf(lines=tuple(lines))
