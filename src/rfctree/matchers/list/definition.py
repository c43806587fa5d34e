"""Definition-list detection.

RFCs define terms in three layouts. The term may share its line with the
definition, separated by two or more spaces:

    SHA-1    Secure Hash Algorithm 1, producing a 160-bit digest

It may sit alone above a deeper definition:

    client
       An application making protected resource requests

Or a term ending in a colon may be followed by the start of the definition
on the same line, with the rest wrapped below:

    Token manufacture/modification:  An attacker may generate a bogus
       token or modify the token contents

A term that does not fit on one line wraps onto a second line at the same
column before the deeper definition begins.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rfctree.matchers.abnf import is_rule_start
from rfctree.matchers.list.marker import is_bullet_line, marker_gap
from rfctree.matchers.list.types import ItemStart
from rfctree.matchers.toc import is_entry_start, is_leader_line
from rfctree.text import get_indentation, is_blank_line, slice_line

if TYPE_CHECKING:
    from rfctree.matchers.protocol import LinePeeker

_INLINE_RE = re.compile(r"^(\S.*?)( {2,})(\S.*)$")
_TERM_TOKEN_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\-]*$")
_COLON_TERM_RE = re.compile(r"^(.*?:)( {2,})(\S.*)$")
_URL_RE = re.compile(r"https?://")
_COMMAND_RE = re.compile(r"^\s*[A-Z][A-Z-]{2,}\s+/")

_MIN_TERM_INDENT = 2
_MIN_DEFINITION_DEPTH = 2
_SHALLOW_TERM_INDENT = 4
_SHALLOW_DEFINITION_DEPTH = 4


def _rejects_as_term(line: str) -> bool:
    """Shapes that look like prose, code or other blocks rather than terms."""
    if is_rule_start(line) or is_entry_start(line) or is_leader_line(line):
        return True
    if _URL_RE.search(line) or _COMMAND_RE.match(line):
        return True
    return is_bullet_line(line)


def split_inline_definition(line: str | None) -> tuple[int, str, str, str] | None:
    """Split ``term  definition`` on one line.

    Returns (indent, term, gap, text) or None. The term is a single token
    that is neither a number nor a sentence end.
    """
    if line is None or is_blank_line(line):
        return None
    indent = get_indentation(line)
    if indent < _MIN_TERM_INDENT or _rejects_as_term(line):
        return None
    m = _INLINE_RE.match(line[indent:])
    if m is None:
        return None
    term, gap, text = m.groups()
    if term.isdigit() or term.endswith(".") or _TERM_TOKEN_RE.match(term) is None:
        return None
    return indent, term, gap, text


def is_term_line(line: str | None, next_line: str | None, *, allow_deep: bool) -> bool:
    """True if ``line`` is a term whose definition starts on ``next_line``.

    Deeply indented terms are only accepted inside an enclosing item
    (``allow_deep``) unless the definition is at least four columns deeper.
    """
    if line is None or next_line is None:
        return False
    if is_blank_line(line) or is_blank_line(next_line):
        return False
    indent = get_indentation(line)
    next_indent = get_indentation(next_line)
    if indent < _MIN_TERM_INDENT:
        return False
    if not allow_deep and indent >= _SHALLOW_TERM_INDENT:
        if next_indent < indent + _SHALLOW_DEFINITION_DEPTH:
            return False
    if next_indent < indent + _MIN_DEFINITION_DEPTH:
        return False
    if _rejects_as_term(line):
        return False
    trimmed = line.strip()
    if trimmed in ("{", "}") or trimmed.endswith(("(", "{", ".", ";")):
        return False
    return not (trimmed.endswith(":") and "." in trimmed[:-1])


def _inline_start(view: LinePeeker) -> ItemStart | None:
    split = split_inline_definition(view.peek())
    if split is None:
        return None
    indent, term, gap, text = split
    content_indent = indent + len(term) + len(gap)
    following = view.peek(1)
    if following is not None and not is_blank_line(following):
        following_indent = get_indentation(following)
        aligned = following_indent == content_indent
        sibling = following_indent == indent and split_inline_definition(following) is not None
        if not (aligned or sibling):
            return None
    return ItemStart(
        kind="definition",
        style="definition",
        marker=term,
        marker_indent=indent,
        content_indent=content_indent,
        inline_text=text,
    )


def _term_start(marker_lines: list[str], indent: int, content_indent: int) -> ItemStart:
    """Build the start for a term above its definition.

    A last term line of the form ``Term:  text`` keeps ``text`` inline when
    its gap is the one the renderer would reproduce.
    """
    last = marker_lines[-1]
    m = _COLON_TERM_RE.match(last)
    if m is not None:
        term, gap, text = m.groups()
        marker = "\n".join([*marker_lines[:-1], term])
        if len(gap) == marker_gap(marker, indent, content_indent):
            return ItemStart(
                kind="definition",
                style="definition",
                marker=marker,
                marker_indent=indent,
                content_indent=content_indent,
                inline_text=text,
                line_count=len(marker_lines),
            )
    return ItemStart(
        kind="definition",
        style="definition",
        marker="\n".join(marker_lines),
        marker_indent=indent,
        content_indent=content_indent,
        line_count=len(marker_lines),
    )


def match_definition(view: LinePeeker, *, allow_deep: bool) -> ItemStart | None:
    """Detect a definition item starting at the current line."""
    inline = _inline_start(view)
    if inline is not None:
        return inline

    first, second, third = view.peek(), view.peek(1), view.peek(2)
    if first is None or is_blank_line(first):
        return None
    indent = get_indentation(first)

    if second is not None and is_term_line(first, second, allow_deep=allow_deep):
        return _term_start([slice_line(first, indent)], indent, get_indentation(second))

    # Term wrapped onto a second line at the same column.
    if (
        second is not None
        and indent >= _MIN_TERM_INDENT
        and get_indentation(second) == indent
        and not _rejects_as_term(first)
        and not first.rstrip().endswith((".", ";", ":"))
        and third is not None
        and is_term_line(second, third, allow_deep=allow_deep)
    ):
        return _term_start(
            [slice_line(first, indent), slice_line(second, indent)],
            indent,
            get_indentation(third),
        )
    return None
