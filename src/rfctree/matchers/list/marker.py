"""Bullet marker detection.

Recognized markers, each followed by the content on the same line:

    o  circle          *  star          -  dash
    1.  numbered       (A1)  parenthesized
    [RFC6749]  bracketed reference key

Symbol and bracket markers need at least two spaces before the content;
numbered and parenthesized markers accept one. A bracketed key may also
stand alone on its line, with its content on the deeper lines below.
"""

from __future__ import annotations

import re

from rfctree.matchers.list.types import ItemStart
from rfctree.matchers.toc import is_leader_line
from rfctree.text import get_indentation, is_blank_line

_SYMBOL_RE = re.compile(r"^( *)([o*\-])( {2,})(\S.*)$")
_NUMBER_RE = re.compile(r"^( *)([0-9]+\.)( +)(\S.*)$")
_PARENTHESIZED_RE = re.compile(r"^( *)(\([A-Za-z0-9][A-Za-z0-9.\-]*\))( +)(\S.*)$")
_BRACKETED_RE = re.compile(r"^( *)(\[[^\]]+\])( {2,})(\S.*)$")
_BRACKET_ONLY_RE = re.compile(r"^( *)(\[[^\]]+\])$")

_SYMBOL_STYLES = {"o": "circle", "*": "star", "-": "dash"}

_BULLET_PATTERNS: tuple[tuple[re.Pattern[str], str | None], ...] = (
    (_SYMBOL_RE, None),
    (_NUMBER_RE, "number"),
    (_PARENTHESIZED_RE, "parenthesized"),
    (_BRACKETED_RE, "bracketed"),
)

# Content gap needed after a marker when rendering it back.
_TIGHT_GAP = 1
_DEFAULT_GAP = 2


def min_gap(marker_line: str) -> int:
    """Smallest gap allowed between a marker line and inline content."""
    if marker_line.endswith((".", ")")):
        return _TIGHT_GAP
    return _DEFAULT_GAP


def marker_gap(marker: str, marker_indent: int, content_indent: int) -> int:
    """Gap between the last marker line and inline content.

    Reconstructed from the two columns, never narrower than min_gap().
    """
    last = marker.split("\n")[-1]
    return max(min_gap(last), content_indent - (marker_indent + len(last)))


def match_bullet(line: str | None) -> ItemStart | None:
    """Detect a bullet marker on a single line.

    Dot-leader lines are table of contents entries and never bullets.
    """
    if line is None or is_leader_line(line):
        return None
    for pattern, style in _BULLET_PATTERNS:
        m = pattern.match(line)
        if m is None:
            continue
        indent, marker, gap, content = m.groups()
        return ItemStart(
            kind="bullet",
            style=style or _SYMBOL_STYLES[marker],
            marker=marker,
            marker_indent=len(indent),
            content_indent=len(indent) + len(marker) + len(gap),
            inline_text=content,
        )
    return None


def match_bracket_only(line: str | None, next_line: str | None) -> ItemStart | None:
    """Detect a bracketed key alone on its line.

    Content starts at the next line's column when that line is deeper,
    otherwise two columns past the key.
    """
    if line is None:
        return None
    m = _BRACKET_ONLY_RE.match(line)
    if m is None:
        return None
    indent, marker = len(m.group(1)), m.group(2)
    content_indent = indent + len(marker) + _DEFAULT_GAP
    if next_line is not None and not is_blank_line(next_line):
        next_indent = get_indentation(next_line)
        if next_indent > indent:
            content_indent = next_indent
    return ItemStart(
        kind="bullet",
        style="bracketed",
        marker=marker,
        marker_indent=indent,
        content_indent=content_indent,
    )


def is_bullet_line(line: str | None) -> bool:
    return match_bullet(line) is not None
