"""Table of contents blocks.

Two layouts are recognized. The classic one ends entries with dot leaders
and a page number, wrapping long titles onto deeper lines:

      10.16. Misuse of Access Token to Impersonate Resource
             Owner in Implicit Flow ..................................61

The leaderless one (RFC 9700 and later) is only accepted right after a
"Table of Contents" heading, since without leaders it is indistinguishable
from a numbered list:

    Table of Contents

       1.  Introduction
         1.1.  Structure
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rfctree.matchers.pagination import is_pagination
from rfctree.nodes import TableOfContents, TocEntry
from rfctree.text import get_indentation, is_blank_line

if TYPE_CHECKING:
    from rfctree.context import BlockContext
    from rfctree.matchers.protocol import LinePeeker

LEADER_RE = re.compile(r"\.{2,}\s*[0-9]+\s*$")
_LEADER_PAGE_RE = re.compile(r"(\.{2,})\s*([0-9]+)\s*$")
NUMBERED_START_RE = re.compile(r"^\s*[0-9]+(?:\.[0-9]+)*\.\s+\S")
APPENDIX_START_RE = re.compile(r"^\s*Appendix\s+[A-Za-z]+\.?\s+\S")

TOC_HEADING = "table of contents"
_HEADING_LOOKBACK = 3
_LEADER_LOOKAHEAD = 2


def is_leader_line(line: str | None) -> bool:
    return line is not None and LEADER_RE.search(line) is not None


def is_entry_start(line: str | None) -> bool:
    """Numbered ("1.2.  Title") or appendix ("Appendix A.  Title") entry start."""
    if line is None:
        return False
    return NUMBERED_START_RE.match(line) is not None or APPENDIX_START_RE.match(line) is not None


def follows_toc_heading(view: LinePeeker) -> bool:
    """True if the nearest non-blank line within three lines back is the heading."""
    for back in range(1, _HEADING_LOOKBACK + 1):
        line = view.peek(-back)
        if line is None:
            return False
        if is_blank_line(line):
            continue
        return line.strip().lower() == TOC_HEADING
    return False


def build_entry(lines: list[str]) -> TocEntry:
    """Derive title and page from an entry's physical lines."""
    last = lines[-1]
    page: int | None = None
    match = _LEADER_PAGE_RE.search(last)
    if match is not None:
        last = last[: match.start()]
        page = int(match.group(2))
    parts = [*lines[:-1], last]
    title = " ".join(" ".join(parts).split()) or None
    return TocEntry(raw="\n".join(lines), indent=get_indentation(lines[0]), title=title, page=page)


def _leader_follows(view: LinePeeker) -> bool:
    """A dot-leader line within the next two lines of the same group."""
    for offset in range(1, _LEADER_LOOKAHEAD + 1):
        following = view.peek(offset)
        if following is None or is_blank_line(following):
            return False
        if is_leader_line(following):
            return True
    return False


def starts_toc(view: LinePeeker) -> bool:
    """True if a table of contents block starts at the current line."""
    line = view.peek()
    if line is None or is_blank_line(line):
        return False
    if is_leader_line(line):
        return True
    if not is_entry_start(line):
        return False
    if follows_toc_heading(view) and get_indentation(line) > 0:
        return True
    return _leader_follows(view)


def _is_toc_line(ctx: BlockContext) -> bool:
    line = ctx.peek()
    return line is not None and not is_blank_line(line) and not is_pagination(ctx)


class TableOfContentsMatcher:
    name = "table_of_contents"
    priority = 45

    def test(self, ctx: BlockContext) -> bool:
        return starts_toc(ctx)

    def parse(self, ctx: BlockContext) -> TableOfContents:
        first = ctx.peek() or ""
        leaderless = (
            not is_leader_line(first)
            and not _leader_follows(ctx)
            and follows_toc_heading(ctx)
        )
        if leaderless:
            groups = self._read_leaderless(ctx)
        else:
            groups = self._read_with_leaders(ctx)
        lines = tuple(line for group in groups for line in group)
        return TableOfContents(lines=lines, entries=tuple(build_entry(g) for g in groups))

    def _read_with_leaders(self, ctx: BlockContext) -> list[list[str]]:
        groups: list[list[str]] = []
        while not groups or _is_toc_line(ctx):
            current = ctx.peek() or ""
            if groups and not (is_leader_line(current) or is_entry_start(current)):
                break
            entry = [ctx.advance()]
            if not is_leader_line(current):
                start_indent = get_indentation(current)
                while _is_toc_line(ctx):
                    following = ctx.peek() or ""
                    if is_leader_line(following):
                        entry.append(ctx.advance())
                        break
                    if get_indentation(following) <= start_indent or is_entry_start(following):
                        break
                    entry.append(ctx.advance())
            groups.append(entry)
        return groups

    def _read_leaderless(self, ctx: BlockContext) -> list[list[str]]:
        first_indent = get_indentation(ctx.peek() or "")
        groups: list[list[str]] = [[ctx.advance()]]
        while _is_toc_line(ctx):
            line = ctx.peek() or ""
            indent = get_indentation(line)
            if indent == 0:
                break
            if is_entry_start(line) or indent <= first_indent:
                groups.append([ctx.advance()])
            else:
                groups[-1].append(ctx.advance())
        return groups
