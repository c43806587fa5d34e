"""Line-level helpers shared by matchers and renderers.

Indentation is always the count of leading space characters. Tabs and other
whitespace are content, so indentation math never disagrees with slicing.

Example:
    >>> from rfctree.text import get_common_indentation, slice_line
    >>> get_common_indentation(["   a", "     b", ""])
    3
    >>> slice_line("     b", 3)
    '  b'
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def is_blank_line(line: str | None) -> bool:
    """True for an empty or space-only line. None is not blank.

    Tabs, form feeds and other whitespace make a line content, so it is kept
    verbatim.
    """
    if line is None:
        return False
    return line.strip(" ") == ""


def get_indentation(line: str) -> int:
    """Count leading space characters."""
    return len(line) - len(line.lstrip(" "))


def get_common_indentation(lines: Iterable[str]) -> int:
    """Minimum indentation over the non-blank lines of a group.

    Returns 0 when the group has no non-blank line.
    """
    indents = [get_indentation(line) for line in lines if not is_blank_line(line)]
    return min(indents) if indents else 0


def slice_line(line: str, column: int) -> str:
    """Drop up to ``column`` leading spaces from ``line``.

    Never removes non-space characters, so slicing a line shallower than
    ``column`` only strips the spaces it actually has.
    """
    if column <= 0:
        return line
    return line[min(column, get_indentation(line)) :]


def strip_common_indent(lines: Sequence[str]) -> tuple[int, tuple[str, ...]]:
    """Split a group into its common indentation and the sliced lines.

    Blank lines are stored as empty strings.
    """
    indent = get_common_indentation(lines)
    sliced = tuple("" if is_blank_line(line) else slice_line(line, indent) for line in lines)
    return indent, sliced


def apply_indent(lines: Iterable[str], indent: int) -> list[str]:
    """Prefix every non-empty line with ``indent`` spaces.

    Empty lines stay empty so blank output never carries trailing whitespace.
    """
    prefix = " " * indent
    return [f"{prefix}{line}" if line else "" for line in lines]
