"""Forward-consuming cursor over a sequence of lines.

Matchers read through peek() with any offset, including negative offsets to
inspect lines already consumed, and consume through advance(). Peeking
outside the line window returns None. Advancing past the end raises
CursorError: it means a matcher consumed more than it tested for.

Thread Safety:
    A cursor belongs to exactly one parse() call. Not for concurrent use.

Example:
    >>> cursor = LineCursor(["a", "b"])
    >>> cursor.peek(1)
    'b'
    >>> cursor.advance()
    'a'
    >>> cursor.peek(-1)
    'a'
"""

from __future__ import annotations

from collections.abc import Sequence

from rfctree.errors import CursorError
from rfctree.location import SourceLocation


class LineCursor:
    """Read-only, bidirectional-peek view over lines with a single write head."""

    __slots__ = ("_lines", "_index", "_source_file")

    def __init__(self, lines: Sequence[str], source_file: str | None = None) -> None:
        self._lines = tuple(lines)
        self._index = 0
        self._source_file = source_file

    @property
    def index(self) -> int:
        """Zero-based index of the current (next unconsumed) line."""
        return self._index

    @property
    def source_file(self) -> str | None:
        return self._source_file

    def __len__(self) -> int:
        return len(self._lines)

    def is_eol(self) -> bool:
        """True once every line has been consumed."""
        return self._index >= len(self._lines)

    def peek(self, offset: int = 0) -> str | None:
        """Line at ``index + offset``, or None outside ``[0, len)``."""
        position = self._index + offset
        if position < 0 or position >= len(self._lines):
            return None
        return self._lines[position]

    def advance(self) -> str:
        """Consume and return the current line.

        Raises:
            CursorError: If every line has already been consumed.
        """
        if self._index >= len(self._lines):
            raise CursorError(
                "advance() past end of input",
                lineno=len(self._lines) + 1,
                source_file=self._source_file,
            )
        line = self._lines[self._index]
        self._index += 1
        return line

    def consumed(self) -> tuple[str, ...]:
        """Lines already consumed, in order."""
        return self._lines[: self._index]

    def remaining(self) -> tuple[str, ...]:
        """Lines not yet consumed, in order."""
        return self._lines[self._index :]

    def span(self, start: int) -> SourceLocation:
        """Location of the lines consumed since index ``start``.

        Raises:
            CursorError: If nothing was consumed since ``start``.
        """
        if self._index <= start:
            raise CursorError(
                "span() over no consumed lines",
                lineno=start + 1,
                source_file=self._source_file,
            )
        return SourceLocation(
            lineno=start + 1,
            end_lineno=self._index,
            source_file=self._source_file,
        )
