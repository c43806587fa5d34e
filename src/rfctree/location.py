"""Source line ranges for parsed nodes.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Lines a node was parsed from.

    Both line numbers are 1-indexed and inclusive.

    Attributes:
        lineno: First line of the node
        end_lineno: Last line of the node
        source_file: Source file path (optional)

    Examples:
        >>> str(SourceLocation(3, 5))
        '3-5'
        >>> str(SourceLocation(7, 7, "rfc6749.txt"))
        'rfc6749.txt:7'

    """

    lineno: int
    end_lineno: int
    source_file: str | None = None

    @property
    def line_count(self) -> int:
        return self.end_lineno - self.lineno + 1

    def __str__(self) -> str:
        """Format as "file:start-end", "start-end" or "start" for one line."""
        lines = str(self.lineno)
        if self.end_lineno != self.lineno:
            lines = f"{lines}-{self.end_lineno}"
        if self.source_file:
            return f"{self.source_file}:{lines}"
        return lines

