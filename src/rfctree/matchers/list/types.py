"""Type definitions for list parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

ItemKind: TypeAlias = Literal["bullet", "definition"]


@dataclass(frozen=True, slots=True)
class ItemStart:
    """A detected list item start, before anything is consumed.

    Attributes:
        kind: Bullet-style marker or definition term
        style: Marker family; items of one list share it
            ("circle", "star", "dash", "number", "parenthesized",
            "bracketed" or "definition")
        marker: Marker text without indentation; a wrapped term keeps its
            two lines joined by a newline
        marker_indent: Column of the marker
        content_indent: Column where content and continuation lines start
        inline_text: Content sharing the marker's physical line, if any
        line_count: Physical lines taken by the marker (1 or 2)

    """

    kind: ItemKind
    style: str
    marker: str
    marker_indent: int
    content_indent: int
    inline_text: str | None = None
    line_count: int = 1

    @property
    def marker_only(self) -> bool:
        return self.inline_text is None

    def continues(self, first: ItemStart) -> bool:
        """True if this item can follow ``first`` in the same list."""
        return self.style == first.style and self.marker_indent == first.marker_indent
