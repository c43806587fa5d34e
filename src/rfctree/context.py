"""Per-parse state handed to matchers.

ParseState holds the one-shot flags (Metadata and Title fire at most once).
BlockContext bundles the cursor and the state behind the peek/advance
capability matchers use. Both are created by Parser.parse() and dropped when
it returns; neither is part of the resulting tree.

Thread Safety:
    Scoped to a single parse() call. Not shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rfctree.cursor import LineCursor


@dataclass(slots=True)
class ParseState:
    """Mutable flags scoped to one parse() call.

    Attributes:
        seen_metadata: The header block has been parsed
        seen_title: The document title has been parsed
        metadata_end: Cursor index just past the header block

    """

    seen_metadata: bool = False
    seen_title: bool = False
    metadata_end: int | None = None


@dataclass(slots=True)
class BlockContext:
    """Cursor plus parse state, as seen by a matcher.

    Attributes:
        cursor: The line cursor being consumed
        state: Flags shared by all matchers during this parse

    """

    cursor: LineCursor
    state: ParseState = field(default_factory=ParseState)

    def peek(self, offset: int = 0) -> str | None:
        """Line at the given offset from the cursor, or None."""
        return self.cursor.peek(offset)

    def advance(self) -> str:
        """Consume the current line and return it."""
        return self.cursor.advance()

    def at_end(self) -> bool:
        return self.cursor.is_eol()

    def shifted(self, offset: int) -> LookaheadView:
        """Read-only view whose peek(0) is this context's peek(offset)."""
        return LookaheadView(self, offset)


class LookaheadView:
    """Peek-only window shifted ahead of a BlockContext.

    Used to run a detector "as if" the cursor were a few lines further on,
    for example past a run of blank lines, without moving it.
    """

    __slots__ = ("_context", "_offset")

    def __init__(self, context: BlockContext | LookaheadView, offset: int) -> None:
        self._context = context
        self._offset = offset

    @property
    def state(self) -> ParseState:
        return self._context.state

    def peek(self, offset: int = 0) -> str | None:
        return self._context.peek(self._offset + offset)

    def shifted(self, offset: int) -> LookaheadView:
        return LookaheadView(self, offset)
