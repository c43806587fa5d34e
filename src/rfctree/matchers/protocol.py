"""Matcher protocol for the priority-ordered block dispatcher.

A matcher recognizes one kind of block. The dispatcher calls test() on every
matcher in ascending priority order and commits to the first that succeeds,
then calls its parse().

Contract:
    - test() is pure: it only peeks and never moves the cursor.
    - parse() runs right after a true test() at the same position, consumes
      at least one line, and returns a node whose rendering reproduces
      exactly the lines it consumed.

Thread Safety:
    Matchers must be stateless. All per-parse state lives in the
    BlockContext passed to test() and parse().

Example:
    >>> class RuleMatcher:
    ...     name = "rule"
    ...     priority = 40
    ...
    ...     def test(self, ctx):
    ...         return ctx.peek() == "----"
    ...
    ...     def parse(self, ctx):
    ...         return SectionTitle(lines=(ctx.advance(),))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rfctree.context import BlockContext
    from rfctree.nodes import Node


class LinePeeker(Protocol):
    """Anything that can peek at lines relative to a position."""

    def peek(self, offset: int = 0) -> str | None: ...


@runtime_checkable
class Matcher(Protocol):
    """Protocol for block matchers.

    Attributes:
        name: Unique matcher name, used to disable or replace it
        priority: Lower runs first; ties keep registration order
    """

    name: str
    priority: int

    def test(self, ctx: BlockContext) -> bool:
        """Return True if this matcher claims the block at the cursor."""
        ...

    def parse(self, ctx: BlockContext) -> Node:
        """Consume the block at the cursor and return its node."""
        ...
