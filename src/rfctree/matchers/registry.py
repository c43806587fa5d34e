"""Matcher registry for the block dispatcher.

The registry holds the matchers the dispatcher consults, pre-sorted by
ascending priority. Matchers with equal priority keep registration order.

Thread Safety:
MatcherRegistry is immutable after creation. Safe to share.
Use MatcherRegistryBuilder for mutable construction.

Example:
    >>> builder = MatcherRegistryBuilder()
    >>> builder.register(BlankLineMatcher()).register(ParagraphMatcher())
    >>> registry = builder.build()
    >>> registry.names
    ('blank_line', 'paragraph')
"""

from __future__ import annotations

from collections.abc import Iterator

from rfctree.errors import MatcherRegistryError
from rfctree.matchers.protocol import Matcher


class MatcherRegistry:
    """Immutable, priority-ordered set of matchers.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_matchers", "_by_name")

    def __init__(self, matchers: tuple[Matcher, ...]) -> None:
        """Initialize registry with matchers already in dispatch order.

        Use MatcherRegistryBuilder to create instances.
        """
        self._matchers = matchers
        self._by_name = {m.name: m for m in matchers}

    @property
    def matchers(self) -> tuple[Matcher, ...]:
        """Matchers in dispatch order."""
        return self._matchers

    @property
    def names(self) -> tuple[str, ...]:
        """Matcher names in dispatch order."""
        return tuple(m.name for m in self._matchers)

    def get(self, name: str) -> Matcher | None:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._matchers)

    def __iter__(self) -> Iterator[Matcher]:
        return iter(self._matchers)


class MatcherRegistryBuilder:
    """Mutable builder for MatcherRegistry.

    Example:
        >>> registry = (
        ...     MatcherRegistryBuilder()
        ...     .register_all(create_default_registry().matchers)
        ...     .register(MyMatcher())
        ...     .build()
        ... )
    """

    __slots__ = ("_matchers", "_names")

    def __init__(self) -> None:
        self._matchers: list[Matcher] = []
        self._names: set[str] = set()

    def register(self, matcher: Matcher) -> MatcherRegistryBuilder:
        """Register a matcher.

        Args:
            matcher: Object implementing the Matcher protocol

        Returns:
            Self for chaining

        Raises:
            MatcherRegistryError: If the matcher lacks a capability or its
                name is already registered
        """
        if not isinstance(matcher, Matcher):
            msg = (
                f"Matcher {type(matcher).__name__} must provide "
                "'name', 'priority', 'test' and 'parse'"
            )
            raise MatcherRegistryError(msg)

        if matcher.name in self._names:
            msg = f"Matcher '{matcher.name}' already registered"
            raise MatcherRegistryError(msg)

        self._names.add(matcher.name)
        self._matchers.append(matcher)
        return self

    def register_all(self, matchers: tuple[Matcher, ...] | list[Matcher]) -> MatcherRegistryBuilder:
        for matcher in matchers:
            self.register(matcher)
        return self

    def build(self) -> MatcherRegistry:
        """Build an immutable registry, stably sorted by priority."""
        return MatcherRegistry(tuple(sorted(self._matchers, key=lambda m: m.priority)))

    def __len__(self) -> int:
        return len(self._matchers)


def _build_default_registry() -> MatcherRegistry:
    from rfctree.matchers.abnf import AbnfMatcher
    from rfctree.matchers.bit_layout import BitLayoutDiagramMatcher
    from rfctree.matchers.figure import FigureMatcher
    from rfctree.matchers.front_matter import MetadataMatcher, TitleMatcher
    from rfctree.matchers.http import HttpRequestMatcher, HttpResponseMatcher
    from rfctree.matchers.list import ListMatcher
    from rfctree.matchers.pagination import (
        BlankLineMatcher,
        PageBreakMatcher,
        PageFooterMatcher,
        PageHeaderMatcher,
    )
    from rfctree.matchers.prose import IndentedBlockMatcher, ParagraphMatcher
    from rfctree.matchers.section_title import SectionTitleMatcher
    from rfctree.matchers.table import TableMatcher
    from rfctree.matchers.toc import TableOfContentsMatcher

    builder = MatcherRegistryBuilder()

    # Front matter and separators
    builder.register(MetadataMatcher())
    builder.register(PageBreakMatcher())
    builder.register(PageFooterMatcher())
    builder.register(PageHeaderMatcher())
    builder.register(BlankLineMatcher())

    # Artwork
    builder.register(BitLayoutDiagramMatcher())
    builder.register(TableMatcher())
    builder.register(FigureMatcher())

    # Structure
    builder.register(TitleMatcher())
    builder.register(ListMatcher())
    builder.register(TableOfContentsMatcher())

    # Protocol elements
    builder.register(HttpRequestMatcher())
    builder.register(HttpResponseMatcher())
    builder.register(AbnfMatcher())

    # Prose
    builder.register(SectionTitleMatcher())
    builder.register(IndentedBlockMatcher())
    builder.register(ParagraphMatcher())

    return builder.build()


# Cached singleton, safe to share since MatcherRegistry is immutable
_DEFAULT_REGISTRY: MatcherRegistry | None = None


def create_default_registry() -> MatcherRegistry:
    """Get the default matcher registry (cached singleton).

    Thread Safety:
        Returns a cached immutable registry. Safe for concurrent access.
    """
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = _build_default_registry()
    return _DEFAULT_REGISTRY
