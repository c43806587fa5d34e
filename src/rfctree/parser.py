"""Priority-ordered block dispatcher producing a Document.

At each cursor position the dispatcher asks every matcher, in ascending
priority order, whether it claims the block starting there, and lets the
first one that does consume it. Paragraph accepts any non-blank line and
BlankLine any blank one, so every line ends up in some node.

Architecture:
- `rfctree.matchers`: one module per block family, plus the registry
- `rfctree.context`: cursor and per-parse state handed to matchers
- `rfctree.config`: which matchers are active (ContextVar)

Thread Safety:
- Parser instances hold only an immutable registry; each parse() call gets
  its own cursor and state, so one Parser can be shared
- The resulting tree is immutable (frozen dataclasses)

Source Locations:
- Every top-level block, list and list item records the 1-indexed line range
  it was parsed from in ``location``; equality ignores it

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from rfctree.config import ParseConfig, get_parse_config
from rfctree.context import BlockContext, ParseState
from rfctree.cursor import LineCursor
from rfctree.errors import ParseError
from rfctree.matchers.registry import (
    MatcherRegistry,
    MatcherRegistryBuilder,
    create_default_registry,
)
from rfctree.nodes import Block, Document, Paragraph
from rfctree.utils.logger import get_logger

logger = get_logger(__name__)


def _build_registry(config: ParseConfig) -> MatcherRegistry:
    default = create_default_registry()
    if not config.extra_matchers and not config.disabled_matchers:
        return default
    unknown = config.disabled_matchers - set(default.names)
    if unknown:
        logger.warning("Ignoring unknown disabled matchers: %s", ", ".join(sorted(unknown)))
    builder = MatcherRegistryBuilder()
    builder.register_all([m for m in default.matchers if m.name not in config.disabled_matchers])
    builder.register_all(config.extra_matchers)
    return builder.build()


class Parser:
    """Block dispatcher for paginated plain-text RFCs.

    Usage:
        >>> parser = Parser()
        >>> doc = parser.parse(["Abstract", "", "   Some text."])
        >>> [type(n).__name__ for n in doc.children]
        ['SectionTitle', 'BlankLine', 'Paragraph']

    Configuration:
        Uses ``config`` when given, otherwise the ParseConfig active in the
        current context at construction time. The matcher registry is built
        once here and reused by every parse() call.

    """

    __slots__ = ("_config", "_registry")

    def __init__(self, config: ParseConfig | None = None) -> None:
        self._config = config if config is not None else get_parse_config()
        self._registry = _build_registry(self._config)

    @property
    def config(self) -> ParseConfig:
        return self._config

    @property
    def registry(self) -> MatcherRegistry:
        return self._registry

    def parse(self, lines: Iterable[str]) -> Document:
        """Parse already-split lines into a Document.

        Raises:
            ParseError: If a matcher claims a block but consumes nothing
        """
        cursor = LineCursor(list(lines), source_file=self._config.source_file)
        ctx = BlockContext(cursor=cursor, state=ParseState())
        children: list[Block] = []

        while not cursor.is_eol():
            children.append(self._parse_block(ctx))

        location = cursor.span(0) if len(cursor) else None
        return Document(children=tuple(children), location=location)

    def _parse_block(self, ctx: BlockContext) -> Block:
        start = ctx.cursor.index
        for matcher in self._registry.matchers:
            if not matcher.test(ctx):
                continue
            node = matcher.parse(ctx)
            end = ctx.cursor.index
            if end == start:
                raise ParseError(
                    f"Matcher '{matcher.name}' consumed no lines",
                    lineno=start + 1,
                    source_file=self._config.source_file,
                )
            logger.debug("%s claimed lines %d-%d", matcher.name, start + 1, end)
            if node.location is None:
                node = replace(node, location=ctx.cursor.span(start))
            return node  # type: ignore[return-value]

        # Only reachable with a custom matcher set that leaves a line unclaimed.
        logger.warning("No matcher claimed line %d; keeping it as a paragraph", start + 1)
        line = ctx.advance()
        return Paragraph(indent=0, lines=(line,), location=ctx.cursor.span(start))


def parse(lines: Iterable[str], *, config: ParseConfig | None = None) -> Document:
    """Parse already-split lines into a Document.

    Args:
        lines: Ordered lines without line terminators
        config: Overrides the ambient ParseConfig for this call

    Example:
        >>> doc = parse(["   o  First", "   o  Second"])
        >>> doc.children[0].items[1].marker
        'o'
    """
    return Parser(config).parse(lines)


def parse_text(text: str, *, config: ParseConfig | None = None) -> Document:
    """Split text on newlines and parse it.

    Line terminators other than a bare newline are the caller's concern.
    """
    return parse(text.split("\n"), config=config)
