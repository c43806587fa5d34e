"""Blank-line and page-boundary handling inside and between list items.

A run of separators (blank lines and pagination) is looked at as a whole:
the decision depends on what the first content line after the run is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from rfctree.matchers.pagination import is_pagination, read_pagination, skip_blank_and_pagination
from rfctree.nodes import BlankLine, PageBreak, PageFooter, PageHeader
from rfctree.text import get_indentation

if TYPE_CHECKING:
    from rfctree.context import BlockContext
    from rfctree.matchers.protocol import LinePeeker

Separator: TypeAlias = BlankLine | PageFooter | PageBreak | PageHeader


@dataclass(frozen=True, slots=True)
class SeparatorRun:
    """Separators starting at the cursor.

    Attributes:
        length: Lines in the run
        paginated: The run crosses a page boundary
        next_line: First content line after the run, or None at end of input

    """

    length: int
    paginated: bool
    next_line: str | None

    @property
    def next_indent(self) -> int | None:
        if self.next_line is None:
            return None
        return get_indentation(self.next_line)


def scan_separators(view: LinePeeker) -> SeparatorRun:
    length = skip_blank_and_pagination(view)
    paginated = any(is_pagination(view, offset) for offset in range(length))
    return SeparatorRun(length=length, paginated=paginated, next_line=view.peek(length))


def continues_item(run: SeparatorRun, content_indent: int) -> bool:
    """True if the item's content resumes after the run.

    Only a single blank line may separate paragraphs of one item; a page
    boundary may come with any number of blank lines around it.
    """
    indent = run.next_indent
    if indent is None or indent < content_indent:
        return False
    return run.paginated or run.length == 1


def take_separators(ctx: BlockContext, run: SeparatorRun) -> list[Separator]:
    """Consume the run, one node per line."""
    nodes: list[Separator] = []
    for _ in range(run.length):
        if is_pagination(ctx):
            nodes.append(read_pagination(ctx))
        else:
            ctx.advance()
            nodes.append(BlankLine())
    return nodes
