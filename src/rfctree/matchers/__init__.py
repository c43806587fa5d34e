"""Block matchers for the priority-ordered dispatcher.

One module per block family:
- front_matter: Metadata, Title
- pagination: PageBreak, PageFooter, PageHeader, BlankLine
- figure, table, bit_layout: ASCII artwork
- list: unified bullet and definition lists (subpackage)
- toc: Table of contents
- http: HTTP request and response examples
- abnf: ABNF grammar
- section_title, prose: SectionTitle, IndentedBlock, Paragraph

"""

from rfctree.matchers.protocol import LinePeeker, Matcher
from rfctree.matchers.registry import (
    MatcherRegistry,
    MatcherRegistryBuilder,
    create_default_registry,
)

__all__ = [
    "LinePeeker",
    "Matcher",
    "MatcherRegistry",
    "MatcherRegistryBuilder",
    "create_default_registry",
]
