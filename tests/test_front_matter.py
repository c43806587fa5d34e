"""Tests for the header block and the document title."""

from __future__ import annotations

from rfctree import Document, Metadata, Title, parse, render
from rfctree.context import BlockContext, ParseState
from rfctree.cursor import LineCursor
from rfctree.matchers.front_matter import MetadataMatcher, TitleMatcher


def kinds(doc: Document) -> list[str]:
    return [type(node).__name__ for node in doc.children]


HEADER = [
    "Internet Engineering Task Force (IETF)                     D. Hardt, Ed.",
    "Request for Comments: 6749                                     Microsoft",
    "Obsoletes: 5849                                            October 2012",
    "Category: Standards Track",
    "ISSN: 2070-1721",
]

TITLE = "                 The OAuth 2.0 Authorization Framework"


class TestMetadataMatcher:
    """The header block is only recognized at the top of the document."""

    def test_claims_header_block(self) -> None:
        ctx = BlockContext(cursor=LineCursor([*HEADER, "", TITLE]))
        matcher = MetadataMatcher()
        assert matcher.test(ctx)
        assert matcher.parse(ctx) == Metadata(lines=tuple(HEADER))
        assert ctx.state.seen_metadata
        assert ctx.state.metadata_end == len(HEADER)

    def test_phrase_further_down_the_block(self) -> None:
        lines = ["Some Author", "Some Organization", "Network Working Group"]
        ctx = BlockContext(cursor=LineCursor(lines))
        assert MetadataMatcher().test(ctx)

    def test_phrase_after_blank_line(self) -> None:
        ctx = BlockContext(cursor=LineCursor(["Some heading", "", "Category: Informational"]))
        assert not MetadataMatcher().test(ctx)

    def test_fires_once(self) -> None:
        ctx = BlockContext(cursor=LineCursor(HEADER), state=ParseState(seen_metadata=True))
        assert not MetadataMatcher().test(ctx)

    def test_not_after_content(self) -> None:
        doc = parse(["Abstract", "", "Network Working Group"])
        assert kinds(doc) == ["SectionTitle", "BlankLine", "SectionTitle"]


class TestTitleMatcher:
    """The title follows the header block, separated only by blank lines."""

    def test_claims_indented_run(self) -> None:
        ctx = BlockContext(
            cursor=LineCursor(["   A Title", "   Wrapped", ""]),
            state=ParseState(seen_metadata=True, metadata_end=0),
        )
        matcher = TitleMatcher()
        assert matcher.test(ctx)
        assert matcher.parse(ctx) == Title(indent=3, lines=("A Title", "Wrapped"))
        assert ctx.state.seen_title

    def test_requires_metadata(self) -> None:
        ctx = BlockContext(cursor=LineCursor(["   A Title"]))
        assert not TitleMatcher().test(ctx)

    def test_requires_indentation(self) -> None:
        ctx = BlockContext(
            cursor=LineCursor(["A Title"]),
            state=ParseState(seen_metadata=True, metadata_end=0),
        )
        assert not TitleMatcher().test(ctx)

    def test_fires_once(self) -> None:
        ctx = BlockContext(
            cursor=LineCursor(["   A Title"]),
            state=ParseState(seen_metadata=True, seen_title=True, metadata_end=0),
        )
        assert not TitleMatcher().test(ctx)

    def test_without_metadata_is_an_indented_block(self) -> None:
        doc = parse(["", "      Centered Title"])
        assert kinds(doc) == ["BlankLine", "IndentedBlock"]


class TestFrontMatter:
    """A realistic document opening."""

    def test_header_title_and_headings(self) -> None:
        lines = [
            "",
            *HEADER,
            "",
            TITLE,
            "",
            "Abstract",
            "",
            "Status of This Memo",
        ]
        doc = parse(lines)
        assert kinds(doc) == [
            "BlankLine",
            "Metadata",
            "BlankLine",
            "Title",
            "BlankLine",
            "SectionTitle",
            "BlankLine",
            "SectionTitle",
        ]
        assert doc.children[3] == Title(
            indent=17, lines=("The OAuth 2.0 Authorization Framework",)
        )
        assert render(doc) == lines

    def test_content_between_header_and_indented_text(self) -> None:
        doc = parse([*HEADER, "", "Abstract", "", "   Indented prose."])
        assert kinds(doc) == ["Metadata", "BlankLine", "SectionTitle", "BlankLine", "Paragraph"]

    def test_second_indented_run_is_not_a_title(self) -> None:
        doc = parse([*HEADER, "", TITLE, "", "   Indented prose."])
        assert kinds(doc) == ["Metadata", "BlankLine", "Title", "BlankLine", "Paragraph"]
