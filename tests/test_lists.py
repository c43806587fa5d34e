"""Tests for bullet, numbered, parenthesized and bracketed lists."""

from __future__ import annotations

import pytest

from rfctree import (
    BlankLine,
    Document,
    List,
    ListItem,
    PageBreak,
    PageFooter,
    PageHeader,
    Paragraph,
    ParseError,
    parse,
    render,
)
from rfctree.context import BlockContext
from rfctree.cursor import LineCursor
from rfctree.matchers.list import ListMatcher, core, detect_item_start, marker_gap, min_gap


def kinds(doc: Document) -> list[str]:
    return [type(node).__name__ for node in doc.children]


def parse_list(lines: list[str]) -> tuple[bool, List]:
    ctx = BlockContext(cursor=LineCursor(lines))
    matcher = ListMatcher()
    claimed = matcher.test(ctx)
    return claimed, matcher.parse(ctx)


def items_of(node: List) -> list[ListItem]:
    return [entry for entry in node.items if isinstance(entry, ListItem)]


# =============================================================================
# Marker grammar
# =============================================================================


class TestMarkers:
    """Each marker style and its gap rules."""

    def test_circle_bullets(self) -> None:
        claimed, node = parse_list(
            [
                "   o  Response type name: token",
                "   o  Change controller: IETF",
                "   o  Specification document(s): RFC 6749",
            ]
        )
        assert claimed
        assert len(node.items) == 3
        assert node.items[0] == ListItem(
            marker="o",
            marker_indent=3,
            content_indent=6,
            inline=True,
            children=(Paragraph(indent=0, lines=("Response type name: token",)),),
        )
        assert node.items[2].children[0].lines == ("Specification document(s): RFC 6749",)

    def test_star_with_wrapped_line(self) -> None:
        _, node = parse_list(
            [
                "   *  First point starts here and",
                "      continues on the next line.",
                "   *  Second point",
            ]
        )
        first, second = items_of(node)
        assert first.marker == "*"
        assert first.children == (
            Paragraph(
                indent=0,
                lines=("First point starts here and", "continues on the next line."),
            ),
        )
        assert second.children == (Paragraph(indent=0, lines=("Second point",)),)

    def test_dash_bullets(self) -> None:
        _, node = parse_list(["   -  one", "   -  two"])
        assert [item.marker for item in items_of(node)] == ["-", "-"]

    def test_single_space_after_circle_is_not_a_marker(self) -> None:
        ctx = BlockContext(cursor=LineCursor(["   o one", "   o two"]))
        assert not ListMatcher().test(ctx)

    def test_numbered_and_parenthesized_are_separate_lists(self) -> None:
        doc = parse(["", "1. First", "2. Second", "", "   (A)  Apple", "   (B)  Banana", ""])
        assert kinds(doc) == ["BlankLine", "List", "BlankLine", "List", "BlankLine"]
        assert [item.marker for item in doc.children[1].items] == ["1.", "2."]
        assert [item.marker for item in doc.children[3].items] == ["(A)", "(B)"]

    def test_bracketed_reference_key(self) -> None:
        key = "[W3C.REC-html401-19991224]"
        continuation = " " * (3 + len(key) + 2) + "December 1999."
        _, node = parse_list([f"   {key}  HTML 4.01 Specification", continuation])
        (item,) = items_of(node)
        assert item.marker == key
        assert item.content_indent == 31
        assert item.children == (
            Paragraph(indent=0, lines=("HTML 4.01 Specification", "December 1999.")),
        )

    def test_bracketed_key_alone_on_its_line(self) -> None:
        doc = parse(
            [
                "   [W3C.REC-html401-19991224]",
                '              Raggett, D., Le Hors, A., and I. Jacobs, "HTML 4.01',
                '              Specification", World Wide Web Consortium',
                "",
            ]
        )
        assert kinds(doc) == ["List", "BlankLine"]
        (item,) = items_of(doc.children[0])
        assert item.marker_only
        assert not item.inline
        assert item.content_indent == 14
        assert item.children[0].lines[0].startswith("Raggett, D.")
        assert len(item.children[0].lines) == 2

    def test_bracket_with_single_space_is_prose(self) -> None:
        doc = parse(
            [
                "   Prior paragraph text.",
                "",
                "   [RFC6749] already provides robust baseline protection by requiring",
                "",
                "   *  confidentiality of the refresh tokens in transit and storage,",
            ]
        )
        assert kinds(doc) == ["Paragraph", "BlankLine", "Paragraph", "BlankLine", "List"]

    def test_leader_line_is_not_a_bullet(self) -> None:
        ctx = BlockContext(cursor=LineCursor(["   1.  Introduction ......... 4"]))
        assert detect_item_start(ctx, allow_deep=False) is None


class TestMarkerGap:
    """Gap between marker and inline content is recomputed from columns."""

    def test_symbol_gap(self) -> None:
        assert marker_gap("o", 3, 6) == 2

    def test_gap_never_below_minimum(self) -> None:
        assert marker_gap("o", 3, 3) == 2

    def test_wide_gap(self) -> None:
        assert marker_gap("SHA", 3, 17) == 11

    def test_tight_markers(self) -> None:
        assert min_gap("1.") == 1
        assert min_gap("(A)") == 1
        assert min_gap("[RFC6749]") == 2
        assert marker_gap("1.", 0, 3) == 1

    def test_uses_last_marker_line(self) -> None:
        assert marker_gap("Long wrapped\nTerm:", 3, 12) == 4


# =============================================================================
# Item content and boundaries
# =============================================================================


class TestItemContent:
    """Where an item's content ends."""

    def test_second_paragraph_after_one_blank(self) -> None:
        doc = parse(
            [
                "   (A1)  Web attackers that can set up and operate an arbitrary number",
                '          of network endpoints (besides the "honest" ones) including',
                "          browsers and servers.  Web attackers may set up websites that",
                "          are visited by the resource owner, operate their own user",
                "          agents, and participate in the protocol.",
                "",
                "          In particular, web attackers may operate OAuth clients that are",
                "          registered at the authorization server, and they may operate",
                "          their own authorization and resource servers that can be used",
                '          (in parallel to the "honest" ones) by the resource owner and',
                "          other resource owners.",
            ]
        )
        assert kinds(doc) == ["List"]
        (item,) = items_of(doc.children[0])
        assert item.marker == "(A1)"
        assert item.content_indent == 9
        assert [type(child).__name__ for child in item.children] == [
            "Paragraph",
            "BlankLine",
            "Paragraph",
        ]
        second = item.children[2]
        assert second.indent == 1
        assert second.lines[0].startswith("In particular, web attackers")

    def test_narrative_after_list_is_not_absorbed(self) -> None:
        doc = parse(
            [
                "   *  Public clients MUST use PKCE [RFC7636] to this end, as motivated",
                "      in Section 4.5.3.1.",
                "   *  For confidential clients, the use of PKCE [RFC7636] is",
                "      RECOMMENDED, as it provides strong protection against misuse and",
                "      injection of authorization codes as described in Section 4.5.3.1.",
                "      Also, as a side effect, it prevents CSRF even in the presence of",
                "      strong attackers as described in Section 4.7.1.",
                "   *  With additional precautions, described in Section 4.5.3.2,",
                "      confidential OpenID Connect [OpenID.Core] clients MAY use the",
                "      nonce parameter and the respective Claim in the ID Token instead.",
                "",
                "   In any case, the PKCE challenge or OpenID Connect nonce MUST be",
                "   transaction-specific and securely bound to the client and the user",
                "   agent in which the transaction was started.",
            ]
        )
        assert kinds(doc) == ["List", "BlankLine", "Paragraph"]
        assert len(doc.children[0].items) == 3
        last = doc.children[0].items[2]
        assert all("In any case" not in line for line in last.children[0].lines)
        para = doc.children[2]
        assert para.indent == 3
        assert para.lines[0].startswith("In any case")

    def test_trailing_blank_stays_outside(self) -> None:
        doc = parse(
            [
                "   *  Technology has changed.  For example, the way browsers treat",
                "      fragments when redirecting requests has changed, and with it, the",
                "      implicit grant's underlying security model.",
                "",
                "1.1.  Structure",
            ]
        )
        assert kinds(doc) == ["List", "BlankLine", "SectionTitle"]
        (item,) = items_of(doc.children[0])
        assert isinstance(item.children[-1], Paragraph)

    def test_two_blank_lines_end_the_item(self) -> None:
        doc = parse(["   o  First", "", "", "      Not part of the item"])
        assert kinds(doc)[:3] == ["List", "BlankLine", "BlankLine"]
        (item,) = items_of(doc.children[0])
        assert len(item.children) == 1

    def test_parenthetical_mid_sentence_is_continuation(self) -> None:
        _, node = parse_list(
            [
                "   o  Certificates are profiled by the",
                "      (PKIX) working group of the IETF.",
            ]
        )
        (item,) = items_of(node)
        assert item.children == (
            Paragraph(
                indent=0,
                lines=("Certificates are profiled by the", "(PKIX) working group of the IETF."),
            ),
        )


class TestNesting:
    """Deeper item starts open nested lists owned by the parent item."""

    def test_nested_bullets(self) -> None:
        _, node = parse_list(
            [
                "   o  Parent item",
                "      *  Child one",
                "      *  Child two",
                "   o  Sibling",
            ]
        )
        parent, sibling = items_of(node)
        assert sibling.children == (Paragraph(indent=0, lines=("Sibling",)),)
        assert isinstance(parent.children[0], Paragraph)
        nested = parent.children[1]
        assert isinstance(nested, List)
        assert [item.marker for item in items_of(nested)] == ["*", "*"]
        assert items_of(nested)[0].marker_indent == 6
        assert items_of(nested)[0].content_indent == 9

    def test_different_column_does_not_continue_list(self) -> None:
        doc = parse(["   o  First", " o  Elsewhere"])
        assert kinds(doc) == ["List", "List"]


# =============================================================================
# Pagination
# =============================================================================


PAGINATED_LIST = [
    "   o  First item text",
    "",
    "Hardt                        Standards Track                   [Page 27]",
    "\f",
    "RFC 6749                        OAuth 2.0                   October 2012",
    "",
    "   o  Second item text",
]


class TestPagination:
    """Page boundaries are threaded through a list, never split it."""

    def test_page_break_between_items(self) -> None:
        doc = parse(PAGINATED_LIST)
        assert kinds(doc) == ["List"]
        assert [type(entry).__name__ for entry in doc.children[0].items] == [
            "ListItem",
            "BlankLine",
            "PageFooter",
            "PageBreak",
            "PageHeader",
            "BlankLine",
            "ListItem",
        ]
        assert render(doc) == PAGINATED_LIST

    def test_page_break_inside_item(self) -> None:
        lines = [
            "   o  First item text that wraps",
            "Hardt                        Standards Track                   [Page 27]",
            "\f",
            "RFC 6749                        OAuth 2.0                   October 2012",
            "      and continues after the break",
            "   o  Second",
        ]
        doc = parse(lines)
        assert kinds(doc) == ["List"]
        first = items_of(doc.children[0])[0]
        assert first.children == (
            Paragraph(indent=0, lines=("First item text that wraps",)),
            PageFooter(text=lines[1]),
            PageBreak(),
            PageHeader(text=lines[3]),
            Paragraph(indent=0, lines=("and continues after the break",)),
        )
        assert render(doc) == lines

    def test_blank_entries_between_items(self) -> None:
        doc = parse(["   o  One", "", "   o  Two"])
        assert doc.children[0].items[1] == BlankLine()

    def test_page_break_with_trailing_space_between_items(self) -> None:
        lines = [*PAGINATED_LIST]
        lines[3] = "\f "
        doc = parse(lines)
        assert kinds(doc) == ["List"]
        assert doc.children[0].items[3] == PageBreak(text="\f ")
        assert len(items_of(doc.children[0])) == 2
        assert render(doc) == lines


class TestNestingAfterBlankLine:
    """A sub-list separated from its parent's text by a blank line."""

    LINES = [
        "   o  The request includes:",
        "",
        "      *  a client identifier",
        "",
        "      *  a redirection URI",
        "",
        "   o  Next item",
    ]

    def test_sub_list_belongs_to_item(self) -> None:
        doc = parse(self.LINES)
        assert kinds(doc) == ["List"]
        outer = doc.children[0]
        assert [type(entry).__name__ for entry in outer.items] == [
            "ListItem",
            "BlankLine",
            "ListItem",
        ]
        first, last = items_of(outer)
        assert [type(child).__name__ for child in first.children] == [
            "Paragraph",
            "BlankLine",
            "List",
        ]
        nested = first.children[2]
        assert [item.marker for item in items_of(nested)] == ["*", "*"]
        assert [type(entry).__name__ for entry in nested.items] == [
            "ListItem",
            "BlankLine",
            "ListItem",
        ]
        assert items_of(nested)[1].children == (Paragraph(indent=0, lines=("a redirection URI",)),)
        assert last.children == (Paragraph(indent=0, lines=("Next item",)),)

    def test_round_trip(self) -> None:
        assert render(parse(self.LINES)) == self.LINES

    def test_deeper_sub_list_after_blank_line(self) -> None:
        lines = ["   o  Parent", "", "        -  child", "   o  Sibling"]
        doc = parse(lines)
        assert kinds(doc) == ["List"]
        parent = items_of(doc.children[0])[0]
        assert isinstance(parent.children[-1], List)
        assert render(doc) == lines


class TestNumberedSubList:
    """Numbered, parenthesized and bracketed markers under an item's text."""

    def test_numbered_steps_nest(self) -> None:
        lines = ["   o  Steps:", "      1.  first", "      2.  second", "   o  Next item"]
        _, node = parse_list(lines)
        steps, following = items_of(node)
        assert steps.children[0] == Paragraph(indent=0, lines=("Steps:",))
        nested = steps.children[1]
        assert isinstance(nested, List)
        assert [item.marker for item in items_of(nested)] == ["1.", "2."]
        assert items_of(nested)[0].content_indent == 10
        assert following.marker == "o"
        assert render(parse(lines)) == lines

    def test_parenthesized_with_wide_gap_nests(self) -> None:
        lines = ["   o  Roles:", "      (A)  Client", "      (B)  Server"]
        _, node = parse_list(lines)
        (item,) = items_of(node)
        assert isinstance(item.children[1], List)
        assert [entry.marker for entry in items_of(item.children[1])] == ["(A)", "(B)"]

    def test_single_space_number_is_continuation(self) -> None:
        _, node = parse_list(["   o  Published in", "      2. edition of the guide"])
        (item,) = items_of(node)
        assert item.children == (
            Paragraph(indent=0, lines=("Published in", "2. edition of the guide")),
        )


class TestParseListErrors:
    """parse_list requires an item start at the cursor."""

    def test_no_item_start(self) -> None:
        ctx = BlockContext(cursor=LineCursor(["   Plain prose line."], source_file="rfc1.txt"))
        with pytest.raises(ParseError, match="No list item starts here") as exc_info:
            core.parse_list(ctx, allow_deep=False)
        assert exc_info.value.lineno == 1
        assert exc_info.value.source_file == "rfc1.txt"
        assert ctx.cursor.index == 0
