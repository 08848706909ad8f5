"""Tests for docbot.docs.builder — assembling a Document into pages."""

import dataclasses

import pytest

from docbot.docs.builder import MAIN_LABEL, UNTITLED_LISTING_LABEL, build_documentation
from docbot.docs.html import run_to_plain
from docbot.docs.model import (
    Bold,
    DescriptionSection,
    Document,
    ImageRef,
    ItemRow,
    Listing,
    Literal,
    Monospaced,
    TextBlock,
    styled,
)
from docbot.docs.pages import NOOP_PAYLOAD, GroupSwitch, PageJump, parse_callback

BASE = "https://docs.rs/serde/latest/serde/"
TITLE = [Literal("Crate serde")]


def para(n: int, char: str = "x") -> TextBlock:
    return TextBlock([Literal(char * n)])


def listing(name: str, rows: int = 2) -> Listing:
    return Listing(
        heading=[Literal(name)],
        rows=[ItemRow(name=[Literal(f"{name}{i}")], summary=[Literal("summary")]) for i in range(rows)],
    )


def labels(row):
    return [b.text for b in row]


class TestScenarios:
    def test_single_short_section(self):
        """One section of short paragraphs and no listings is one bare page."""
        doc = Document(
            title=TITLE,
            description=[DescriptionSection(heading=None, contents=[para(20), para(20), para(20)])],
        )
        documentation = build_documentation(doc, BASE)
        assert len(documentation) == 1
        page = documentation.pages[0]
        assert page.page_keyboard is None
        assert page.additionals == ()
        assert page.build_keyboard(0) is None

    def test_two_pages_with_navigation(self):
        doc = Document(
            title=TITLE,
            description=[DescriptionSection(heading=None, contents=[para(450, "a"), para(450, "b"), para(450, "c")])],
        )
        documentation = build_documentation(doc, BASE)
        assert len(documentation) == 2
        first, second = documentation.pages
        assert "a" * 450 in first.text and "b" * 450 in first.text
        assert second.text == "Crate serde\n\n" + "c" * 450
        assert "🏠 1 / 2" in labels(first.page_keyboard)
        assert "🏠 2 / 2" in labels(second.page_keyboard)

    def test_four_listings_grouped_three_and_one(self):
        doc = Document(
            title=TITLE,
            description=[DescriptionSection(heading=None, contents=[para(600), para(600)])],
            listings=[listing(name) for name in ("Modules", "Macros", "Structs", "Traits")],
        )
        documentation = build_documentation(doc, BASE)
        lead = documentation.pages[:2]
        assert all(p.page_keyboard is not None for p in lead)

        groups = lead[0].additionals
        assert lead[1].additionals == groups
        assert len(groups) == 2
        assert [labels(r) for r in groups[0][:3]] == [["Modules"], ["Macros"], ["Structs"]]
        assert [parse_callback(b.callback_data) for b in groups[0][3]] == [GroupSwitch(1)]
        assert labels(groups[1][0]) == ["Traits"]
        assert [parse_callback(b.callback_data) for b in groups[1][1]] == [GroupSwitch(0)]

        # jump links land on the first page of each listing
        for group in groups:
            for row in group:
                action = parse_callback(row[0].callback_data)
                if isinstance(action, PageJump):
                    target = documentation.get(action.index)
                    assert target.text.startswith(row[0].text + "\n\n")


class TestLeadRun:
    def test_declaration_page_precedes_description(self):
        doc = Document(
            title=TITLE,
            declaration=styled(Monospaced(), Literal("pub struct Value")),
            description=[DescriptionSection(heading=None, contents=[para(10)])],
        )
        documentation = build_documentation(doc, BASE)
        assert len(documentation) == 2
        assert documentation.pages[0].text == "Crate serde\n\n<code>pub struct Value</code>"
        assert documentation.pages[1].text == "Crate serde\n\n" + "x" * 10
        # both belong to the lead run and share one navigation trail
        assert "🏠 2 / 2" in labels(documentation.pages[1].page_keyboard)

    def test_title_only_document(self):
        documentation = build_documentation(Document(title=TITLE), BASE)
        assert len(documentation) == 1
        assert documentation.pages[0].text == "Crate serde"

    def test_section_heading_used_as_title(self):
        doc = Document(
            title=TITLE,
            description=[
                DescriptionSection(heading=None, contents=[para(5)]),
                DescriptionSection(heading=[Literal("Examples")], contents=[para(5)]),
            ],
        )
        documentation = build_documentation(doc, BASE)
        assert documentation.pages[1].text.startswith("Examples\n\n")


class TestListingRuns:
    def test_listing_pages_link_back_to_main(self):
        doc = Document(title=TITLE, listings=[listing("Structs", rows=30)])
        documentation = build_documentation(doc, BASE, limit=200)
        listing_pages = documentation.pages[1:]
        assert len(listing_pages) > 1
        for page in listing_pages:
            assert len(page.additionals) == 1
            (row,) = page.additionals[0]
            assert row[0].text == MAIN_LABEL
            assert row[0].callback_data == "0"

        # navigation of the listing run counts only its own pages
        total = len(listing_pages)
        assert f"🏠 1 / {total}" in labels(listing_pages[0].page_keyboard)
        assert listing_pages[0].page_keyboard[0].callback_data == NOOP_PAYLOAD
        assert listing_pages[0].page_keyboard[1].callback_data == "2"

    def test_empty_listing_is_skipped(self):
        doc = Document(title=TITLE, listings=[Listing(heading=[Literal("Enums")], rows=[])])
        documentation = build_documentation(doc, BASE)
        assert len(documentation) == 1
        assert documentation.pages[0].additionals == ()

    def test_documentation_is_immutable(self):
        documentation = build_documentation(Document(title=TITLE), BASE)
        with pytest.raises(AttributeError):
            documentation.pages = ()
        assert documentation.get(1) is None
        assert documentation.get(-1) is None

    def test_pages_are_frozen(self):
        doc = Document(title=TITLE, listings=[listing("Modules"), listing("Structs")])
        documentation = build_documentation(doc, BASE)
        page = documentation.pages[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            page.additionals = ()
        assert isinstance(page.additionals, tuple)
        assert all(isinstance(group, tuple) for group in page.additionals)
        assert isinstance(documentation.pages[1].additionals[0], tuple)

    def test_listing_without_plain_heading_gets_neutral_label(self):
        untitled = Listing(heading=[ImageRef("icon.svg")], rows=[ItemRow([Literal("a")], [Literal("b")])])
        doc = Document(title=TITLE, listings=[untitled])
        documentation = build_documentation(doc, BASE)
        (group,) = documentation.pages[0].additionals
        assert labels(group[0]) == [UNTITLED_LISTING_LABEL]
        assert group[0][0].callback_data == "1"


class TestRunToPlain:
    def test_markup_and_images_dropped(self):
        run = [*styled(Bold(), Literal("Struct  \n")), ImageRef("x.png"), Literal("Value")]
        assert run_to_plain(run) == "Struct Value"

    def test_code_whitespace_kept(self):
        run = styled(Monospaced(), Literal("a  b"))
        assert run_to_plain(run) == "a  b"
