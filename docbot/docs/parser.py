"""Parse a rustdoc HTML page into a rich-text :class:`Document`."""

from __future__ import annotations

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from docbot.docs.model import (
    BeginStyle,
    Bold,
    CodeBlock,
    DescriptionSection,
    Document,
    EndStyle,
    ImageRef,
    Italic,
    ItemRow,
    Link,
    Listing,
    ListBlock,
    Literal,
    Monospaced,
    Paragraph,
    Strikethrough,
    TableRef,
    TextBlock,
    TextPart,
    Underline,
)

# Elements that carry no documentation text
_NOISE_SELECTORS = (
    "script", "style", "noscript", "button", "a.anchor", "a.doc-anchor", "a.src",
    ".out-of-band", ".since", ".rustdoc-toggle > summary.hideme",
)

_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}

_INLINE_STYLES = {
    "b": Bold,
    "strong": Bold,
    "i": Italic,
    "em": Italic,
    "u": Underline,
    "s": Strikethrough,
    "del": Strikethrough,
    "strike": Strikethrough,
    "code": Monospaced,
}


def parse_document(html: str) -> Document | None:
    """Extract title, declaration, description and item listings.

    Returns ``None`` when the page does not look like a rustdoc item page.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.select(", ".join(_NOISE_SELECTORS)):
        tag.decompose()

    main = soup.select_one("#main-content") or soup.find("main")
    if not isinstance(main, Tag):
        return None
    heading = main.find("h1")
    if not isinstance(heading, Tag):
        return None

    title = _strip_run(inline_run(heading))
    if not title:
        return None

    declaration = None
    decl = main.select_one("pre.item-decl") or main.select_one(".item-decl pre")
    if decl is not None:
        declaration = [BeginStyle(Monospaced()), Literal(decl.get_text()), EndStyle()]

    docblock = main.select_one("details.top-doc .docblock") or main.find(
        "div", class_="docblock", recursive=False
    )
    description = _parse_docblock(docblock) if isinstance(docblock, Tag) else []

    return Document(
        title=title,
        declaration=declaration,
        description=description,
        listings=_parse_listings(main),
    )


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def _parse_docblock(docblock: Tag) -> list[DescriptionSection]:
    sections = [DescriptionSection(heading=None)]
    for child in docblock.children:
        if isinstance(child, Tag) and child.name in _HEADING_TAGS:
            sections.append(DescriptionSection(heading=_strip_run(inline_run(child))))
            continue
        paragraph = _parse_block(child)
        if paragraph is not None:
            sections[-1].contents.append(paragraph)
    return [section for section in sections if section.contents]


def _parse_block(node) -> Paragraph | None:
    if isinstance(node, Comment):
        return None
    if isinstance(node, NavigableString):
        text = str(node)
        return TextBlock([Literal(text)]) if text.strip() else None
    if not isinstance(node, Tag):
        return None

    if node.name in ("ul", "ol"):
        items = [_strip_run(inline_run(li)) for li in node.find_all("li", recursive=False)]
        return ListBlock(items) if items else None
    if node.name == "pre":
        return CodeBlock([Literal(node.get_text().rstrip("\n"))])
    pre = node.find("pre") if node.name == "div" else None
    if pre is not None:
        return CodeBlock([Literal(pre.get_text().rstrip("\n"))])
    if node.name == "table":
        return TextBlock([TableRef()])

    run = _strip_run(inline_run(node))
    return TextBlock(run) if run else None


def _parse_listings(main: Tag) -> list[Listing]:
    listings = []
    for header in main.select("h2.section-header"):
        table = header.find_next_sibling()
        if not isinstance(table, Tag) or "item-table" not in (table.get("class") or []):
            continue
        rows = _parse_item_table(table)
        if rows:
            listings.append(Listing(heading=_strip_run(inline_run(header)), rows=rows))
    return listings


def _parse_item_table(table: Tag) -> list[ItemRow]:
    rows: list[ItemRow] = []
    if table.name == "dl":
        for dt in table.find_all("dt", recursive=False):
            dd = dt.find_next_sibling()
            summary = inline_run(dd) if isinstance(dd, Tag) and dd.name == "dd" else []
            rows.append(ItemRow(name=_strip_run(inline_run(dt)), summary=_strip_run(summary)))
        return rows

    for item in table.find_all(["li", "div"], recursive=False):
        name = item.select_one(".item-name") or item.select_one(".item-left")
        desc = item.select_one(".desc") or item.select_one(".docblock-short") or item.select_one(".item-right")
        if name is None:
            continue
        summary = inline_run(desc) if desc is not None else []
        rows.append(ItemRow(name=_strip_run(inline_run(name)), summary=_strip_run(summary)))
    return rows


# ---------------------------------------------------------------------------
# Inline runs
# ---------------------------------------------------------------------------

def inline_run(node: Tag) -> list[TextPart]:
    """Convert the children of *node* into a balanced run."""
    run: list[TextPart] = []
    for child in node.children:
        _walk_inline(child, run)
    return run


def _walk_inline(node, run: list[TextPart]) -> None:
    if isinstance(node, Comment):
        return
    if isinstance(node, NavigableString):
        run.append(Literal(str(node)))
        return
    if not isinstance(node, Tag):
        return

    if node.name == "br":
        run.append(Literal("\n"))
        return
    if node.name == "img":
        src = node.get("src")
        if src:
            run.append(ImageRef(str(src)))
        return
    if node.name == "table":
        run.append(TableRef())
        return

    style = None
    if node.name == "a" and node.get("href"):
        style = Link(str(node["href"]))
    elif node.name in _INLINE_STYLES:
        style = _INLINE_STYLES[node.name]()

    if style is not None:
        run.append(BeginStyle(style))
    for child in node.children:
        _walk_inline(child, run)
    if style is not None:
        run.append(EndStyle())


def _strip_run(run: list[TextPart]) -> list[TextPart]:
    """Trim leading and trailing whitespace from the outermost literals."""
    literals = [i for i, part in enumerate(run) if isinstance(part, Literal)]
    if not literals:
        return run
    run = list(run)
    first, last = literals[0], literals[-1]
    run[first] = Literal(run[first].text.lstrip())
    run[last] = Literal(run[last].text.rstrip())
    if not any(isinstance(part, Literal) and part.text for part in run) and not any(
        isinstance(part, (ImageRef, TableRef)) for part in run
    ):
        return []
    return run
