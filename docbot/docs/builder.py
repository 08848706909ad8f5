"""Assemble a parsed :class:`Document` into paged :class:`Documentation`."""

from __future__ import annotations

from dataclasses import replace

from loguru import logger

from docbot.docs.grouping import DEFAULT_GROUP_SIZE, AdditionalGrouping
from docbot.docs.html import run_to_plain
from docbot.docs.model import Document
from docbot.docs.pages import Documentation, Page, button, page_payload
from docbot.docs.writer import DEFAULT_LIMIT, AutoPaginateWriter

MAIN_LABEL = "» Main"
# Jump button label for a listing whose heading has no plain text.
UNTITLED_LISTING_LABEL = "Items"


def build_documentation(
    document: Document,
    base_url: str,
    *,
    limit: int = DEFAULT_LIMIT,
    group_size: int = DEFAULT_GROUP_SIZE,
) -> Documentation:
    """Render *document* into pages.

    The lead run (declaration and description sections) comes first and
    carries the "jump to listing" groups; each listing follows as its own
    run with a single button back to the first page.
    """
    pages: list[Page] = []

    writer = AutoPaginateWriter(pages, limit=limit)
    if document.declaration is not None:
        writer.write_title(document.title, base_url)
        writer.line_break()
        writer.line_break()
        writer.write(document.declaration, base_url)
        writer.styles.ensure_balanced()
    elif not document.description:
        writer.write_title(document.title, base_url)
    for section in document.description:
        writer.write_paragraphs(section.heading or document.title, section.contents, base_url)
    writer.finalize()
    main_end = len(pages)

    grouping = AdditionalGrouping(group_size)
    back_to_main = (((button(MAIN_LABEL, page_payload(0)),),),)
    for listing in document.listings:
        first_page = len(pages)
        writer = AutoPaginateWriter(pages, limit=limit)
        writer.write_item_rows(listing.heading, listing.rows, base_url)
        writer.finalize()
        if len(pages) == first_page:
            continue

        pages[first_page:] = [replace(page, additionals=back_to_main) for page in pages[first_page:]]
        label = run_to_plain(listing.heading) or UNTITLED_LISTING_LABEL
        grouping.append_row((button(label, page_payload(first_page)),))

    groups = tuple(tuple(group) for group in grouping.finalize_groups())
    pages[:main_end] = [replace(page, additionals=groups) for page in pages[:main_end]]

    logger.debug(
        f"Built documentation: {len(pages)} page(s), {main_end} lead, "
        f"{len(groups)} listing group(s)"
    )
    return Documentation(pages=tuple(pages))
