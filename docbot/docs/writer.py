"""Auto-paginating Telegram HTML writer.

Renders rich-text runs into pages of bounded visible length. Page breaks only
happen between authoring units (a paragraph or an item row), so a unit is
never split across two messages; a unit that alone exceeds the budget is
emitted whole on its own page.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Sequence

from docbot.docs.html import collapse_whitespace, escape_text, visible_length
from docbot.docs.model import (
    BeginStyle,
    CodeBlock,
    EndStyle,
    ImageRef,
    ItemRow,
    Link,
    ListBlock,
    Literal,
    Monospaced,
    Paragraph,
    Run,
    Style,
    TableRef,
    TextBlock,
)
from docbot.docs.pages import NOOP_PAYLOAD, KeyboardRow, Page, button, page_payload
from docbot.docs.styles import StyleStack

DEFAULT_LIMIT = 1000
BULLET = "• "


def build_navigation(pages: Sequence[Page], begin: int) -> list[Page]:
    """Return the pages of one contiguous section run with a "page i/N" row.

    *pages* are the run's pages; *begin* is the absolute index of the first
    one. A run of a single page gets no row.
    """
    total = len(pages)
    if total <= 1:
        return list(pages)

    navigated = []
    for showing, page in enumerate(pages):
        index = begin + showing
        home = button(f"🏠 {showing + 1} / {total}", NOOP_PAYLOAD)
        row: KeyboardRow
        if showing == 0:
            row = (home, button(f"{showing + 2} >", page_payload(index + 1)))
        elif showing == total - 1:
            row = (button(f"< {showing}", page_payload(index - 1)), home)
        else:
            row = (
                button(f"< {showing}", page_payload(index - 1)),
                home,
                button(f"{showing + 2} >", page_payload(index + 1)),
            )
        navigated.append(replace(page, page_keyboard=row))
    return navigated


class AutoPaginateWriter:
    """Accumulates rendered sections into *pages*.

    One writer covers one section run: the pages it appends between creation
    and :meth:`finalize` share one sequential navigation trail.
    """

    def __init__(self, pages: list[Page], limit: int = DEFAULT_LIMIT):
        self.pages = pages
        self.limit = limit
        self.styles = StyleStack()
        self._buffer = ""
        self._written = 0
        self._begin_page = len(pages)

    # -- inline rendering ----------------------------------------------------

    def write_str(self, text: str) -> None:
        if not self.styles.in_code:
            text = collapse_whitespace(text)
        self._written += visible_length(text)
        self._buffer += escape_text(text)

    def apply_style(self, style: Style, base_url: str) -> None:
        self._buffer += self.styles.push(style, base_url)

    def remove_style(self) -> None:
        self._buffer += self.styles.pop()

    def write(self, run: Run, base_url: str) -> None:
        for part in run:
            if isinstance(part, Literal):
                self.write_str(part.text)
            elif isinstance(part, ImageRef):
                self.apply_style(Link(part.source), base_url)
                self.write_str("(image)")
                self.remove_style()
            elif isinstance(part, TableRef):
                self.apply_style(Link(base_url), base_url)
                self.write_str("(table)")
                self.remove_style()
            elif isinstance(part, BeginStyle):
                self.apply_style(part.style, base_url)
            elif isinstance(part, EndStyle):
                self.remove_style()

    def write_title(self, title: Run, base_url: str) -> None:
        """Render *title* without inheriting any open style.

        Images and tables are left out of titles.
        """
        title = [part for part in title if not isinstance(part, (ImageRef, TableRef))]
        with self.styles.isolated():
            self.write(title, base_url)
            self.styles.ensure_balanced()

    def line_break(self) -> None:
        self._buffer += "\n"
        self._written += 1

    # -- paginated sections --------------------------------------------------

    def write_paragraphs(self, title: Run, paragraphs: Sequence[Paragraph], base_url: str) -> None:
        self.new_page()
        self._write_units(title, paragraphs, self._write_paragraph, base_url)

    def write_item_rows(self, title: Run, rows: Sequence[ItemRow], base_url: str) -> None:
        self.new_page()
        self._write_units(title, rows, self._write_item_row, base_url)

    def _write_paragraph(self, paragraph: Paragraph, base_url: str) -> None:
        if isinstance(paragraph, TextBlock):
            self.write(paragraph.run, base_url)
        elif isinstance(paragraph, ListBlock):
            for i, item in enumerate(paragraph.items):
                if i > 0:
                    self.line_break()
                self.write_str(BULLET)
                self.write(item, base_url)
        elif isinstance(paragraph, CodeBlock):
            self.apply_style(Monospaced(), base_url)
            self.write(paragraph.run, base_url)
            self.remove_style()

    def _write_item_row(self, row: ItemRow, base_url: str) -> None:
        self.write(row.name, base_url)
        self.line_break()
        self.write(row.summary, base_url)

    def _write_units(
        self,
        title: Run,
        units: Sequence[Paragraph] | Sequence[ItemRow],
        render: Callable[..., None],
        base_url: str,
    ) -> None:
        on_page = 0
        for unit in units:
            prev_buffer, prev_written = self._buffer, self._written
            self._buffer, self._written = "", 0

            if on_page == 0:
                self._write_heading(title, base_url)

            render(unit, base_url)
            self.styles.ensure_balanced()

            if on_page > 0:
                # +1 for the line break joining the unit to the page
                if self._written + prev_written + 1 > self.limit:
                    self._seal(prev_buffer, prev_written)
                    unit_buffer, unit_written = self._buffer, self._written
                    self._buffer, self._written = "", 0
                    self._write_heading(title, base_url)
                    self._buffer += unit_buffer
                    self._written += unit_written
                    on_page = 0
                else:
                    unit_buffer, unit_written = self._buffer, self._written
                    self._buffer, self._written = prev_buffer, prev_written
                    self.line_break()
                    self._buffer += unit_buffer
                    self._written += unit_written
            on_page += 1

    def _write_heading(self, title: Run, base_url: str) -> None:
        self.write_title(title, base_url)
        self.line_break()
        self.line_break()

    # -- page management -----------------------------------------------------

    def _seal(self, text: str, written: int) -> None:
        self.pages.append(Page(text=text, length=written))

    def new_page(self) -> None:
        """Flush the buffer, if any, as a finished page."""
        if self._buffer:
            self._seal(self._buffer, self._written)
            self._buffer, self._written = "", 0

    def finalize(self) -> None:
        self.new_page()
        run = self.pages[self._begin_page:]
        self.pages[self._begin_page:] = build_navigation(run, self._begin_page)
