"""Rendered pages, their inline keyboards and the callback payload protocol."""

from __future__ import annotations

from dataclasses import dataclass

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

# Payload of buttons that only display state (e.g. "🏠 2 / 5").
NOOP_PAYLOAD = "noop"
# Prefix of payloads that switch the displayed additional group.
GROUP_PREFIX = "x"

KeyboardRow = tuple[InlineKeyboardButton, ...]


def button(label: str, payload: str) -> InlineKeyboardButton:
    return InlineKeyboardButton(label, callback_data=payload)


def page_payload(index: int) -> str:
    return str(index)


def group_payload(index: int) -> str:
    return f"{GROUP_PREFIX}{index}"


@dataclass(frozen=True)
class Page:
    """One message worth of rendered HTML plus its navigation metadata."""

    text: str
    length: int = 0  # UTF-16 code units of visible text, markup excluded
    page_keyboard: KeyboardRow | None = None
    additionals: tuple[tuple[KeyboardRow, ...], ...] = ()

    def build_keyboard(self, group: int = 0) -> InlineKeyboardMarkup | None:
        """Combine the navigation row with the rows of additional group *group*.

        Returns ``None`` when the page has neither.
        """
        rows: list[KeyboardRow] = []
        if self.page_keyboard:
            rows.append(self.page_keyboard)
        if 0 <= group < len(self.additionals):
            rows.extend(self.additionals[group])
        if not rows:
            return None
        return InlineKeyboardMarkup(rows)


@dataclass(frozen=True)
class Documentation:
    """Immutable, index-addressed sequence of pages for one item."""

    pages: tuple[Page, ...]

    def __len__(self) -> int:
        return len(self.pages)

    def get(self, index: int) -> Page | None:
        if 0 <= index < len(self.pages):
            return self.pages[index]
        return None


# ---------------------------------------------------------------------------
# Callback payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PageJump:
    index: int


@dataclass(frozen=True)
class GroupSwitch:
    index: int


@dataclass(frozen=True)
class NoOp:
    pass


CallbackAction = PageJump | GroupSwitch | NoOp


def parse_callback(data: str | None) -> CallbackAction | None:
    """Decode a callback payload; unknown payloads yield ``None``."""
    if not data:
        return None
    if data == NOOP_PAYLOAD:
        return NoOp()
    if data.isdecimal():
        return PageJump(int(data))
    if data.startswith(GROUP_PREFIX) and data[len(GROUP_PREFIX):].isdecimal():
        return GroupSwitch(int(data[len(GROUP_PREFIX):]))
    return None
