"""Open inline-style tracking for paginated Telegram HTML."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import httpx
from loguru import logger

from docbot.docs.html import escape_attr
from docbot.docs.model import Bold, Italic, Link, Monospaced, Strikethrough, Style, Underline

_TAG_MAP = {
    Bold: "b",
    Italic: "i",
    Underline: "u",
    Strikethrough: "s",
}

# Placeholder for a dropped link: keeps push/pop paired without emitting markup.
_DROPPED = ("", "")


class UnbalancedStyleError(ValueError):
    """Raised when a run closes a style it never opened, or leaves one open."""


def resolve_href(href: str, base_url: str) -> str | None:
    """Resolve *href* against *base_url*, or ``None`` if it is not a usable URL."""
    try:
        url = httpx.URL(base_url).join(href)
    except (httpx.InvalidURL, TypeError, ValueError):
        return None
    if not url.scheme or not url.host:
        return None
    return str(url)


class StyleStack:
    """Stack of open ``(open_marker, close_marker)`` pairs.

    While a code span is active the tracked styles are closed but kept, and
    any style nested inside the span is suppressed; leaving the span reopens
    the tracked styles in their original order.
    """

    def __init__(self) -> None:
        self._styles: list[tuple[str, str]] = []
        self._in_code = False
        self._suppressed = 0

    @property
    def in_code(self) -> bool:
        return self._in_code

    @property
    def depth(self) -> int:
        return len(self._styles) + (1 + self._suppressed if self._in_code else 0)

    def push(self, style: Style, base_url: str) -> str:
        """Open *style* and return the markup to emit."""
        if self._in_code:
            self._suppressed += 1
            return ""

        if isinstance(style, Monospaced):
            self._in_code = True
            return self.close_all() + "<code>"

        if isinstance(style, Link):
            href = resolve_href(style.href, base_url)
            if href is None:
                logger.debug(f"Dropping unresolvable link: {style.href!r}")
                self._styles.append(_DROPPED)
                return ""
            pair = (f'<a href="{escape_attr(href)}">', "</a>")
        else:
            tag = _TAG_MAP[type(style)]
            pair = (f"<{tag}>", f"</{tag}>")

        self._styles.append(pair)
        return pair[0]

    def pop(self) -> str:
        """Close the innermost style and return the markup to emit."""
        if self._in_code:
            if self._suppressed:
                self._suppressed -= 1
                return ""
            self._in_code = False
            return "</code>" + self.reopen_all()

        if not self._styles:
            raise UnbalancedStyleError("EndStyle without a matching BeginStyle")
        return self._styles.pop()[1]

    def close_all(self) -> str:
        return "".join(close for _, close in reversed(self._styles))

    def reopen_all(self) -> str:
        return "".join(open_ for open_, _ in self._styles)

    def ensure_balanced(self) -> None:
        if self.depth:
            raise UnbalancedStyleError(f"{self.depth} style(s) left open at end of run")

    @contextmanager
    def isolated(self) -> Iterator[None]:
        """Temporarily start from an empty, non-code context."""
        saved = (self._styles, self._in_code, self._suppressed)
        self._styles, self._in_code, self._suppressed = [], False, 0
        try:
            yield
        finally:
            self._styles, self._in_code, self._suppressed = saved
