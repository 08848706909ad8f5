"""Telegram HTML helpers shared by the page writer and the assembler."""

from __future__ import annotations

import re

from docbot.docs.model import BeginStyle, EndStyle, Literal, Monospaced, Run

_WHITESPACE = re.compile(r"\s+")

def escape_text(text: str) -> str:
    """Escape HTML entities for Telegram's HTML parse mode."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attr(value: str) -> str:
    """Escape an HTML attribute value."""
    return value.replace("&", "&amp;").replace('"', "&quot;").replace("<", "&lt;").replace(">", "&gt;")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text)


def visible_length(text: str) -> int:
    """Length of *text* as Telegram counts it, in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


def run_to_plain(run: Run) -> str:
    """Flatten a run into plain text, e.g. for button labels.

    Whitespace is collapsed outside code spans; images, tables and markup
    are dropped.
    """
    parts: list[str] = []
    depth = 0
    code_depth = 0
    for part in run:
        if isinstance(part, Literal):
            parts.append(part.text if code_depth else collapse_whitespace(part.text))
        elif isinstance(part, BeginStyle):
            depth += 1
            if isinstance(part.style, Monospaced) and not code_depth:
                code_depth = depth
        elif isinstance(part, EndStyle):
            if code_depth == depth:
                code_depth = 0
            depth -= 1
    return "".join(parts).strip()
