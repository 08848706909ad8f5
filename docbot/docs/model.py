"""Rich-text document model.

A parsed documentation page is a tree of plain dataclasses: inline runs of
``TextPart`` leaves grouped into paragraphs, rows and sections. The variant
sets are closed; consumers dispatch on them with ``isinstance``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Link:
    href: str


@dataclass(frozen=True)
class Bold:
    pass


@dataclass(frozen=True)
class Italic:
    pass


@dataclass(frozen=True)
class Underline:
    pass


@dataclass(frozen=True)
class Strikethrough:
    pass


@dataclass(frozen=True)
class Monospaced:
    pass


Style = Union[Link, Bold, Italic, Underline, Strikethrough, Monospaced]


# ---------------------------------------------------------------------------
# Inline runs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class ImageRef:
    source: str


@dataclass(frozen=True)
class TableRef:
    pass


@dataclass(frozen=True)
class BeginStyle:
    style: Style


@dataclass(frozen=True)
class EndStyle:
    pass


TextPart = Union[Literal, ImageRef, TableRef, BeginStyle, EndStyle]
Run = Sequence[TextPart]


def styled(style: Style, *parts: TextPart) -> list[TextPart]:
    """Wrap *parts* in a balanced BeginStyle/EndStyle pair."""
    return [BeginStyle(style), *parts, EndStyle()]


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass
class TextBlock:
    run: Run


@dataclass
class ListBlock:
    items: list[Run] = field(default_factory=list)


@dataclass
class CodeBlock:
    run: Run


Paragraph = Union[TextBlock, ListBlock, CodeBlock]


@dataclass
class ItemRow:
    """One row of a tabular listing: item name and its short summary."""
    name: Run
    summary: Run


@dataclass
class DescriptionSection:
    heading: Run | None
    contents: list[Paragraph] = field(default_factory=list)


@dataclass
class Listing:
    heading: Run
    rows: list[ItemRow] = field(default_factory=list)


@dataclass
class Document:
    title: Run
    declaration: Run | None = None
    description: list[DescriptionSection] = field(default_factory=list)
    listings: list[Listing] = field(default_factory=list)
