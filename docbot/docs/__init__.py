"""Rich-text documentation model and the auto-paginating renderer."""

from docbot.docs.builder import build_documentation
from docbot.docs.grouping import AdditionalGrouping
from docbot.docs.pages import Documentation, Page, parse_callback
from docbot.docs.styles import StyleStack, UnbalancedStyleError
from docbot.docs.writer import AutoPaginateWriter, build_navigation

__all__ = [
    "AdditionalGrouping",
    "AutoPaginateWriter",
    "Documentation",
    "Page",
    "StyleStack",
    "UnbalancedStyleError",
    "build_documentation",
    "build_navigation",
    "parse_callback",
]
