"""Renderers: document tree to view tree, and post to HTML page."""

from .html_renderer import PageRenderer, format_post_date
from .transformer import CODE_LANGUAGE_ALIASES, COLOR_PALETTE, DocumentTransformer, code_language

__all__ = [
    "CODE_LANGUAGE_ALIASES",
    "COLOR_PALETTE",
    "DocumentTransformer",
    "PageRenderer",
    "code_language",
    "format_post_date",
]
