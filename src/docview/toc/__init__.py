"""Table of contents: extraction, the heading/nav registry and the scroll spy."""

from .extract import TocEntry, TocInfo, extract_toc, make_target_id, percent_encode
from .nav import render_toc_nav
from .registry import TocReference, TocReferenceState, TocRegistry
from .scroll_spy import ScrollSpy

__all__ = [
    "ScrollSpy",
    "TocEntry",
    "TocInfo",
    "TocReference",
    "TocReferenceState",
    "TocRegistry",
    "extract_toc",
    "make_target_id",
    "percent_encode",
    "render_toc_nav",
]
