"""Navigation panel listing the TOC entries as in-page links."""

from __future__ import annotations

from ..view.element import TextNode, ViewElement, element
from .extract import TocEntry
from .registry import TocRegistry
from .scroll_spy import INACTIVE_CLASSES

MAX_INDENT_LEVEL = 3


def render_toc_nav(entries: list[TocEntry], registry: TocRegistry | None = None) -> ViewElement:
    nav = element("nav", classes=["doc-toc"], aria_label="Table of contents")
    for entry in entries:
        nav.append(render_toc_item(entry, registry))
    return nav


def render_toc_item(entry: TocEntry, registry: TocRegistry | None = None) -> ViewElement:
    indent = min(max(entry.level, 1), MAX_INDENT_LEVEL)
    label = element("div", TextNode(entry.title), classes=[f"doc-toc-indent-{indent}"])

    on_mount = None
    if registry is not None:
        target_id = entry.target_id

        def on_mount(handle) -> None:
            registry.mount_nav_item(target_id, handle)

    return element(
        "a",
        label,
        classes=["doc-toc-item", *INACTIVE_CLASSES],
        on_mount=on_mount,
        href=entry.href,
    )
