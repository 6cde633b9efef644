"""View tree produced by the transformer and consumed by the viewport or the page template."""

from __future__ import annotations

import html
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .viewport import ElementHandle

MountCallback = Callable[["ElementHandle"], None]

VOID_TAGS = frozenset({"br", "hr", "img"})


@dataclass(slots=True)
class TextNode:
    text: str

    def to_html(self) -> str:
        return html.escape(self.text, quote=False)

    def text_content(self) -> str:
        return self.text


@dataclass(slots=True)
class ViewElement:
    """An element of the rendered view.

    ``on_mount`` fires once the element is placed in a viewport and receives
    the element's handle.
    """

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[ViewNode] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    on_mount: MountCallback | None = None

    def append(self, child: ViewNode) -> ViewElement:
        self.children.append(child)
        return self

    def iter_elements(self) -> Iterator[ViewElement]:
        """Yield this element and every descendant element in document order."""
        yield self
        for child in self.children:
            if isinstance(child, ViewElement):
                yield from child.iter_elements()

    def find_all(self, tag: str) -> list[ViewElement]:
        return [el for el in self.iter_elements() if el.tag == tag]

    def find_by_class(self, class_name: str) -> list[ViewElement]:
        return [el for el in self.iter_elements() if class_name in el.classes]

    def text_content(self) -> str:
        return "".join(child.text_content() for child in self.children)

    def to_html(self) -> str:
        parts = [self.tag]
        if self.classes:
            parts.append(f'class="{html.escape(" ".join(self.classes))}"')
        for key, value in self.attrs.items():
            parts.append(f'{key}="{html.escape(value)}"')
        opening = " ".join(parts)

        if self.tag in VOID_TAGS:
            return f"<{opening} />"
        inner = "".join(child.to_html() for child in self.children)
        return f"<{opening}>{inner}</{self.tag}>"


ViewNode = ViewElement | TextNode


def element(
    tag: str,
    *children: ViewNode,
    classes: list[str] | None = None,
    on_mount: MountCallback | None = None,
    **attrs: str,
) -> ViewElement:
    """Shorthand for building elements; ``attrs`` keys use ``_`` for ``-``."""
    return ViewElement(
        tag=tag,
        attrs={key.rstrip("_").replace("_", "-"): value for key, value in attrs.items()},
        children=list(children),
        classes=list(classes or []),
        on_mount=on_mount,
    )
