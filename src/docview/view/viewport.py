"""A headless viewport that lays out view trees and reports scroll/resize notifications.

The layout is a coarse block flow: block elements stack vertically, text is
wrapped at a fixed number of characters per line, and inline elements share
the box of their nearest block ancestor. That is enough to give every heading
a stable vertical position for the TOC scroll tracker.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from .element import ViewElement

logger = logging.getLogger(__name__)

Listener = Callable[[], None]

EVENTS = ("scroll", "resize")

LINE_HEIGHT = 24.0

_BLOCK_TAGS = frozenset(
    {
        "aside",
        "blockquote",
        "div",
        "figcaption",
        "figure",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        "img",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "table",
        "td",
        "tr",
        "ul",
    }
)

# (line height, vertical margin) for block tags that differ from body text.
_BLOCK_METRICS = {
    "h2": (36.0, 32.0),
    "h3": (32.0, 32.0),
    "h4": (28.0, 32.0),
    "h5": (28.0, 16.0),
    "h6": (24.0, 16.0),
    "p": (LINE_HEIGHT, 16.0),
    "pre": (20.0, 16.0),
    "hr": (0.0, 32.0),
}

IMAGE_HEIGHT = 240.0


@dataclass(frozen=True, slots=True)
class Rect:
    top: float
    bottom: float

    @property
    def height(self) -> float:
        return self.bottom - self.top


class ElementHandle:
    """Reference to a mounted element, usable for position and class-state queries."""

    def __init__(self, element: ViewElement, viewport: Viewport, top: float, height: float, fixed: bool) -> None:
        self.element = element
        self._viewport = viewport
        self._top = top
        self._height = height
        self._fixed = fixed
        self.connected = True

    def bounding_rect(self) -> Rect:
        offset = 0.0 if self._fixed else self._viewport.scroll_y
        top = self._top - offset
        return Rect(top=top, bottom=top + self._height)

    def has_class(self, name: str) -> bool:
        return name in self.element.classes

    def add_class(self, *names: str) -> None:
        for name in names:
            if name not in self.element.classes:
                self.element.classes.append(name)

    def remove_class(self, *names: str) -> None:
        self.element.classes[:] = [cls for cls in self.element.classes if cls not in names]

    def __repr__(self) -> str:
        state = "connected" if self.connected else "detached"
        return f"<ElementHandle {self.element.tag} top={self._top:g} {state}>"


class MountedTree:
    """The handles created by one :meth:`Viewport.mount` call."""

    def __init__(
        self,
        viewport: Viewport,
        root: ViewElement,
        handles: dict[int, ElementHandle],
        height: float,
        fixed: bool = False,
    ) -> None:
        self.viewport = viewport
        self.root = root
        self.height = height
        self.fixed = fixed
        self._handles = handles
        self.mounted = True

    @property
    def handles(self) -> list[ElementHandle]:
        return list(self._handles.values())

    def handle_for(self, element: ViewElement) -> ElementHandle | None:
        return self._handles.get(id(element))

    def unmount(self) -> None:
        if not self.mounted:
            return
        for handle in self._handles.values():
            handle.connected = False
        self.mounted = False
        self.viewport._forget(self)


class Viewport:
    """Hosting viewport: owns the scroll position and the scroll/resize listeners."""

    def __init__(self, height: float = 800.0, *, chars_per_line: int = 80) -> None:
        if height <= 0:
            raise ValueError("viewport height must be positive")
        if chars_per_line <= 0:
            raise ValueError("chars_per_line must be positive")
        self.height = float(height)
        self.chars_per_line = chars_per_line
        self.scroll_y = 0.0
        self._listeners: dict[str, list[Listener]] = {event: [] for event in EVENTS}
        self._trees: list[MountedTree] = []

    # -- listeners -------------------------------------------------------

    def add_listener(self, event: str, listener: Listener) -> None:
        self._listeners_for(event).append(listener)

    def remove_listener(self, event: str, listener: Listener) -> bool:
        listeners = self._listeners_for(event)
        try:
            listeners.remove(listener)
        except ValueError:
            return False
        return True

    def listener_count(self, event: str | None = None) -> int:
        if event is None:
            return sum(len(listeners) for listeners in self._listeners.values())
        return len(self._listeners_for(event))

    def dispatch(self, event: str) -> None:
        # Copy so listeners may detach themselves while being notified.
        for listener in list(self._listeners_for(event)):
            listener()

    def _listeners_for(self, event: str) -> list[Listener]:
        try:
            return self._listeners[event]
        except KeyError:
            raise ValueError(f"Unsupported viewport event: {event!r}") from None

    # -- scrolling -------------------------------------------------------

    @property
    def document_height(self) -> float:
        return max((tree.height for tree in self._trees if not tree.fixed), default=0.0)

    def scroll_to(self, y: float) -> None:
        limit = max(0.0, self.document_height - self.height)
        self.scroll_y = min(max(0.0, float(y)), limit)
        self.dispatch("scroll")

    def scroll_by(self, dy: float) -> None:
        self.scroll_to(self.scroll_y + dy)

    def resize(self, height: float) -> None:
        if height <= 0:
            raise ValueError("viewport height must be positive")
        self.height = float(height)
        self.dispatch("resize")

    # -- mounting --------------------------------------------------------

    def mount(self, root: ViewElement, *, fixed: bool = False) -> MountedTree:
        """Lay ``root`` out, create handles, then fire ``on_mount`` callbacks in document order.

        ``fixed`` trees (e.g. a sticky side panel) keep their position while the
        page scrolls.
        """
        handles: dict[int, ElementHandle] = {}
        height = self._layout(root, 0.0, handles, fixed)
        tree = MountedTree(self, root, handles, height, fixed)
        self._trees.append(tree)
        logger.debug("Mounted <%s> with %d elements, height %.0f", root.tag, len(handles), height)

        for el in root.iter_elements():
            if el.on_mount is not None:
                el.on_mount(handles[id(el)])
        return tree

    def _forget(self, tree: MountedTree) -> None:
        if tree in self._trees:
            self._trees.remove(tree)

    def _layout(self, el: ViewElement, top: float, handles: dict[int, ElementHandle], fixed: bool) -> float:
        """Place ``el`` at ``top`` and return its outer height (margins included)."""
        line_height, margin = _BLOCK_METRICS.get(el.tag, (LINE_HEIGHT, 0.0))
        content_top = top + margin

        if el.tag == "img":
            content_height = IMAGE_HEIGHT
        elif el.tag == "hr":
            content_height = 1.0
        elif not _has_block_child(el):
            content_height = self._text_height(el, line_height)
        elif el.tag == "tr":
            content_height = max(
                (
                    self._layout(child, content_top, handles, fixed)
                    for child in el.children
                    if isinstance(child, ViewElement)
                ),
                default=0.0,
            )
        else:
            content_height = 0.0
            for child in el.children:
                if isinstance(child, ViewElement) and child.tag in _BLOCK_TAGS:
                    content_height += self._layout(child, content_top + content_height, handles, fixed)
                elif isinstance(child, ViewElement):
                    # Inline run between blocks: one anonymous line box.
                    self._place_inline(child, content_top + content_height, line_height, handles, fixed)
                    content_height += line_height
                elif child.text.strip():
                    content_height += line_height

        handles[id(el)] = ElementHandle(el, self, content_top, content_height, fixed)
        if not _has_block_child(el):
            for child in el.children:
                if isinstance(child, ViewElement):
                    self._place_inline(child, content_top, content_height, handles, fixed)
        return content_height + 2 * margin

    def _place_inline(
        self, el: ViewElement, top: float, height: float, handles: dict[int, ElementHandle], fixed: bool
    ) -> None:
        for inner in el.iter_elements():
            handles[id(inner)] = ElementHandle(inner, self, top, height, fixed)

    def _text_height(self, el: ViewElement, line_height: float) -> float:
        if el.tag == "pre":
            lines = max(1, el.text_content().count("\n") + 1)
        else:
            length = len(el.text_content())
            lines = max(1, math.ceil(length / self.chars_per_line))
        return lines * line_height


def _has_block_child(el: ViewElement) -> bool:
    return any(isinstance(child, ViewElement) and child.tag in _BLOCK_TAGS for child in el.children)
