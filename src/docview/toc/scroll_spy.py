"""Track which TOC entry the reader is currently looking at."""

from __future__ import annotations

import logging
from typing import Protocol

from .registry import TocReference, TocRegistry

logger = logging.getLogger(__name__)

ACTIVE_CLASSES = ("doc-toc-item-active",)
INACTIVE_CLASSES = ("doc-toc-item-inactive",)


class ScrollHost(Protocol):
    height: float

    def add_listener(self, event: str, listener) -> None: ...

    def remove_listener(self, event: str, listener) -> bool: ...


class ScrollSpy:
    """Keep exactly one nav item marked active as the viewport scrolls or resizes.

    The active entry is the last heading, in on-screen order, whose top edge
    has passed the vertical middle of the viewport.
    """

    def __init__(self, registry: TocRegistry, host: ScrollHost) -> None:
        self.registry = registry
        self.host = host
        self.active_id: str | None = None
        self._active: TocReference | None = None
        self._attached = False
        self._detached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        if self._attached:
            return
        if self._detached:
            raise RuntimeError("ScrollSpy cannot be reattached after detach; create a new one")
        self.host.add_listener("scroll", self.update)
        self.host.add_listener("resize", self.update)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        self.host.remove_listener("scroll", self.update)
        self.host.remove_listener("resize", self.update)
        self._attached = False
        self._detached = True
        self._active = None

    def update(self) -> None:
        if self._detached:
            return
        references = self.registry.collect_ordered_references()
        self._activate(self._find_candidate(references))

    def _find_candidate(self, references: list[TocReference]) -> TocReference | None:
        midline = self.host.height / 2
        candidate = None
        for reference in references:
            rect = reference.heading.bounding_rect()
            # References are sorted by top, so nothing further can qualify.
            if rect.top > midline:
                break
            candidate = reference
        return candidate

    def _activate(self, candidate: TocReference | None) -> None:
        new_id = candidate.target_id if candidate is not None else None
        if new_id == self.active_id:
            return

        previous = self._active
        if previous is not None and previous.nav_item.connected:
            previous.nav_item.remove_class(*ACTIVE_CLASSES)
            previous.nav_item.add_class(*INACTIVE_CLASSES)

        if candidate is not None and candidate.nav_item.connected:
            candidate.nav_item.add_class(*ACTIVE_CLASSES)
            candidate.nav_item.remove_class(*INACTIVE_CLASSES)

        logger.debug("Active TOC entry: %s -> %s", self.active_id, new_id)
        self.active_id = new_id
        self._active = candidate
