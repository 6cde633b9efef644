"""Shared registry pairing document headings with their TOC nav items."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class BoxLike(Protocol):
    top: float
    bottom: float


class ReferenceHandle(Protocol):
    """What the registry and the scroll spy need from a mounted element."""

    connected: bool

    def bounding_rect(self) -> BoxLike: ...

    def add_class(self, *names: str) -> None: ...

    def remove_class(self, *names: str) -> None: ...


@dataclass(slots=True)
class TocReferenceState:
    heading: ReferenceHandle | None = None
    nav_item: ReferenceHandle | None = None

    @property
    def complete(self) -> bool:
        return self.heading is not None and self.nav_item is not None


@dataclass(frozen=True, slots=True)
class TocReference:
    target_id: str
    heading: ReferenceHandle
    nav_item: ReferenceHandle


class TocRegistry:
    """Per-view map of ``target_id`` to the heading and nav item mounted for it.

    The content panel and the nav panel mount independently and in any order;
    each mount fills one slot of the entry and overwrites whatever that slot
    held before.
    """

    def __init__(self) -> None:
        self._states: dict[str, TocReferenceState] = {}

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._states

    def get(self, target_id: str) -> TocReferenceState | None:
        return self._states.get(target_id)

    def mount_heading(self, target_id: str, handle: ReferenceHandle) -> None:
        self._state_for(target_id).heading = handle

    def mount_nav_item(self, target_id: str, handle: ReferenceHandle) -> None:
        self._state_for(target_id).nav_item = handle

    def for_each_complete(self, callback: Callable[[ReferenceHandle, ReferenceHandle], None]) -> None:
        for state in list(self._states.values()):
            if state.heading is None or state.nav_item is None:
                continue
            callback(state.heading, state.nav_item)

    def collect_ordered_references(self) -> list[TocReference]:
        """Complete entries sorted by where their headings currently sit on screen."""
        references = [
            TocReference(target_id=target_id, heading=state.heading, nav_item=state.nav_item)
            for target_id, state in self._states.items()
            if state.heading is not None and state.nav_item is not None
        ]
        references.sort(key=lambda ref: ref.heading.bounding_rect().top)
        return references

    def clear(self) -> None:
        self._states.clear()

    def _state_for(self, target_id: str) -> TocReferenceState:
        state = self._states.get(target_id)
        if state is None:
            state = TocReferenceState()
            self._states[target_id] = state
            logger.debug("Registered TOC reference %s", target_id)
        return state
