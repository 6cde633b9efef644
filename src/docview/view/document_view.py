"""One mounted document: content panel, TOC panel, registry and scroll spy."""

from __future__ import annotations

import logging

from ..content.resources import ResourceResolver
from ..document.model import DocumentNode, DocumentTree, Post
from ..renderer.transformer import DocumentTransformer
from ..toc.extract import TocEntry, extract_toc
from ..toc.nav import render_toc_nav
from ..toc.registry import TocRegistry
from ..toc.scroll_spy import ScrollSpy
from .element import ViewElement
from .viewport import MountedTree, Viewport

logger = logging.getLogger(__name__)


class DocumentView:
    """Owns the state shared by the content and nav panels for the lifetime of one view.

    Each :meth:`mount` renders both panels afresh, so repeated mount/unmount
    cycles never see handles or markers from a previous cycle.
    """

    def __init__(
        self,
        document: Post | DocumentNode,
        viewport: Viewport,
        *,
        resolver: ResourceResolver | None = None,
        math_engine: str = "none",
    ) -> None:
        root = document.content if isinstance(document, Post) else document
        self.viewport = viewport
        self.resolver = resolver
        self.math_engine = math_engine
        self.tree = DocumentTree(root)
        self.toc = extract_toc(self.tree)
        self.registry = TocRegistry()
        self.content: ViewElement | None = None
        self.nav: ViewElement | None = None
        self.spy: ScrollSpy | None = None
        self._mounted: list[MountedTree] = []

    @property
    def entries(self) -> list[TocEntry]:
        return self.toc.entries

    @property
    def mounted(self) -> bool:
        return bool(self._mounted)

    @property
    def active_id(self) -> str | None:
        if self.spy is None or not self.mounted:
            return None
        return self.spy.active_id

    def mount(self, *, nav_first: bool = False) -> None:
        if self.mounted:
            raise RuntimeError("DocumentView is already mounted")

        transformer = DocumentTransformer(
            heading_ids=self.toc.heading_ids,
            registry=self.registry,
            resolver=self.resolver,
            math_engine=self.math_engine,
        )
        self.content = transformer.transform(self.tree.root)
        self.nav = render_toc_nav(self.toc.entries, self.registry)

        if nav_first:
            self._mounted.append(self.viewport.mount(self.nav, fixed=True))
            self._mounted.append(self.viewport.mount(self.content))
        else:
            self._mounted.append(self.viewport.mount(self.content))
            self._mounted.append(self.viewport.mount(self.nav, fixed=True))

        self.spy = ScrollSpy(self.registry, self.viewport)
        self.spy.attach()
        self.spy.update()
        logger.debug("Mounted document view with %d TOC entries", len(self.toc.entries))

    def unmount(self) -> None:
        if not self.mounted:
            return
        if self.spy is not None:
            self.spy.detach()
        for tree in self._mounted:
            tree.unmount()
        self._mounted.clear()
        self.registry.clear()
        logger.debug("Unmounted document view")

    def scroll_to_anchor(self, target_id: str) -> bool:
        """Scroll so the heading for ``target_id`` sits at the top of the viewport."""
        state = self.registry.get(target_id)
        if state is None or state.heading is None:
            return False
        self.viewport.scroll_by(state.heading.bounding_rect().top)
        return True
