"""Content sources that hand decoded posts to the renderer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from ..document.model import Post
from ..document.wire import decode_post
from ..errors import DocumentNotFoundError

logger = logging.getLogger(__name__)


class ContentSource(Protocol):
    def get_post(self, slug: str) -> Post | None:  # pragma: no cover - structural protocol
        """Return the post for ``slug``, or None when it does not exist."""


class DirectoryContentSource:
    """Serve posts stored as ``<slug>.json`` files under one directory."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def get_post(self, slug: str) -> Post | None:
        path = self._path_for(slug)
        if path is None or not path.is_file():
            logger.info("No post file for slug %r under %s", slug, self.root)
            return None
        return load_post(path)

    def _path_for(self, slug: str) -> Path | None:
        # Slugs map to a single file name; anything with a separator is not a slug.
        if not slug or "/" in slug or "\\" in slug or slug in {".", ".."}:
            return None
        return self.root / f"{slug}.json"


def load_post(path: Path) -> Post:
    """Read and decode one post file."""
    raw = Path(path).read_text(encoding="utf-8")
    return decode_post(json.loads(raw))


def fetch_post(source: ContentSource, slug: str) -> Post:
    """Like ``source.get_post`` but raise DocumentNotFoundError for a missing slug."""
    post = source.get_post(slug)
    if post is None:
        raise DocumentNotFoundError(slug)
    return post
