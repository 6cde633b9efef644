"""Build the table of contents and heading anchors for a document."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import quote

from ..document.model import DocumentNode, DocumentTree, HeadingTag, UnknownTag
from ..document.text import plain_text

# Characters encodeURIComponent leaves untouched besides ASCII alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Unpaired surrogates, which json.loads produces for escapes like "\ud800",
# cannot be UTF-8 encoded.
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


@dataclass(frozen=True, slots=True)
class TocEntry:
    title: str
    level: int
    target_id: str

    @property
    def href(self) -> str:
        return f"#{self.target_id}"


@dataclass(slots=True)
class TocInfo:
    entries: list[TocEntry] = field(default_factory=list)
    # node_id -> target_id, valid only for the tree that was extracted.
    heading_ids: dict[int, str] = field(default_factory=dict)


def percent_encode(value: str) -> str:
    """Percent-encode ``value`` the way ``encodeURIComponent`` does.

    Unpaired surrogates are replaced with U+FFFD first instead of failing.
    """
    return quote(_well_formed(value), safe=_URI_COMPONENT_SAFE)


def _well_formed(value: str) -> str:
    return _LONE_SURROGATE.sub("\ufffd", value)


def make_target_id(sequence: int, title: str) -> str:
    return f"{sequence}-{percent_encode(title)}"


def extract_toc(tree: DocumentTree) -> TocInfo:
    """Collect one entry per heading in document pre-order."""
    info = TocInfo()
    _visit(tree.root, info)
    return info


def _visit(node: DocumentNode, info: TocInfo) -> None:
    tag = node.tag
    if isinstance(tag, UnknownTag):
        # Rendered as an inert placeholder, so nothing inside gets an anchor.
        return
    if isinstance(tag, HeadingTag):
        title = _well_formed(plain_text(node))
        target_id = make_target_id(len(info.entries) + 1, title)
        info.entries.append(TocEntry(title=title, level=tag.level, target_id=target_id))
        info.heading_ids[node.node_id] = target_id

    for child in node.children:
        _visit(child, info)
