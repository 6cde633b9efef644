"""Tagged document tree shared by the TOC extractor and the view transformer."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class RootTag:
    pass


@dataclass(frozen=True, slots=True)
class ParagraphTag:
    pass


@dataclass(frozen=True, slots=True)
class HeadingTag:
    level: int


@dataclass(frozen=True, slots=True)
class CalloutTag:
    emoji: str | None = None


@dataclass(frozen=True, slots=True)
class QuoteTag:
    pass


@dataclass(frozen=True, slots=True)
class ListTag:
    ordered: bool = False


@dataclass(frozen=True, slots=True)
class ListItemTag:
    pass


@dataclass(frozen=True, slots=True)
class CodeTag:
    language: str
    code: str
    caption: str | None = None


@dataclass(frozen=True, slots=True)
class EquationTag:
    expr: str
    caption: str | None = None


@dataclass(frozen=True, slots=True)
class ExternalLink:
    url: str


@dataclass(frozen=True, slots=True)
class EmbeddedLink:
    resource_id: str


ResourceLink = ExternalLink | EmbeddedLink


@dataclass(frozen=True, slots=True)
class ImageTag:
    link: ResourceLink
    caption: str | None = None


@dataclass(frozen=True, slots=True)
class TableTag:
    caption: str | None = None


@dataclass(frozen=True, slots=True)
class TableRowTag:
    pass


@dataclass(frozen=True, slots=True)
class TableCellTag:
    pass


@dataclass(frozen=True, slots=True)
class DividerTag:
    pass


@dataclass(frozen=True, slots=True)
class InlineStyle:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    color: str | None = None


@dataclass(frozen=True, slots=True)
class InlineTag:
    style: InlineStyle | None = None
    link: str | None = None


@dataclass(frozen=True, slots=True)
class InlineTextTag:
    text: str


@dataclass(frozen=True, slots=True)
class InlineCodeTag:
    code: str


@dataclass(frozen=True, slots=True)
class InlineEquationTag:
    expr: str


@dataclass(frozen=True, slots=True)
class UnknownTag:
    """A tag type this version does not understand, kept so it can be rendered as a placeholder."""

    type: str
    payload: Mapping[str, Any] = field(default_factory=dict)


Tag = (
    RootTag
    | ParagraphTag
    | HeadingTag
    | CalloutTag
    | QuoteTag
    | ListTag
    | ListItemTag
    | CodeTag
    | EquationTag
    | ImageTag
    | TableTag
    | TableRowTag
    | TableCellTag
    | DividerTag
    | InlineTag
    | InlineTextTag
    | InlineCodeTag
    | InlineEquationTag
    | UnknownTag
)

LEAF_TAGS = (InlineTextTag, InlineCodeTag, InlineEquationTag, DividerTag)


@dataclass(slots=True, eq=False)
class DocumentNode:
    """One node of the document tree.

    ``node_id`` is assigned by :class:`DocumentTree` and stays ``-1`` for nodes
    that were never numbered. Nodes compare by identity.
    """

    tag: Tag
    children: list[DocumentNode] = field(default_factory=list)
    node_id: int = -1

    @property
    def is_leaf(self) -> bool:
        return isinstance(self.tag, LEAF_TAGS)


class DocumentTree:
    """Arena over a document: every node gets a pre-order integer id.

    Associations keyed by ``node_id`` are only meaningful for the tree that
    numbered them.
    """

    def __init__(self, root: DocumentNode) -> None:
        self.root = root
        self.nodes: list[DocumentNode] = []
        stack = [root]
        while stack:
            node = stack.pop()
            node.node_id = len(self.nodes)
            self.nodes.append(node)
            stack.extend(reversed(node.children))

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[DocumentNode]:
        return iter(self.nodes)

    def node(self, node_id: int) -> DocumentNode:
        return self.nodes[node_id]


@dataclass(slots=True)
class Post:
    """A published document plus the metadata shown above it."""

    title: str
    slug: str
    content: DocumentNode
    author: str = ""
    create_timestamp: int = 0
    update_timestamp: int = 0
    category: str = ""
    tags: list[str] = field(default_factory=list)

    @property
    def edited(self) -> bool:
        return self.create_timestamp != self.update_timestamp


# Small constructors used by tests and by callers assembling trees by hand.


def node(tag: Tag, *children: DocumentNode) -> DocumentNode:
    return DocumentNode(tag=tag, children=list(children))


def text(value: str) -> DocumentNode:
    return DocumentNode(tag=InlineTextTag(value))


def heading(level: int, title: str) -> DocumentNode:
    return node(HeadingTag(level), text(title))


def paragraph(*runs: str | DocumentNode) -> DocumentNode:
    return node(ParagraphTag(), *(text(run) if isinstance(run, str) else run for run in runs))
