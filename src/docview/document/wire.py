"""Decode the JSON wire representation of documents and posts."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..errors import DocumentDecodeError
from .model import (
    CalloutTag,
    CodeTag,
    DividerTag,
    DocumentNode,
    EmbeddedLink,
    EquationTag,
    ExternalLink,
    HeadingTag,
    ImageTag,
    InlineCodeTag,
    InlineEquationTag,
    InlineStyle,
    InlineTag,
    InlineTextTag,
    ListItemTag,
    ListTag,
    ParagraphTag,
    Post,
    QuoteTag,
    ResourceLink,
    RootTag,
    TableCellTag,
    TableRowTag,
    TableTag,
    Tag,
    UnknownTag,
)

logger = logging.getLogger(__name__)


def decode_document(data: Any, *, path: str = "$") -> DocumentNode:
    """Decode one node (and its subtree) from parsed JSON.

    Unrecognized ``tag.type`` values become :class:`UnknownTag` so the renderer
    can show a placeholder instead of failing the whole document.
    """
    if not isinstance(data, Mapping):
        raise DocumentDecodeError(path, "node must be an object")

    raw_tag = data.get("tag")
    if not isinstance(raw_tag, Mapping):
        raise DocumentDecodeError(f"{path}.tag", "tag must be an object")
    tag = _decode_tag(raw_tag, f"{path}.tag")

    raw_children = data.get("children", [])
    if not isinstance(raw_children, list):
        raise DocumentDecodeError(f"{path}.children", "children must be a list")

    children = [decode_document(child, path=f"{path}.children[{idx}]") for idx, child in enumerate(raw_children)]
    return DocumentNode(tag=tag, children=children)


def decode_post(data: Any) -> Post:
    """Decode a post envelope: metadata plus its ``content`` document."""
    if not isinstance(data, Mapping):
        raise DocumentDecodeError("$", "post must be an object")
    if "content" not in data:
        raise DocumentDecodeError("$.content", "missing document content")

    tags = data.get("tags") or []
    if not isinstance(tags, list):
        raise DocumentDecodeError("$.tags", "tags must be a list")

    return Post(
        title=str(data.get("title", "")),
        slug=str(data.get("slug", "")),
        content=decode_document(data["content"], path="$.content"),
        author=str(data.get("author", "")),
        create_timestamp=_int_field(data, "createTimestamp"),
        update_timestamp=_int_field(data, "updateTimestamp"),
        category=str(data.get("category", "")),
        tags=[str(tag) for tag in tags],
    )


def _decode_tag(raw: Mapping[str, Any], path: str) -> Tag:
    tag_type = raw.get("type")
    if not isinstance(tag_type, str):
        raise DocumentDecodeError(f"{path}.type", "tag type must be a string")

    decoder = _TAG_DECODERS.get(tag_type)
    if decoder is None:
        logger.debug("Unknown tag type %r at %s", tag_type, path)
        payload = {key: value for key, value in raw.items() if key != "type"}
        return UnknownTag(type=tag_type, payload=payload)
    return decoder(raw, path)


def _decode_link(raw: Any, path: str) -> ResourceLink:
    if not isinstance(raw, Mapping):
        raise DocumentDecodeError(path, "resource link must be an object")
    link_type = raw.get("type")
    if link_type == "external":
        return ExternalLink(url=_require_str(raw, "url", path))
    if link_type == "embedded":
        return EmbeddedLink(resource_id=_require_str(raw, "uuid", path))
    raise DocumentDecodeError(f"{path}.type", f"unknown resource link type {link_type!r}")


def _decode_style(raw: Any, path: str) -> InlineStyle | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise DocumentDecodeError(path, "style must be an object")
    return InlineStyle(
        bold=bool(raw.get("bold", False)),
        italic=bool(raw.get("italic", False)),
        underline=bool(raw.get("underline", False)),
        strikethrough=bool(raw.get("strikeThrough", False)),
        color=_optional_str(raw, "color", path),
    )


def _decode_heading(raw: Mapping[str, Any], path: str) -> HeadingTag:
    level = raw.get("level")
    if isinstance(level, bool) or not isinstance(level, int):
        raise DocumentDecodeError(f"{path}.level", "heading level must be an integer")
    return HeadingTag(level=level)


def _require_str(raw: Mapping[str, Any], key: str, path: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise DocumentDecodeError(f"{path}.{key}", "expected a string")
    return value


def _optional_str(raw: Mapping[str, Any], key: str, path: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DocumentDecodeError(f"{path}.{key}", "expected a string or null")
    return value


def _int_field(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DocumentDecodeError(f"$.{key}", "expected a number")
    return int(value)


_TAG_DECODERS: dict[str, Callable[[Mapping[str, Any], str], Tag]] = {
    "root": lambda raw, path: RootTag(),
    "paragraph": lambda raw, path: ParagraphTag(),
    "heading": _decode_heading,
    "callout": lambda raw, path: CalloutTag(emoji=_optional_str(raw, "emoji", path)),
    "quote": lambda raw, path: QuoteTag(),
    "list": lambda raw, path: ListTag(ordered=bool(raw.get("isOrdered", False))),
    "listItem": lambda raw, path: ListItemTag(),
    "code": lambda raw, path: CodeTag(
        language=_require_str(raw, "language", path),
        code=_require_str(raw, "code", path),
        caption=_optional_str(raw, "caption", path),
    ),
    "equation": lambda raw, path: EquationTag(
        expr=_require_str(raw, "expr", path),
        caption=_optional_str(raw, "caption", path),
    ),
    "image": lambda raw, path: ImageTag(
        link=_decode_link(raw.get("link"), f"{path}.link"),
        caption=_optional_str(raw, "caption", path),
    ),
    "table": lambda raw, path: TableTag(caption=_optional_str(raw, "caption", path)),
    "tableRow": lambda raw, path: TableRowTag(),
    "tableCell": lambda raw, path: TableCellTag(),
    "divider": lambda raw, path: DividerTag(),
    "inline": lambda raw, path: InlineTag(
        style=_decode_style(raw.get("style"), f"{path}.style"),
        link=_optional_str(raw, "link", path),
    ),
    "inlineText": lambda raw, path: InlineTextTag(text=_require_str(raw, "text", path)),
    "inlineCode": lambda raw, path: InlineCodeTag(code=_require_str(raw, "code", path)),
    "inlineEquation": lambda raw, path: InlineEquationTag(expr=_require_str(raw, "expr", path)),
}
