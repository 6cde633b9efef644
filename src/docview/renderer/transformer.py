"""Transform a document tree into a view tree, one element per node."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..content.resources import ResourceResolver
from ..document.model import (
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
    QuoteTag,
    ResourceLink,
    RootTag,
    TableCellTag,
    TableRowTag,
    TableTag,
    UnknownTag,
)
from ..errors import ResourceResolutionError
from ..toc.registry import TocRegistry
from ..view.element import TextNode, ViewElement, element

logger = logging.getLogger(__name__)

CODE_LANGUAGE_ALIASES = {
    "c++": "cpp",
    "c#": "csharp",
    "f#": "fsharp",
    "objective-c": "objectivec",
    "plain text": "text",
    "shell": "bash",
    "vb.net": "vbnet",
    "visual basic": "visual-basic",
    "webassembly": "wasm",
    "xml": "xml-doc",
    "java/c/c++/c#": "text",
}

COLOR_PALETTE = frozenset(
    {
        "default",
        "gray",
        "brown",
        "orange",
        "yellow",
        "green",
        "blue",
        "purple",
        "pink",
        "red",
        "gray_background",
        "brown_background",
        "orange_background",
        "yellow_background",
        "green_background",
        "blue_background",
        "purple_background",
        "pink_background",
        "red_background",
    }
)

_HEADING_TAGS = {1: "h2", 2: "h3", 3: "h4", 4: "h5"}

_STYLE_CLASSES = (
    ("bold", "doc-bold"),
    ("italic", "doc-italic"),
    ("underline", "doc-underline"),
    ("strikethrough", "doc-strikethrough"),
)


def code_language(language: str) -> str:
    """Map a document language name to the highlighter's name for it."""
    return CODE_LANGUAGE_ALIASES.get(language, language)


def heading_tag(level: int) -> str:
    return _HEADING_TAGS.get(level, "h6")


def color_class(color: str | None) -> str | None:
    if color is None or color not in COLOR_PALETTE:
        return None
    return "doc-color-" + color.replace("_", "-")


class DocumentTransformer:
    """Render document nodes into view elements.

    ``heading_ids`` comes from :func:`docview.toc.extract_toc` for the same
    tree; headings missing from it render without an anchor. When a registry
    is given, each anchored heading registers its handle on mount.
    """

    def __init__(
        self,
        *,
        heading_ids: Mapping[int, str] | None = None,
        registry: TocRegistry | None = None,
        resolver: ResourceResolver | None = None,
        math_engine: str = "none",
    ) -> None:
        self.heading_ids = heading_ids or {}
        self.registry = registry
        self.resolver = resolver
        self.math_engine = math_engine

    def transform(self, node: DocumentNode) -> ViewElement:
        children = [self.transform(child) for child in node.children]
        tag = node.tag

        if isinstance(tag, RootTag):
            return element("main", *children, classes=["doc-content"])

        if isinstance(tag, ParagraphTag):
            return element("p", *children, classes=["doc-paragraph"])

        if isinstance(tag, HeadingTag):
            return self._render_heading(node, tag, children)

        if isinstance(tag, CalloutTag):
            return self._render_callout(tag, children)

        if isinstance(tag, QuoteTag):
            return element("blockquote", *children, classes=["doc-quote"])

        if isinstance(tag, ListTag):
            if tag.ordered:
                return element("ol", *children, classes=["doc-list", "doc-list-ordered"])
            return element("ul", *children, classes=["doc-list", "doc-list-bulleted"])

        if isinstance(tag, ListItemTag):
            return element("li", *children)

        if isinstance(tag, CodeTag):
            return self._render_code(tag)

        if isinstance(tag, EquationTag):
            block = element("div", TextNode(tag.expr), classes=["doc-equation"], data_engine=self.math_engine)
            return _with_caption(block, tag.caption)

        if isinstance(tag, ImageTag):
            return self._render_image(tag)

        if isinstance(tag, TableTag):
            table = element("table", *children, classes=["doc-table"])
            return _with_caption(table, tag.caption, at_top=True)

        if isinstance(tag, TableRowTag):
            return element("tr", *children)

        if isinstance(tag, TableCellTag):
            return element("td", *children)

        if isinstance(tag, DividerTag):
            return element("hr", classes=["doc-divider"])

        if isinstance(tag, InlineTag):
            return self._render_inline(tag, children)

        if isinstance(tag, InlineTextTag):
            return element("span", TextNode(tag.text))

        if isinstance(tag, InlineCodeTag):
            return element("code", TextNode(tag.code), classes=["doc-inline-code"])

        if isinstance(tag, InlineEquationTag):
            return element("span", TextNode(tag.expr), classes=["doc-math-inline"], data_engine=self.math_engine)

        return self._render_unsupported(tag)

    def _render_heading(self, node: DocumentNode, tag: HeadingTag, children: list[ViewElement]) -> ViewElement:
        heading = element(heading_tag(tag.level), *children, classes=["doc-heading"])
        target_id = self.heading_ids.get(node.node_id)
        if target_id is None:
            return heading

        heading.attrs["id"] = target_id
        registry = self.registry
        if registry is not None:

            def on_mount(handle) -> None:
                registry.mount_heading(target_id, handle)

            heading.on_mount = on_mount
        return heading

    def _render_callout(self, tag: CalloutTag, children: list[ViewElement]) -> ViewElement:
        callout = element("div", classes=["doc-callout"])
        if tag.emoji:
            callout.append(element("div", element("span", TextNode(tag.emoji)), classes=["doc-callout-icon"]))
        callout.append(element("div", *children, classes=["doc-callout-content"]))
        return callout

    def _render_code(self, tag: CodeTag) -> ViewElement:
        language = code_language(tag.language)
        code = element("code", TextNode(tag.code), classes=[f"language-{language}"])
        block = element("pre", code, classes=["doc-code"], data_language=language)
        return _with_caption(block, tag.caption)

    def _render_image(self, tag: ImageTag) -> ViewElement:
        src = self._resolve_link(tag.link)
        if src is None:
            image = element("span", TextNode("(image unavailable)"), classes=["doc-image-missing"], role="img")
        else:
            image = element("img", classes=["doc-image"], src=src, alt=tag.caption or "", loading="lazy")
        figure = element("div", image, classes=["doc-image-align"])
        return _with_caption(figure, tag.caption)

    def _resolve_link(self, link: ResourceLink) -> str | None:
        if isinstance(link, ExternalLink):
            return link.url
        if isinstance(link, EmbeddedLink):
            if self.resolver is None:
                logger.warning("No resource resolver configured; cannot resolve %s", link.resource_id)
                return None
            try:
                return self.resolver.resolve(link.resource_id)
            except ResourceResolutionError as exc:
                logger.warning("Image resource unresolved: %s", exc)
                return None
        return None

    def _render_inline(self, tag: InlineTag, children: list[ViewElement]) -> ViewElement:
        classes = _inline_classes(tag.style)
        if tag.link is not None:
            return element(
                "a",
                *children,
                classes=classes,
                href=tag.link,
                target="_blank",
                rel="noopener noreferrer",
            )
        return element("span", *children, classes=classes)

    def _render_unsupported(self, tag: object) -> ViewElement:
        tag_name = tag.type if isinstance(tag, UnknownTag) else type(tag).__name__
        logger.warning("Unsupported document content %r rendered as placeholder", tag_name)
        return element(
            "div",
            TextNode(f"Unsupported content: {tag_name}"),
            classes=["doc-unsupported"],
            role="note",
            data_tag=tag_name,
        )


def _inline_classes(style: InlineStyle | None) -> list[str]:
    if style is None:
        return []
    classes = [css for flag, css in _STYLE_CLASSES if getattr(style, flag)]
    color = color_class(style.color)
    if color is not None:
        classes.append(color)
    elif style.color is not None:
        logger.debug("Dropping unknown color token %r", style.color)
    return classes


def _with_caption(content: ViewElement, caption: str | None, *, at_top: bool = False) -> ViewElement:
    wrapper = element("div", classes=["doc-captioned"])
    caption_el = element("div", TextNode(caption), classes=["doc-caption"]) if caption is not None else None
    if at_top and caption_el is not None:
        wrapper.append(caption_el)
    wrapper.append(content)
    if not at_top and caption_el is not None:
        wrapper.append(caption_el)
    return wrapper
