"""Plain-text projection of document nodes."""

from __future__ import annotations

from .model import DocumentNode, InlineCodeTag, InlineEquationTag, InlineTextTag


def plain_text(node: DocumentNode) -> str:
    """Return the literal text under ``node``, ignoring styling and links.

    Child texts are joined with no separator. The blog front end joined them
    with commas (``Array.join()``), so anchors for headings made of several
    runs differ from the ones that site produced.
    """
    tag = node.tag
    if isinstance(tag, InlineTextTag):
        return tag.text
    if isinstance(tag, InlineCodeTag):
        return tag.code
    if isinstance(tag, InlineEquationTag):
        return tag.expr
    return "".join(plain_text(child) for child in node.children)
