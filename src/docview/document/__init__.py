"""Document tree model package."""

from .model import (
    CalloutTag,
    CodeTag,
    DividerTag,
    DocumentNode,
    DocumentTree,
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
    RootTag,
    TableCellTag,
    TableRowTag,
    TableTag,
    Tag,
    UnknownTag,
)
from .text import plain_text
from .wire import decode_document, decode_post

__all__ = [
    "CalloutTag",
    "CodeTag",
    "DividerTag",
    "DocumentNode",
    "DocumentTree",
    "EmbeddedLink",
    "EquationTag",
    "ExternalLink",
    "HeadingTag",
    "ImageTag",
    "InlineCodeTag",
    "InlineEquationTag",
    "InlineStyle",
    "InlineTag",
    "InlineTextTag",
    "ListItemTag",
    "ListTag",
    "ParagraphTag",
    "Post",
    "QuoteTag",
    "RootTag",
    "TableCellTag",
    "TableRowTag",
    "TableTag",
    "Tag",
    "UnknownTag",
    "decode_document",
    "decode_post",
    "plain_text",
]
