"""Render tagged documents into navigable views with a scroll-synchronized table of contents."""

from .config import RenderSettings
from .document import DocumentNode, DocumentTree, Post, decode_document, decode_post, plain_text
from .errors import DocumentDecodeError, DocumentNotFoundError, DocviewError, ResourceResolutionError
from .renderer import DocumentTransformer, PageRenderer
from .toc import ScrollSpy, TocEntry, TocRegistry, extract_toc
from .view.document_view import DocumentView

__all__ = [
    "DocumentDecodeError",
    "DocumentNode",
    "DocumentNotFoundError",
    "DocumentTransformer",
    "DocumentTree",
    "DocumentView",
    "DocviewError",
    "PageRenderer",
    "Post",
    "RenderSettings",
    "ResourceResolutionError",
    "ScrollSpy",
    "TocEntry",
    "TocRegistry",
    "decode_document",
    "decode_post",
    "extract_toc",
    "plain_text",
]
