"""Exceptions raised by docview."""

from __future__ import annotations


class DocviewError(Exception):
    """Base class for docview errors."""


class DocumentDecodeError(DocviewError):
    """The wire representation of a document is structurally invalid."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class ResourceResolutionError(DocviewError):
    """An embedded resource id has no URL."""

    def __init__(self, resource_id: str, reason: str = "no URL for resource") -> None:
        super().__init__(f"{reason}: {resource_id}")
        self.resource_id = resource_id


class DocumentNotFoundError(DocviewError):
    """The content source has no document for the requested slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"document not found: {slug}")
        self.slug = slug
