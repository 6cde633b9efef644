"""Collaborators that supply documents and resource URLs."""

from .resources import ApiResourceResolver, MappingResourceResolver, ResourceResolver
from .source import ContentSource, DirectoryContentSource, fetch_post, load_post

__all__ = [
    "ApiResourceResolver",
    "ContentSource",
    "DirectoryContentSource",
    "MappingResourceResolver",
    "ResourceResolver",
    "fetch_post",
    "load_post",
]
