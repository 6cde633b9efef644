"""Resolve embedded resource ids into URLs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol
from urllib.parse import quote, urljoin

from ..errors import ResourceResolutionError


class ResourceResolver(Protocol):
    def resolve(self, resource_id: str) -> str:  # pragma: no cover - structural protocol
        """Return the URL for ``resource_id`` or raise ResourceResolutionError."""


class ApiResourceResolver:
    """Point embedded resources at the content server's ``/api/resources`` endpoint."""

    def __init__(self, server_url: str) -> None:
        if not server_url:
            raise ValueError("server_url must not be empty")
        self.server_url = server_url

    def resolve(self, resource_id: str) -> str:
        if not resource_id:
            raise ResourceResolutionError(resource_id, "empty resource id")
        return urljoin(self.server_url, f"/api/resources/{quote(resource_id, safe='')}")


class MappingResourceResolver:
    """Look resource ids up in a fixed table."""

    def __init__(self, urls: Mapping[str, str]) -> None:
        self._urls = dict(urls)

    def resolve(self, resource_id: str) -> str:
        try:
            return self._urls[resource_id]
        except KeyError:
            raise ResourceResolutionError(resource_id) from None
