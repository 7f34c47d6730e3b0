"""Exceptions raised by the scrapers and the API layer."""

from typing import Optional


class CampusAPIError(Exception):
    """Base class for campus-api errors."""


class FetchError(CampusAPIError):
    """An upstream page could not be retrieved.

    `reason` is "timeout", "connection", the HTTP status code as a string,
    or the lowercased name of whatever else went wrong.
    """

    def __init__(self, url: str, reason: str, status: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"fetch failed for {url}: {reason}")


UpstreamFetchError = FetchError


class ConfigurationError(CampusAPIError):
    """Settings are missing or invalid."""


class UnknownTargetError(CampusAPIError):
    """A department, route or resource name has no configured target."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"unknown {kind}: {name}")


class CacheError(CampusAPIError):
    """The cache store could not be written."""
