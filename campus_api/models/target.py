"""Scrape target configuration and list-page entries."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ScrapeTarget(BaseModel):
    """Where one resource lives upstream and how long its data stays cached."""

    model_config = ConfigDict(frozen=True)

    list_url: str
    cache_key_prefix: str
    ttl_seconds: int = Field(gt=0)

    @property
    def list_key(self) -> str:
        """Cache key of the aggregate list."""
        return f"{self.cache_key_prefix}:list"

    def item_key(self, url: str) -> str:
        """Cache key of a single detail record."""
        return f"{self.cache_key_prefix}:item:{url}"


class ListEntry(BaseModel):
    """A link found on a list page, plus whatever the list view showed next to it."""

    detail_url: str
    auxiliary: Optional[str] = None  # e.g. a date string from the list view
