"""Cache-aware scraping pattern shared by every resource.

A request for a resource goes:

    check aggregate cache -> hit: return
                          -> miss: fetch list page -> parse entries
                             -> fetch + parse every detail page concurrently
                                (each checks / fills its own item cache entry)
                             -> keep the ones that succeeded
                             -> write the aggregate back -> return

Detail fetches are joined all-settled: a failed item is dropped and the
batch carries on. Two concurrent misses for the same key both scrape and
both write; the last write wins.
"""

import asyncio
from typing import Any, Awaitable, Generic, Iterable, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel
from rich.console import Console

from campus_api.cache import Cache
from campus_api.errors import CacheError, FetchError, UnknownTargetError
from campus_api.extractors.fetch import Fetcher
from campus_api.models import ListEntry, ScrapeTarget

console = Console()

RecordT = TypeVar("RecordT", bound=BaseModel)
T = TypeVar("T")

DEFAULT_KEY = "default"


async def gather_settled(coros: Iterable[Awaitable[T]]) -> list[Optional[T]]:
    """Run coroutines concurrently; failures come back as None."""
    results = await asyncio.gather(*coros, return_exceptions=True)

    settled: list[Optional[T]] = []
    for result in results:
        if isinstance(result, FetchError):
            console.print(f"[yellow]{result}[/yellow]")
            settled.append(None)
        elif isinstance(result, Exception):
            console.print(f"[red]Detail scrape failed: {type(result).__name__}: {result}[/red]")
            settled.append(None)
        elif isinstance(result, BaseException):
            raise result
        else:
            settled.append(result)
    return settled


class Scraper(Generic[RecordT]):
    """Cached scrape of one resource type, keyed by department / route / DEFAULT_KEY.

    Subclasses set `resource`, `record_model` and implement `build`.
    """

    resource: str = "resource"
    target_kind: str = "target"
    record_model: type[RecordT]

    def __init__(
        self,
        targets: Union[ScrapeTarget, Mapping[str, ScrapeTarget]],
        cache: Cache,
        fetcher: Fetcher,
    ):
        if isinstance(targets, ScrapeTarget):
            targets = {DEFAULT_KEY: targets}
        self.targets: dict[str, ScrapeTarget] = dict(targets)
        self.cache = cache
        self.fetcher = fetcher

    def target(self, key: str = DEFAULT_KEY) -> ScrapeTarget:
        try:
            return self.targets[key]
        except KeyError:
            raise UnknownTargetError(self.target_kind, key) from None

    async def get(self, key: str = DEFAULT_KEY) -> list[RecordT]:
        """Records for `key`, from cache when fresh, scraped otherwise.

        An unreachable list page yields [] and nothing is cached.
        """
        target = self.target(key)

        cached = self.cache.get(target.list_key)
        if cached is not None:
            console.print(f"[dim]Cache hit: {target.list_key}[/dim]")
            return [self.record_model.model_validate(r) for r in cached]

        try:
            records = await self.build(target)
        except FetchError as e:
            console.print(f"[red]{self.resource}: list page unavailable, {e}[/red]")
            return []

        if self.store(target.list_key, [r.model_dump() for r in records], target.ttl_seconds):
            console.print(f"[dim]Cached {len(records)} {self.resource} records under {target.list_key}[/dim]")
        return records

    def store(self, key: str, value: Any, ttl: int) -> bool:
        """Write to the cache. A failed write is logged and the scrape result still returned."""
        try:
            self.cache.set(key, value, ttl)
        except CacheError as e:
            console.print(f"[yellow]{self.resource}: {e}[/yellow]")
            return False
        return True

    async def build(self, target: ScrapeTarget) -> list[RecordT]:
        raise NotImplementedError

    def item_url(self, record: dict[str, Any]) -> Optional[str]:
        """Detail URL of a cached record, for records that have their own cache entry."""
        return None

    def clear(self, key: Optional[str] = None) -> int:
        """Drop the aggregate entry and every item entry it references.

        Clears all targets when key is None. Returns the number of targets cleared.
        """
        targets = [self.target(key)] if key is not None else list(self.targets.values())

        for target in targets:
            cached = self.cache.get(target.list_key) or []
            for record in cached:
                url = self.item_url(record)
                if url:
                    self.cache.delete(target.item_key(url))
            self.cache.delete(target.list_key)

        console.print(f"[dim]Cleared {self.resource} cache ({len(targets)} targets)[/dim]")
        return len(targets)


class ListScraper(Scraper[RecordT]):
    """List page -> concurrent detail pages.

    Subclasses implement `parse_list` and `parse_detail` as pure functions of
    HTML, and name the record field holding the detail URL in `url_field`.
    """

    url_field: str = "url"

    def parse_list(self, html: str, target: ScrapeTarget) -> list[ListEntry]:
        raise NotImplementedError

    def parse_detail(self, html: str, entry: ListEntry) -> Optional[RecordT]:
        raise NotImplementedError

    def order(self, records: list[RecordT]) -> list[RecordT]:
        """Final ordering of the aggregate; source order unless overridden."""
        return records

    def item_url(self, record: dict[str, Any]) -> Optional[str]:
        return record.get(self.url_field)

    async def build(self, target: ScrapeTarget) -> list[RecordT]:
        html = await self.fetcher.fetch(target.list_url)
        entries = self.parse_list(html, target)
        if not entries:
            console.print(f"[yellow]{self.resource}: no entries on {target.list_url}[/yellow]")
            return []

        results = await gather_settled(self.get_detail(target, entry) for entry in entries)
        records = [r for r in results if r is not None]

        if len(records) < len(entries):
            console.print(
                f"[yellow]{self.resource}: kept {len(records)}/{len(entries)} entries[/yellow]"
            )
        return self.order(records)

    async def get_detail(self, target: ScrapeTarget, entry: ListEntry) -> Optional[RecordT]:
        """One detail record, from its own cache entry or its page."""
        key = target.item_key(entry.detail_url)

        cached = self.cache.get(key)
        if cached is not None:
            return self.record_model.model_validate(cached)

        html = await self.fetcher.fetch(entry.detail_url)
        record = self.parse_detail(html, entry)
        if record is None:
            return None

        self.store(key, record.model_dump(), target.ttl_seconds)
        return record
