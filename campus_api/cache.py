"""Key-value cache with per-entry TTL.

Scrapers only see the `Cache` contract (get / set / delete). Values are any
JSON-compatible object and are stored as JSON text, so a hit returns a fresh
copy rather than a shared reference.

Three stores:
- MemoryCache: process-local, bounded by max entries (cachetools TLRUCache)
- FileCache: one JSON file per key, survives restarts
- RedisCache: shared Redis server, expiry handled by Redis itself

A store that cannot write raises CacheError; reads that fail count as misses.
"""

import hashlib
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

import redis
from cachetools import TLRUCache
from rich.console import Console

from campus_api.config import Settings
from campus_api.errors import CacheError

console = Console()


class Cache(Protocol):
    """Storage contract used by the scrapers."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any, ttl: int) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


class MemoryCache:
    """In-process cache; each entry expires `ttl` seconds after it was set."""

    def __init__(self, max_entries: int = 100, timer: Callable[[], float] = time.monotonic):
        # Entries are (json_text, ttl); ttu computes the expiry from the ttl
        self._store: TLRUCache = TLRUCache(
            maxsize=max_entries,
            ttu=lambda _key, entry, now: now + entry[1],
            timer=timer,
        )

    def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            return None
        return json.loads(entry[0])

    def set(self, key: str, value: Any, ttl: int) -> None:
        self._store[key] = (_dumps(value), ttl)

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def __len__(self) -> int:
        return len(self._store)


class FileCache:
    """Disk cache: one JSON file per key holding the value and its expiry."""

    def __init__(self, cache_dir: Path, timer: Callable[[], float] = time.time):
        self.cache_dir = Path(cache_dir)
        self._timer = timer

    def _path(self, key: str) -> Path:
        key_hash = hashlib.sha256(key.encode()).hexdigest()[:32]
        return self.cache_dir / f"{key_hash}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                entry = json.load(f)
            if entry["key"] != key:
                return None
            if entry["expires_at"] <= self._timer():
                path.unlink(missing_ok=True)
                return None
            return json.loads(entry["value"])
        except (json.JSONDecodeError, KeyError, OSError) as e:
            console.print(f"[yellow]Unreadable cache entry {key}: {e}[/yellow]")
            return None

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Write the entry to a temp file, then move it over the old one."""
        entry = {
            "key": key,
            "expires_at": self._timer() + ttl,
            "value": _dumps(value),
        }
        tmp_name = None
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.cache_dir, suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                json.dump(entry, f, ensure_ascii=False)
            os.replace(tmp_name, self._path(key))
        except OSError as e:
            if tmp_name:
                Path(tmp_name).unlink(missing_ok=True)
            raise CacheError(f"could not write cache entry {key}: {e}") from e

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class RedisCache:
    """Redis-backed cache; entries are set with EX so Redis expires them."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCache":
        # Connects lazily, on the first command
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> Optional[Any]:
        try:
            raw = self.client.get(key)
        except redis.RedisError as e:
            console.print(f"[yellow]Redis read failed for {key}: {e}[/yellow]")
            return None
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any, ttl: int) -> None:
        try:
            self.client.set(key, _dumps(value), ex=ttl)
        except redis.RedisError as e:
            raise CacheError(f"could not write cache entry {key}: {e}") from e

    def delete(self, key: str) -> None:
        self.client.delete(key)


def create_cache(settings: Settings) -> Cache:
    """Build the store selected by CACHE_BACKEND."""
    if settings.cache_backend == "file":
        console.print(f"[dim]Using file cache at {settings.cache_dir}[/dim]")
        return FileCache(settings.cache_dir)
    if settings.cache_backend == "redis":
        console.print(f"[dim]Using Redis cache at {settings.redis_url}[/dim]")
        return RedisCache.from_url(settings.redis_url)
    return MemoryCache(max_entries=settings.cache_max_entries)
