"""Shared test fixtures and configuration."""

import pytest

from campus_api.cache import MemoryCache
from campus_api.config import Settings, build_targets
from campus_api.scrapers import Scrapers

from tests.pages import FakeSite, all_pages


@pytest.fixture
def settings() -> Settings:
    return Settings(api_token="s3cret", app_env="test")


@pytest.fixture
def targets(settings: Settings):
    return build_targets(settings)


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache(max_entries=1000)


@pytest.fixture
def site() -> FakeSite:
    return FakeSite(all_pages())


@pytest.fixture
def scrapers(targets, cache: MemoryCache, site: FakeSite) -> Scrapers:
    return Scrapers.build(targets, cache, site.fetcher())
