"""Municipal bus timetables for the university lines."""

from typing import Optional

from bs4 import Tag

from campus_api.extractors.html import make_soup, warn_missing
from campus_api.models import BusDeparture, ScrapeTarget
from campus_api.scrapers.base import Scraper

HEADER_MARKERS = ("Çarşı Kalkış", "Üniversite Kalkış")

# Header row is searched for among the first N rows
HEADER_SEARCH_ROWS = 5


def find_schedule_table(tables: list[Tag]) -> Optional[Tag]:
    """Table whose text names a departure column, else the one with the most rows."""
    for table in tables:
        text = table.get_text()
        if any(marker in text for marker in HEADER_MARKERS):
            return table

    best, max_rows = None, 0
    for table in tables:
        rows = len(table.find_all("tr"))
        if rows > max_rows:
            best, max_rows = table, rows
    return best


def parse_schedule(html: str, url: str = "") -> list[BusDeparture]:
    """Departure pairs from the timetable table on a route page."""
    soup = make_soup(html)
    table = find_schedule_table(soup.find_all("table"))
    if table is None:
        warn_missing("timetable table", url)
        return []

    rows = table.find_all("tr")

    start = 0
    for i, row in enumerate(rows[:HEADER_SEARCH_ROWS]):
        text = row.get_text()
        if any(marker in text for marker in HEADER_MARKERS):
            start = i + 1
            break

    departures = []
    for row in rows[start:]:
        cells = row.find_all("td")
        # No, Çarşı Kalkış, ..., Üniversite Kalkış
        if len(cells) < 3:
            continue
        center = cells[1].get_text().strip()
        university = cells[-1].get_text().strip()
        if center or university:
            departures.append(BusDeparture(center_departure=center, university_departure=university))
    return departures


class BusScheduleScraper(Scraper[BusDeparture]):
    """One timetable page per route, no detail pages."""

    resource = "bus-schedule"
    target_kind = "route"
    record_model = BusDeparture

    async def build(self, target: ScrapeTarget) -> list[BusDeparture]:
        html = await self.fetcher.fetch(target.list_url)
        return parse_schedule(html, target.list_url)

    async def get_all(self) -> dict[str, list[BusDeparture]]:
        """Every route's timetable keyed by the route page's slug."""
        result = {}
        for key, target in self.targets.items():
            slug = target.list_url.rstrip("/").rsplit("/", 1)[-1]
            result[slug] = await self.get(key)
        return result
