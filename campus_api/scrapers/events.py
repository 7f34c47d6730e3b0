"""Events calendar block, newest first."""

from typing import Optional

from campus_api.extractors.html import make_soup, resolve_url, select_text, warn_missing
from campus_api.extractors.text import clean_whitespace, dmy_sort_key, find_dmy_date
from campus_api.models import EventItem, ListEntry, ScrapeTarget
from campus_api.scrapers.base import ListScraper

# Selector plan
EVENT_BLOCKS = "#ctl14_div_alt_etkinlik > div"
EVENT_LINK = "div a"
EVENT_DATE = '.date, .eventDate, [id*="date"]'
TITLE = "#ctl14_aktivitebaslik_"


def sort_newest_first(events: list[EventItem]) -> list[EventItem]:
    """Order by D.M.YYYY date, newest first; undated events keep their order at the end."""
    dated = [e for e in events if dmy_sort_key(e.date)]
    undated = [e for e in events if not dmy_sort_key(e.date)]
    dated.sort(key=lambda e: dmy_sort_key(e.date), reverse=True)
    return dated + undated


class EventScraper(ListScraper[EventItem]):
    """Events block -> one page per event (for its title)."""

    resource = "events"
    record_model = EventItem
    url_field = "link"

    def parse_list(self, html: str, target: ScrapeTarget) -> list[ListEntry]:
        soup = make_soup(html)
        blocks = soup.select(EVENT_BLOCKS)
        if not blocks:
            warn_missing("event list", target.list_url)
            return []

        entries = []
        for block in blocks:
            link = block.select_one(EVENT_LINK)
            url = resolve_url(target.list_url, link.get("href") if link else None)
            if not url:
                continue

            date = select_text(block, EVENT_DATE)
            if not date:
                date = find_dmy_date(clean_whitespace(block.get_text(" ")))

            entries.append(ListEntry(detail_url=url, auxiliary=date))
        return entries

    def parse_detail(self, html: str, entry: ListEntry) -> Optional[EventItem]:
        soup = make_soup(html)
        return EventItem(
            link=entry.detail_url,
            title=select_text(soup, TITLE),
            date=entry.auxiliary or "",
        )

    def order(self, records: list[EventItem]) -> list[EventItem]:
        return sort_newest_first(records)
