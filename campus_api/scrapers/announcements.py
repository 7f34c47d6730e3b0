"""Department announcements: the latest items of a department's home page."""

from typing import Optional

from campus_api.extractors.html import collect_text, make_soup, resolve_url, select_text, warn_missing
from campus_api.extractors.text import truncate
from campus_api.models import Announcement, ListEntry, ScrapeTarget
from campus_api.scrapers.base import ListScraper

# Selector plan
LIST_ITEMS = "#ctl15_div_duyurulist_ ul li"
ITEM_LINK = "div > div:nth-child(2) > span > a"
TITLE = "#ctl15_aktivitebaslik_"
CONTENT = "#ctl15_aktivitedetay_"

# Only the last N items of the list are kept
MAX_ANNOUNCEMENTS = 10


class AnnouncementScraper(ListScraper[Announcement]):
    """Department home page -> last ten announcement pages."""

    resource = "announcement"
    target_kind = "department"
    record_model = Announcement
    url_field = "url"

    def parse_list(self, html: str, target: ScrapeTarget) -> list[ListEntry]:
        soup = make_soup(html)
        items = soup.select(LIST_ITEMS)
        if not items:
            warn_missing("announcement list", target.list_url)
            return []

        entries = []
        for item in items[-MAX_ANNOUNCEMENTS:]:
            link = item.select_one(ITEM_LINK)
            url = resolve_url(target.list_url, link.get("href") if link else None)
            if url:
                entries.append(ListEntry(detail_url=url))
        return entries

    def parse_detail(self, html: str, entry: ListEntry) -> Optional[Announcement]:
        soup = make_soup(html)
        content = soup.select_one(CONTENT)
        if content is None:
            warn_missing("announcement body", entry.detail_url)

        return Announcement(
            title=select_text(soup, TITLE),
            url=entry.detail_url,
            content=truncate(collect_text(content)),
        )
