"""University-wide notices from the home page."""

from typing import Optional

from campus_api.extractors.html import collect_text, make_soup, resolve_url, select_text, warn_missing
from campus_api.extractors.text import clean_whitespace, split_date_token, truncate
from campus_api.models import ListEntry, Notice, ScrapeTarget
from campus_api.scrapers.base import ListScraper

# Selector plan
NOTICE_BLOCKS = "#ctl14_div_duyurulist1_ > div"
NOTICE_DATE = "div:first-child"
NOTICE_LINK = ".duyuruanadiv.label a"
TITLE = "#ctl14_aktivitebaslik_"
CONTENT = "#ctl14_aktivitedetay_"


class NoticeScraper(ListScraper[Notice]):
    """Home page notice block -> one page per notice."""

    resource = "notices"
    record_model = Notice
    url_field = "link"

    def parse_list(self, html: str, target: ScrapeTarget) -> list[ListEntry]:
        soup = make_soup(html)
        blocks = soup.select(NOTICE_BLOCKS)
        if not blocks:
            warn_missing("notice list", target.list_url)
            return []

        entries = []
        for block in blocks:
            link = block.select_one(NOTICE_LINK)
            href = (link.get("href") or "").strip() if link else ""
            # Only article pages; the block also holds "all notices" style links
            if not href.endswith(".html"):
                continue

            url = resolve_url(target.list_url, href)
            if not url:
                continue

            date_el = block.select_one(NOTICE_DATE)
            date = split_date_token(clean_whitespace(date_el.get_text())) if date_el else ""
            entries.append(ListEntry(detail_url=url, auxiliary=date))
        return entries

    def parse_detail(self, html: str, entry: ListEntry) -> Optional[Notice]:
        soup = make_soup(html)
        content = soup.select_one(CONTENT)
        if content is None:
            warn_missing("notice body", entry.detail_url)

        return Notice(
            link=entry.detail_url,
            title=select_text(soup, TITLE),
            content=truncate(collect_text(content)),
            announcement_date=entry.auxiliary or "",
        )
