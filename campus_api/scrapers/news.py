"""News articles from the home page."""

from typing import Optional

from campus_api.extractors.html import make_soup, own_text, resolve_url, select_text, warn_missing
from campus_api.extractors.text import clean_whitespace, truncate
from campus_api.models import ListEntry, NewsItem, ScrapeTarget
from campus_api.scrapers.base import ListScraper

# Selector plan
NEWS_BLOCKS = "#ctl14_div_haberler > div"
TITLE = "#ctl14_aktivitebaslik_"
IMAGE = "#ctl14_aktivitedetay_ div a img"
# Lead paragraph; the first <p> holds the image
CONTENT = "#ctl14_aktivitedetay_ > p:nth-of-type(2) > span"


class NewsScraper(ListScraper[NewsItem]):
    """News block -> one page per article."""

    resource = "news"
    record_model = NewsItem
    url_field = "link"

    def parse_list(self, html: str, target: ScrapeTarget) -> list[ListEntry]:
        soup = make_soup(html)
        blocks = soup.select(NEWS_BLOCKS)
        if not blocks:
            warn_missing("news list", target.list_url)
            return []

        entries = []
        seen = set()
        for block in blocks:
            link = block.find("a")
            url = resolve_url(target.list_url, link.get("href") if link else None)
            if url and url not in seen:
                seen.add(url)
                entries.append(ListEntry(detail_url=url))
        return entries

    def parse_detail(self, html: str, entry: ListEntry) -> Optional[NewsItem]:
        soup = make_soup(html)

        img = soup.select_one(IMAGE)
        img_url = resolve_url(entry.detail_url, img.get("src") if img else None) or ""

        content_el = soup.select_one(CONTENT)
        if content_el is None:
            warn_missing("news lead paragraph", entry.detail_url)

        return NewsItem(
            link=entry.detail_url,
            title=select_text(soup, TITLE),
            img_url=img_url,
            content=truncate(clean_whitespace(own_text(content_el))),
        )
