"""Cafeteria menu for today and the next two days."""

from bs4 import Tag

from campus_api.extractors.html import make_soup, warn_missing
from campus_api.extractors.text import clean_whitespace, parse_menu_item, split_date_token
from campus_api.models import DayMenu, MenuItem, ScrapeTarget
from campus_api.scrapers.base import Scraper

MENU_CONTAINER = "ctl14_div_yemeklist_"
DAY_BLOCK_STYLE = "border-bottom"
TODAY_STYLE = "background-color:#ecc41a"  # Yellow date label

DAY_LABELS = ["Bugün", "Yarın", "Sonraki Gün"]


def _style(el: Tag) -> str:
    return el.get("style") or ""


def is_today(block: Tag) -> bool:
    first = block.find("div")
    return first is not None and TODAY_STYLE in _style(first).replace(" ", "")


def parse_day(block: Tag, label: str, url: str) -> DayMenu:
    """First inner div is the date, the rest are dishes."""
    inner = block.find_all("div")
    date = split_date_token(clean_whitespace(inner[0].get_text())) if inner else ""

    items = []
    for div in inner[1:]:
        text = clean_whitespace(div.get_text())
        if text:
            name, calories = parse_menu_item(text)
            items.append(MenuItem(name=name, calories=calories))

    return DayMenu(day=label, date=date, url=url, menu=items)


def parse_menu(html: str, url: str = "") -> list[DayMenu]:
    """Menus from today (the highlighted block) onward, at most three days."""
    soup = make_soup(html)
    container = soup.find(id=MENU_CONTAINER)
    if container is None:
        warn_missing("menu container", url)
        return []

    blocks = [
        child for child in container.find_all("div", recursive=False)
        if DAY_BLOCK_STYLE in _style(child)
    ]

    today = next((i for i, block in enumerate(blocks) if is_today(block)), None)
    if today is None:
        warn_missing("today's highlighted menu", url)
        return []

    menus = []
    for offset, label in enumerate(DAY_LABELS):
        index = today + offset
        if index >= len(blocks):
            warn_missing(f"menu for {label}", url)
            break
        menus.append(parse_day(blocks[index], label, url))
    return menus


class MenuScraper(Scraper[DayMenu]):
    """Single menu page."""

    resource = "yemek"
    record_model = DayMenu

    async def build(self, target: ScrapeTarget) -> list[DayMenu]:
        html = await self.fetcher.fetch(target.list_url)
        return parse_menu(html, target.list_url)
