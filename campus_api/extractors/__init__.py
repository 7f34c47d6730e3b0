"""Page fetching and field extraction.

- fetch: httpx client that raises FetchError on any failure
- html: BeautifulSoup helpers that return empty values on selector misses
- text: whitespace, truncation, date and calorie cleanup
"""

from campus_api.extractors.fetch import Fetcher
from campus_api.extractors.html import make_soup, select_text, own_text, collect_text, resolve_url
from campus_api.extractors.text import (
    clean_whitespace,
    truncate,
    split_date_token,
    parse_menu_item,
    find_dmy_date,
)

__all__ = [
    "Fetcher",
    "make_soup",
    "select_text",
    "own_text",
    "collect_text",
    "resolve_url",
    "clean_whitespace",
    "truncate",
    "split_date_token",
    "parse_menu_item",
    "find_dmy_date",
]
