"""DOM helpers over BeautifulSoup.

Selectors that match nothing return empty values instead of raising: when
the upstream markup changes the API degrades to empty fields, and the miss
is reported with `warn_missing`.
"""

from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from rich.console import Console

console = Console()


def make_soup(html: str) -> BeautifulSoup:
    """Parse an HTML document."""
    return BeautifulSoup(html, "lxml")


def warn_missing(what: str, where: str) -> None:
    """Report an expected element that isn't on the page."""
    console.print(f"[yellow]Not found: {what} ({where})[/yellow]")


def select_text(root: Tag, selector: str) -> str:
    """Stripped text of the first element matching selector, or ""."""
    el = root.select_one(selector)
    if el is None:
        return ""
    return el.get_text().strip()


def own_text(el: Optional[Tag]) -> str:
    """Text of the element's first direct text node, falling back to all its text."""
    if el is None:
        return ""
    first = el.contents[0] if el.contents else None
    if isinstance(first, NavigableString):
        return str(first).strip()
    return el.get_text().strip()


def collect_text(el: Optional[Tag]) -> str:
    """Join every text node under el with single spaces."""
    if el is None:
        return ""
    parts = []
    for node in el.find_all(string=True):
        if isinstance(node, Comment):
            continue
        text = " ".join(str(node).split())
        if text:
            parts.append(text)
    return " ".join(parts)


def resolve_url(base: str, href: Optional[str]) -> Optional[str]:
    """Absolute URL for href relative to base; None for empty or non-web links."""
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith(("#", "javascript:", "mailto:")):
        return None
    return urljoin(base, href)
