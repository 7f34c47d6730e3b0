"""Text cleanup helpers for scraped fields."""

import re
from typing import Optional

CONTENT_LIMIT = 250
ELLIPSIS = "..."

# "28Şubat" -> "28 Şubat"
DATE_TOKEN_PATTERN = re.compile(r"(\d+)([^\W\d_]+)")

# "Mercimek Çorbası 120 Kalori"
CALORIE_PATTERN = re.compile(r"(.*?)(\d+)\s*Kalori$", re.I)

# 5.3.2026, 05/03/2026, 5-3-2026
DMY_PATTERN = re.compile(r"(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{4})")


def clean_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace to one space and trim."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def truncate(text: str, limit: int = CONTENT_LIMIT) -> str:
    """Cap text at `limit` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def split_date_token(text: str) -> str:
    """Put a single space between a day number and the month name glued to it."""
    return DATE_TOKEN_PATTERN.sub(r"\1 \2", text)


def parse_menu_item(text: str) -> tuple[str, int]:
    """Split a menu line into (name, calories).

    Lines without a trailing "<n> Kalori" are all name, with 0 calories.
    """
    text = text.strip()
    match = CALORIE_PATTERN.match(text)
    if match:
        return match.group(1).strip(), int(match.group(2))
    return text, 0


def find_dmy_date(text: str) -> str:
    """Return the first D.M.YYYY-like date in text as "D.M.YYYY", or ""."""
    match = DMY_PATTERN.search(text)
    if not match:
        return ""
    return f"{match.group(1)}.{match.group(2)}.{match.group(3)}"


def dmy_sort_key(date: str) -> Optional[tuple[int, int, int]]:
    """(year, month, day) for a D.M.YYYY string, None when it doesn't parse."""
    parts = re.split(r"[./\-]", date.strip()) if date else []
    if len(parts) < 3:
        return None
    try:
        day, month, year = (int(p) for p in parts[:3])
    except ValueError:
        return None
    return year, month, day
