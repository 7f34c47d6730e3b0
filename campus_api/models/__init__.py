"""Data models for campus-api."""

from campus_api.models.target import ScrapeTarget, ListEntry
from campus_api.models.records import (
    StaffMember,
    Announcement,
    Notice,
    NewsItem,
    EventItem,
    BusDeparture,
    MenuItem,
    DayMenu,
    ClearCacheResult,
)

__all__ = [
    "ScrapeTarget",
    "ListEntry",
    "StaffMember",
    "Announcement",
    "Notice",
    "NewsItem",
    "EventItem",
    "BusDeparture",
    "MenuItem",
    "DayMenu",
    "ClearCacheResult",
]
