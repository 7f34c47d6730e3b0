"""One scraper per resource type, all built on the cached list -> detail pattern."""

from dataclasses import dataclass

from campus_api.cache import Cache
from campus_api.config import Targets
from campus_api.extractors.fetch import Fetcher
from campus_api.scrapers.base import DEFAULT_KEY, ListScraper, Scraper, gather_settled
from campus_api.scrapers.academic_staff import AcademicStaffScraper
from campus_api.scrapers.announcements import AnnouncementScraper
from campus_api.scrapers.bus import BusScheduleScraper
from campus_api.scrapers.menu import MenuScraper
from campus_api.scrapers.news import NewsScraper
from campus_api.scrapers.events import EventScraper
from campus_api.scrapers.notices import NoticeScraper


@dataclass
class Scrapers:
    """Every scraper the API serves, sharing one cache and one fetcher."""

    staff: AcademicStaffScraper
    announcements: AnnouncementScraper
    bus: BusScheduleScraper
    menu: MenuScraper
    news: NewsScraper
    events: EventScraper
    notices: NoticeScraper

    @classmethod
    def build(cls, targets: Targets, cache: Cache, fetcher: Fetcher) -> "Scrapers":
        return cls(
            staff=AcademicStaffScraper(targets.staff, cache, fetcher),
            announcements=AnnouncementScraper(targets.announcements, cache, fetcher),
            bus=BusScheduleScraper(targets.bus, cache, fetcher),
            menu=MenuScraper(targets.menu, cache, fetcher),
            news=NewsScraper(targets.news, cache, fetcher),
            events=EventScraper(targets.events, cache, fetcher),
            notices=NoticeScraper(targets.notices, cache, fetcher),
        )


__all__ = [
    "DEFAULT_KEY",
    "Scraper",
    "ListScraper",
    "gather_settled",
    "AcademicStaffScraper",
    "AnnouncementScraper",
    "BusScheduleScraper",
    "MenuScraper",
    "NewsScraper",
    "EventScraper",
    "NoticeScraper",
    "Scrapers",
]
