"""Academic staff directory, one list per department."""

from typing import Optional

from campus_api.extractors.html import make_soup, own_text, resolve_url, select_text, warn_missing
from campus_api.models import ListEntry, ScrapeTarget, StaffMember
from campus_api.scrapers.base import ListScraper

# Selector plan
STAFF_LIST = "#ctl15_div_personlist_2 > ul"
STAFF_LINK = "div a"
NAME = "#ctl11_h2_kisiad_"
TITLE = "#ctl11_div_gorev_ table tr:first-child td:nth-child(2) b"
BRANCH = "#ctl11_span_abd_"
EMAIL = "#ctl11_span_mailkurumsal_"
PHONE = "#ctl11_span_telefon_"


class AcademicStaffScraper(ListScraper[StaffMember]):
    """Staff list page -> one profile page per member."""

    resource = "academic-staff"
    target_kind = "department"
    record_model = StaffMember
    url_field = "detail_page_url"

    def parse_list(self, html: str, target: ScrapeTarget) -> list[ListEntry]:
        soup = make_soup(html)
        staff_list = soup.select_one(STAFF_LIST)
        if staff_list is None:
            warn_missing("academic staff list", target.list_url)
            return []

        entries = []
        for item in staff_list.find_all("li"):
            link = item.select_one(STAFF_LINK)
            url = resolve_url(target.list_url, link.get("href") if link else None)
            if url:
                entries.append(ListEntry(detail_url=url))
        return entries

    def parse_detail(self, html: str, entry: ListEntry) -> Optional[StaffMember]:
        soup = make_soup(html)

        name = select_text(soup, NAME)
        if not name:
            warn_missing("staff name", entry.detail_url)
            return None

        return StaffMember(
            name=name,
            title=select_text(soup, TITLE),
            branch=select_text(soup, BRANCH),
            # The address is the span's first text node; an image or link may follow
            email=own_text(soup.select_one(EMAIL)),
            phone=select_text(soup, PHONE),
            detail_page_url=entry.detail_url,
        )
