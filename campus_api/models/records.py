"""Records extracted from the university site."""

from pydantic import BaseModel, Field


class StaffMember(BaseModel):
    """Academic staff member from a department directory."""

    name: str
    title: str = ""
    branch: str = ""
    email: str = ""
    phone: str = ""
    detail_page_url: str


class Announcement(BaseModel):
    """Department announcement."""

    title: str = ""
    url: str
    content: str = ""  # Truncated to 250 chars


class Notice(BaseModel):
    """University-wide notice from the home page."""

    link: str
    title: str = ""
    content: str = ""  # Truncated to 250 chars
    announcement_date: str = ""  # e.g. "28 Şubat"


class NewsItem(BaseModel):
    """News article."""

    link: str
    title: str = ""
    img_url: str = ""
    content: str = ""


class EventItem(BaseModel):
    """Event from the events calendar block."""

    link: str
    title: str = ""
    date: str = ""  # D.M.YYYY when known


class BusDeparture(BaseModel):
    """One row of a bus timetable."""

    center_departure: str = ""  # Çarşı Kalkış
    university_departure: str = ""  # Üniversite Kalkış


class MenuItem(BaseModel):
    """Dish on the cafeteria menu."""

    name: str
    calories: int = 0


class DayMenu(BaseModel):
    """Cafeteria menu for one day."""

    day: str  # Bugün, Yarın, Sonraki Gün
    date: str = ""
    url: str
    menu: list[MenuItem] = Field(default_factory=list)


class ClearCacheResult(BaseModel):
    """Response body of the clear-cache endpoints."""

    success: bool
    message: str
