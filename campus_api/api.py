"""HTTP API serving the scraped data as JSON.

Every route except /health needs `Authorization: Bearer <API_TOKEN>`.
CORS preflights are answered before the token check.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from rich.console import Console

from campus_api import __version__
from campus_api.cache import create_cache
from campus_api.config import DEPARTMENT_URLS, Settings, build_targets
from campus_api.errors import ConfigurationError, UnknownTargetError
from campus_api.extractors.fetch import Fetcher
from campus_api.models import (
    Announcement,
    BusDeparture,
    ClearCacheResult,
    DayMenu,
    EventItem,
    NewsItem,
    Notice,
    StaffMember,
)
from campus_api.scrapers import Scraper, Scrapers

console = Console()

PUBLIC_PATHS = {"/health"}


def get_scrapers(request: Request) -> Scrapers:
    return request.app.state.scrapers


def clear_result(label: str, *scrapers: Scraper) -> ClearCacheResult:
    """Clear every target of the given scrapers."""
    cleared = sum(scraper.clear() for scraper in scrapers)
    return ClearCacheResult(success=True, message=f"{label} cache cleared ({cleared} targets)")


router = APIRouter()


@router.get("/")
async def index():
    return {"name": "Siirt University API", "version": __version__, "status": "running"}


@router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "env": request.app.state.settings.app_env,
    }


@router.get("/departments", response_model=list[str])
async def departments():
    return list(DEPARTMENT_URLS)


# Academic staff

@router.get("/academic-staff/clear-cache", response_model=ClearCacheResult)
async def clear_academic_staff(request: Request):
    return clear_result("Academic staff", get_scrapers(request).staff)


@router.get("/academic-staff/{department}", response_model=list[StaffMember])
async def academic_staff(department: str, request: Request):
    return await get_scrapers(request).staff.get(department)


# Announcements

@router.get("/announcement/clear-cache", response_model=ClearCacheResult)
async def clear_announcements(request: Request):
    return clear_result("Announcement", get_scrapers(request).announcements)


@router.get("/announcement/{department}", response_model=list[Announcement])
async def announcements(department: str, request: Request):
    return await get_scrapers(request).announcements.get(department)


# Bus schedule

@router.get("/bus-schedule", response_model=dict[str, list[BusDeparture]])
async def bus_schedules(request: Request):
    return await get_scrapers(request).bus.get_all()


@router.get("/bus-schedule/clear-cache", response_model=ClearCacheResult)
async def clear_bus_schedules(request: Request):
    return clear_result("Bus schedule", get_scrapers(request).bus)


@router.get("/bus-schedule/{route}", response_model=list[BusDeparture])
async def bus_schedule(route: str, request: Request):
    return await get_scrapers(request).bus.get(route)


# Cafeteria menu

@router.get("/yemek", response_model=list[DayMenu])
async def menu(request: Request):
    return await get_scrapers(request).menu.get()


@router.get("/yemek/clear-cache", response_model=ClearCacheResult)
async def clear_menu(request: Request):
    return clear_result("Menu", get_scrapers(request).menu)


# Home page blocks: notices, news, events

@router.get("/duyuru/uni", response_model=list[Notice])
async def notices(request: Request):
    return await get_scrapers(request).notices.get()


@router.get("/duyuru/news", response_model=list[NewsItem])
async def news(request: Request):
    return await get_scrapers(request).news.get()


@router.get("/duyuru/events", response_model=list[EventItem])
async def events(request: Request):
    return await get_scrapers(request).events.get()


@router.get("/duyuru/clear-cache", response_model=ClearCacheResult)
async def clear_home_page(request: Request):
    scrapers = get_scrapers(request)
    return clear_result("Notices, news and events", scrapers.notices, scrapers.news, scrapers.events)


def create_app(
    settings: Optional[Settings] = None,
    scrapers: Optional[Scrapers] = None,
) -> FastAPI:
    """Build the app. Tests pass their own scrapers; otherwise they come from settings."""
    if settings is None:
        load_dotenv()
        settings = Settings.from_env()
    fetcher: Optional[Fetcher] = None
    if scrapers is None:
        fetcher = Fetcher(timeout=settings.fetch_timeout)
        scrapers = Scrapers.build(build_targets(settings), create_cache(settings), fetcher)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not settings.api_token:
            console.print("[red]API_TOKEN is not set; every gated route will answer 500[/red]")
        yield
        if fetcher is not None:
            await fetcher.close()

    app = FastAPI(title="campus-api", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.scrapers = scrapers

    @app.middleware("http")
    async def require_bearer_token(request: Request, call_next):
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        if not settings.api_token:
            error = ConfigurationError("API_TOKEN is not configured")
            console.print(f"[red]{error}[/red]")
            return JSONResponse(status_code=500, content={"detail": str(error)})

        if request.headers.get("Authorization") != f"Bearer {settings.api_token}":
            return JSONResponse(status_code=401, content={"detail": "Unauthorized"})

        return await call_next(request)

    # Added last so it wraps the token check and answers preflights itself
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(UnknownTargetError)
    async def unknown_target(request: Request, exc: UnknownTargetError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        console.print(f"[red]{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}[/red]")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    app.include_router(router)
    return app
