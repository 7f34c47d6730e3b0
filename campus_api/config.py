"""Runtime settings and the upstream site map.

Settings come from environment variables (a .env file is loaded by the entry
points). The URL tables below are the only place upstream addresses live;
`build_targets` turns them into ScrapeTargets for the scrapers.
"""

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from campus_api.errors import ConfigurationError
from campus_api.models import ScrapeTarget

SITE_URL = "https://siirt.edu.tr/"
MENU_URL = "https://siirt.edu.tr/yemeklistesi.html"

# Relative to each department's base URL
STAFF_LIST_PATH = "personel/akademik/739614.html"

DEPARTMENT_URLS: dict[str, str] = {
    "siirtUniversitesi": "https://siirt.edu.tr/",
    "bilgisayarMuhendisligi": "https://bilgisayar.siirt.edu.tr/",
    "elektrikElektronikMuhendisligi": "https://eem.siirt.edu.tr/",
    "gidaMuhendisligi": "https://gida.siirt.edu.tr/",
    "insaatMuhendisligi": "https://insaatmuh.siirt.edu.tr/",
    "kimyaMuhendisligi": "https://kimyamuhendisligi.siirt.edu.tr/",
    "makineMuhendisligi": "https://makine.siirt.edu.tr/",
    "egitimBilimleri": "https://egitimbilimleri.siirt.edu.tr/",
    "matematikVeFenBilimleri": "https://mfbeb.siirt.edu.tr/",
    "temelEgitim": "https://temelegitim.siirt.edu.tr/",
    "turkceVeSosyalBilimlerEgitimi": "https://sbteb.siirt.edu.tr/",
    "yabanciDillerEgitimi": "https://yabancidil.siirt.edu.tr/",
    "biyoloji": "https://biyoloji.siirt.edu.tr/",
    "cografya": "https://cografya.siirt.edu.tr/",
    "kimya": "https://kimya.siirt.edu.tr/",
    "matematik": "https://matematik.siirt.edu.tr/",
    "sosyoloji": "https://sosyoloji.siirt.edu.tr/",
    "psikoloji": "https://psikoloji.siirt.edu.tr/",
    "tarih": "https://tarih.siirt.edu.tr/",
    "turkDiliVeEdebiyati": "https://turkdili.siirt.edu.tr/",
    "mutercimTercumanlik": "https://mutercimtercuman.siirt.edu.tr/",
}

BUS_ROUTE_URLS: dict[str, str] = {
    "a1": "https://www.siirt.bel.tr/a1-universite-hatti",
    "a2": "https://www.siirt.bel.tr/a-2-universite-hatti",
}


class TTLSettings(BaseModel):
    """Cache lifetimes in seconds, per resource."""

    staff: int = Field(default=24 * 3600, gt=0)
    announcements: int = Field(default=3600, gt=0)
    bus: int = Field(default=12 * 3600, gt=0)
    menu: int = Field(default=4 * 3600, gt=0)  # 4 hours
    news: int = Field(default=1800, gt=0)
    events: int = Field(default=1800, gt=0)
    notices: int = Field(default=1800, gt=0)


class Settings(BaseModel):
    """Application settings."""

    api_token: Optional[str] = None
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    fetch_timeout: float = Field(default=10.0, gt=0)
    cache_backend: Literal["memory", "file", "redis"] = "memory"
    cache_dir: Path = Path(".cache") / "campus_api"
    cache_max_entries: int = Field(default=100, gt=0)
    redis_url: str = "redis://localhost:6379/0"
    # Comma separated; "*" allows any origin
    cors_origins: str = "*"
    ttl: TTLSettings = Field(default_factory=TTLSettings)

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Unset variables fall back to the defaults above.
        """
        env = os.environ if environ is None else environ

        raw: dict = {
            "api_token": env.get("API_TOKEN") or None,
            "app_env": env.get("APP_ENV"),
            "host": env.get("HOST"),
            "port": env.get("PORT"),
            "fetch_timeout": env.get("FETCH_TIMEOUT"),
            "cache_backend": env.get("CACHE_BACKEND"),
            "cache_dir": env.get("CACHE_DIR"),
            "cache_max_entries": env.get("CACHE_MAX_ENTRIES"),
            "redis_url": env.get("REDIS_URL"),
            "cors_origins": env.get("CORS_ORIGINS"),
        }
        raw = {k: v for k, v in raw.items() if v is not None}

        ttl = {
            field: env.get(f"TTL_{field.upper()}")
            for field in TTLSettings.model_fields
        }
        raw["ttl"] = {k: v for k, v in ttl.items() if v is not None}

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e


class Targets(BaseModel):
    """Every ScrapeTarget the app knows, grouped by resource."""

    staff: dict[str, ScrapeTarget]
    announcements: dict[str, ScrapeTarget]
    bus: dict[str, ScrapeTarget]
    menu: ScrapeTarget
    news: ScrapeTarget
    events: ScrapeTarget
    notices: ScrapeTarget


def build_targets(settings: Settings) -> Targets:
    """Turn the URL tables into per-resource ScrapeTargets."""
    ttl = settings.ttl
    return Targets(
        staff={
            dept: ScrapeTarget(
                list_url=f"{base}{STAFF_LIST_PATH}",
                cache_key_prefix=f"academic-staff:{dept}",
                ttl_seconds=ttl.staff,
            )
            for dept, base in DEPARTMENT_URLS.items()
        },
        announcements={
            dept: ScrapeTarget(
                list_url=base,
                cache_key_prefix=f"announcement:{dept}",
                ttl_seconds=ttl.announcements,
            )
            for dept, base in DEPARTMENT_URLS.items()
        },
        bus={
            route: ScrapeTarget(
                list_url=url,
                cache_key_prefix=f"bus-schedule:{route}",
                ttl_seconds=ttl.bus,
            )
            for route, url in BUS_ROUTE_URLS.items()
        },
        menu=ScrapeTarget(list_url=MENU_URL, cache_key_prefix="yemek", ttl_seconds=ttl.menu),
        news=ScrapeTarget(list_url=SITE_URL, cache_key_prefix="news", ttl_seconds=ttl.news),
        events=ScrapeTarget(list_url=SITE_URL, cache_key_prefix="events", ttl_seconds=ttl.events),
        notices=ScrapeTarget(list_url=SITE_URL, cache_key_prefix="notices", ttl_seconds=ttl.notices),
    )
