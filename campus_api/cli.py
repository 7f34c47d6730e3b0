"""CLI for campus-api."""

import asyncio
import json
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from campus_api.cache import create_cache
from campus_api.config import DEPARTMENT_URLS, Settings, build_targets
from campus_api.errors import CampusAPIError
from campus_api.extractors.fetch import Fetcher
from campus_api.scrapers import DEFAULT_KEY, Scraper, Scrapers

# Load environment variables (override=True to beat shell env vars)
load_dotenv(override=True)

app = typer.Typer(
    name="campus-api",
    help="University site scraper and JSON API",
    add_completion=False,
)
console = Console()

RESOURCES = ["academic-staff", "announcement", "bus-schedule", "yemek", "news", "events", "notices"]


def load_settings() -> Settings:
    try:
        return Settings.from_env()
    except CampusAPIError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def pick_scraper(scrapers: Scrapers, resource: str) -> Scraper:
    by_name = {
        "academic-staff": scrapers.staff,
        "announcement": scrapers.announcements,
        "bus-schedule": scrapers.bus,
        "yemek": scrapers.menu,
        "news": scrapers.news,
        "events": scrapers.events,
        "notices": scrapers.notices,
    }
    if resource not in by_name:
        console.print(f"[red]Unknown resource: {resource}[/red]")
        console.print(f"[dim]Choose one of: {', '.join(RESOURCES)}[/dim]")
        raise typer.Exit(1)
    return by_name[resource]


def print_records(records: list[dict], title: str) -> None:
    """Render records as a table, one column per field."""
    if not records:
        console.print("[yellow]No records[/yellow]")
        return

    table = Table(title=title)
    columns = list(records[0])
    for column in columns:
        table.add_column(column, overflow="fold")
    for record in records:
        table.add_row(*(str(record.get(c, "")) for c in columns))
    console.print(table)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: HOST env var)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: PORT env var)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
    log_level: str = typer.Option("info", "--log-level", help="uvicorn log level"),
):
    """Run the HTTP API."""
    import uvicorn

    settings = load_settings()
    if not settings.api_token:
        console.print("[yellow]API_TOKEN is not set; gated routes will answer 500[/yellow]")

    uvicorn.run(
        "campus_api.api:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=log_level,
    )


@app.command()
def scrape(
    resource: str = typer.Argument(..., help=f"One of: {', '.join(RESOURCES)}"),
    param: Optional[str] = typer.Argument(
        None, help="Department key or bus route (a1, a2); bus-schedule without it prints every route"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Scrape one resource and print the result."""
    settings = load_settings()
    fetcher = Fetcher(timeout=settings.fetch_timeout)
    scrapers = Scrapers.build(build_targets(settings), create_cache(settings), fetcher)
    scraper = pick_scraper(scrapers, resource)
    all_routes = param is None and scraper is scrapers.bus

    if param is None and not all_routes and DEFAULT_KEY not in scraper.targets:
        console.print(f"[red]{resource} needs a key[/red]")
        console.print(f"[dim]Choose one of: {', '.join(scraper.targets)}[/dim]")
        raise typer.Exit(1)

    async def run() -> dict[str, list[dict]]:
        try:
            if all_routes:
                grouped = await scrapers.bus.get_all()
            else:
                grouped = {param or resource: await scraper.get(param or DEFAULT_KEY)}
            return {name: [r.model_dump() for r in records] for name, records in grouped.items()}
        finally:
            await fetcher.close()

    try:
        results = asyncio.run(run())
    except CampusAPIError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        output = results if all_routes else next(iter(results.values()))
        print(json.dumps(output, ensure_ascii=False, indent=2))
        return

    for name, records in results.items():
        print_records(records, title=name if all_routes else f"{resource} ({name})")


@app.command("clear-cache")
def clear_cache(
    resource: str = typer.Argument(..., help=f"One of: {', '.join(RESOURCES)}"),
):
    """Drop cached entries of one resource (file and Redis caches outlive the process)."""
    settings = load_settings()
    scrapers = Scrapers.build(build_targets(settings), create_cache(settings), Fetcher())
    cleared = pick_scraper(scrapers, resource).clear()
    console.print(f"[green]Cleared {resource} cache ({cleared} targets)[/green]")


@app.command()
def departments():
    """List department keys and their sites."""
    table = Table(title="Departments")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("URL")
    for key, url in DEPARTMENT_URLS.items():
        table.add_row(key, url)
    console.print(table)


if __name__ == "__main__":
    app()
