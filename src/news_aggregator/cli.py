"""CLI entry point for the news aggregator."""

import asyncio
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, NoReturn, Optional

import typer
import yaml

from news_aggregator.adapters.registry import YamlFeedRegistry
from news_aggregator.adapters.rendering import MarkdownFeedRenderer
from news_aggregator.adapters.sources import HackerNewsSource, RSSFeedSource
from news_aggregator.adapters.storage import SQLiteNewsStore
from news_aggregator.config import Settings, get_settings
from news_aggregator.core import (
    DuplicateFeedError,
    InvalidQueryError,
    RegistryError,
    StoreError,
)
from news_aggregator.use_cases import AggregationService

app = typer.Typer(
    help="Aggregate, rank and search news from Hacker News and RSS feeds.",
    no_args_is_help=True,
)

renderer = MarkdownFeedRenderer()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path = typer.Option(Path("config.yaml"), "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Load settings shared by every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = get_settings(config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        _fail(f"Invalid configuration {config}: {e}")


@contextmanager
def open_service(settings: Settings) -> Iterator[AggregationService]:
    """Open the store once for the command and close it afterwards."""
    try:
        store = SQLiteNewsStore(settings.database_path)
    except StoreError as e:
        _fail(str(e))

    try:
        registry = YamlFeedRegistry(settings.registry_path)
        timeout = settings.fetch.timeout
        yield AggregationService(
            store=store,
            registry=registry,
            hackernews=HackerNewsSource(timeout=timeout),
            rss_source_factory=lambda feed: RSSFeedSource(feed, timeout=timeout),
            fetch_timeout=timeout,
            hackernews_limit=settings.fetch.hackernews_limit,
            rss_limit=settings.fetch.rss_limit,
            retention_days=settings.storage.retention_days,
        )
    except (InvalidQueryError, DuplicateFeedError, RegistryError, StoreError) as e:
        _fail(str(e))
    finally:
        store.close()


def _fail(message: str) -> NoReturn:
    typer.echo(f"❌ {message}", err=True)
    raise typer.Exit(code=1)


@app.command()
def sources(ctx: typer.Context) -> None:
    """List configured sources and sources with cached data."""
    with open_service(ctx.obj) as service:
        typer.echo(renderer.render_sources(service.list_sources()))


@app.command()
def feed(
    ctx: typer.Context,
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help='Source tag (e.g. "hackernews", "rss:techcrunch") or "all"'
    ),
    limit: int = typer.Option(30, "--limit", "-n", help="Maximum number of items"),
    hours_ago: Optional[float] = typer.Option(None, "--hours-ago", help="Only items from the last N hours"),
) -> None:
    """Show cached items, best ranked first."""
    with open_service(ctx.obj) as service:
        items = service.get_feed(source=source, limit=limit, hours_ago=hours_ago)
        typer.echo(renderer.render_items(items))


@app.command()
def refresh(
    ctx: typer.Context,
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Refresh only this source (default: all sources)"
    ),
) -> None:
    """Fetch the latest items and update the cache."""
    with open_service(ctx.obj) as service:
        typer.echo("📡 Refreshing sources...")
        report = asyncio.run(service.refresh(source))
        typer.echo(renderer.render_report(report))


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Text to look for in titles and content"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum number of results"),
) -> None:
    """Search across all cached items."""
    with open_service(ctx.obj) as service:
        typer.echo(renderer.render_items(service.search(query, limit)))


@app.command("add-feed")
def add_feed(
    ctx: typer.Context,
    name: str = typer.Argument(..., help='Name for this feed (e.g. "techcrunch")'),
    url: str = typer.Argument(..., help="RSS/Atom feed URL"),
    interval: Optional[int] = typer.Option(None, "--interval", help="Refresh interval in minutes"),
) -> None:
    """Register a new RSS feed."""
    with open_service(ctx.obj) as service:
        registration = service.add_rss_feed(name, url, interval)
        typer.echo(f"✓ Added RSS feed: {registration.name} ({registration.url})")


@app.command("remove-feed")
def remove_feed(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the RSS feed to remove"),
) -> None:
    """Remove a registered RSS feed."""
    with open_service(ctx.obj) as service:
        removed = service.remove_rss_feed(name)

    if not removed:
        _fail(f"RSS feed not found: {name}")
    typer.echo(f"✓ Removed RSS feed: {name}")


@app.command()
def prune(
    ctx: typer.Context,
    days: Optional[float] = typer.Option(None, "--days", help="Retention window (default from config)"),
) -> None:
    """Evict items cached longer than the retention window."""
    with open_service(ctx.obj) as service:
        removed = service.prune(days)
        typer.echo(f"🧹 Removed {removed} cached items")


if __name__ == "__main__":
    app()
