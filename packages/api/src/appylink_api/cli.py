"""
cli.py — Click CLI for operating an Appy Link deployment.

Usage:
    appylink serve --reload
    appylink seed --dry-run
    appylink status
"""

from __future__ import annotations

from collections import Counter

import click
import structlog

from appylink_shared.config import settings
from appylink_shared.constants import TABLE_CATEGORIES, TABLE_PROVIDERS, TABLE_SUBMISSIONS

from appylink_api.utils.logging import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--log-level",
    default=settings.log_level,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level",
)
def main(log_level: str) -> None:
    """Appy Link directory operations."""
    configure_logging(log_level=log_level)


@main.command()
@click.option("--host", default=settings.api_host, show_default=True)
@click.option("--port", default=settings.api_port, type=int, show_default=True)
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("appylink_api.app:app", host=host, port=port, reload=reload)


@main.command()
@click.option("--dry-run", is_flag=True, help="Print what would be loaded and exit")
def seed(dry_run: bool) -> None:
    """Upsert the shipped categories and providers into Supabase."""
    from appylink_shared.seed import SEED_CATEGORIES, SEED_PROVIDERS

    categories = [c.to_insert_dict() for c in SEED_CATEGORIES]
    providers = [p.to_insert_dict() for p in SEED_PROVIDERS]

    if dry_run:
        click.echo(f"Would upsert {len(categories)} categories and {len(providers)} providers.")
        for p in SEED_PROVIDERS:
            click.echo(f"  {p.id:20s} {p.category_id or '-':12s} {p.name}")
        return

    from appylink_shared.db import SupabaseNotConfigured

    from appylink_api.loaders.supabase_loader import SupabaseLoader

    try:
        loader = SupabaseLoader()
    except SupabaseNotConfigured as exc:
        raise click.ClickException(str(exc)) from exc

    # Providers reference categories, so categories go first.
    failed = False
    for table, rows in ((TABLE_CATEGORIES, categories), (TABLE_PROVIDERS, providers)):
        result = loader.upsert(table, rows, conflict_columns=["id"])
        click.echo(f"  {table:12s} {result.status:16s} {result.records_loaded} loaded, {result.records_failed} failed")
        for error in result.errors:
            click.echo(f"    {error}", err=True)
        failed = failed or not result.success

    if failed:
        raise click.ClickException("Seeding finished with errors.")


@main.command()
def status() -> None:
    """Show submission counts by moderation status."""
    from appylink_shared.db import get_supabase_client

    click.echo("Submission queue:")
    try:
        client = get_supabase_client(service_role=True)
        result = client.table(TABLE_SUBMISSIONS).select("status").execute()
    except Exception as exc:
        click.echo(f"  Error fetching status: {exc}", err=True)
        raise SystemExit(1) from exc

    counts = Counter(row.get("status") or "new" for row in result.data or [])
    if not counts:
        click.echo("  No submissions found.")
        return
    for name in ("new", "approved", "rejected"):
        click.echo(f"  {name:10s} {counts.get(name, 0)}")


if __name__ == "__main__":
    main()
