"""Flask CLI commands for seeding the menu catalog."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from cook_service.core.extensions import db, get_cook_store
from cook_service.seeds import seed_data
from cook_service.services._shared.ports import StoreError

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Raise logging verbosity for seed modules when requested."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(seed_data.__name__).setLevel(level)
    LOGGER.setLevel(level)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    if not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError(
            "The 'flask seed fresh' command is restricted to non-production environments."
        )


def _run_menus(path: str | None, verbose: bool) -> dict[str, dict[str, int]]:
    try:
        fixtures = seed_data.load_fixture_file(path) if path else seed_data.MENU_FIXTURES
        return seed_data.seed_menus(get_cook_store(), fixtures, verbose=verbose)
    except (StoreError, ValueError) as exc:
        raise click.ClickException(f"Seeding failed: {exc}") from exc


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Collection of catalog seeding commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@seed_cli.command("menus")
@click.option(
    "--file",
    "path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON array of menus to load instead of the built-in fixtures.",
)
@click.pass_context
@with_appcontext
def menus_command(ctx: click.Context, path: str | None) -> None:
    """Insert or refresh catalog menus in the active cook store."""
    summary = _run_menus(path, bool(ctx.obj.get("verbose", False)))
    _echo_summary(summary)


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate the relational schema, then seed the menu catalog."""
    _ensure_non_production()
    if current_app.config.get("COOK_STORE_BACKEND") != "sql":
        raise click.UsageError("'flask seed fresh' only applies to the sql backend.")
    if not yes:
        click.confirm(
            "This will DROP all application tables and recreate them. Continue?",
            abort=True,
        )
    LOGGER.info("Dropping database schema...")
    db.session.remove()
    db.drop_all()
    LOGGER.info("Recreating database schema...")
    db.create_all()
    summary = _run_menus(None, bool(ctx.obj.get("verbose", False)))
    _echo_summary(summary)
