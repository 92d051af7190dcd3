"""Flask CLI commands for development database seeding."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from delivery_auth.core.extensions import db
from delivery_auth.seeds import seed_data

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Raise logging verbosity for seed modules when requested."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(seed_data.__name__).setLevel(level)
    LOGGER.setLevel(level)


def _echo_accounts(accounts: list[seed_data.SeededAccount]) -> None:
    click.echo("Seeded accounts:")
    for account in accounts:
        state = "created" if account.created else "existing"
        click.echo(f"  {account.label} ({state})")
        click.echo(f"    id:            {account.user_id}")
        if account.tenant_id:
            click.echo(f"    restaurant_id: {account.tenant_id}")
        click.echo(f"    access_token:  {account.tokens.access_token}")
        click.echo(f"    refresh_token: {account.tokens.refresh_token}")


def _ensure_non_production() -> None:
    """Abort when running in production."""
    config = current_app.config
    app_env = str(config.get("APP_ENV", "production")).lower()
    if app_env == "production":
        raise click.UsageError("The 'flask seed' commands are restricted to non-production.")


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Collection of database seeding commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@seed_cli.command("demo")
@click.option("--create-schema", is_flag=True, help="Create missing tables before seeding.")
@with_appcontext
def demo_command(create_schema: bool) -> None:
    """Create a demo customer and a demo restaurant with its owner."""
    _ensure_non_production()
    if create_schema:
        db.create_all()
    try:
        accounts = seed_data.run_all()
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_accounts(accounts)
