"""Command line entry point for eventreg.

- serve: run the HTTP API under uvicorn
- recalculate: rebuild stored balances from the payment ledger, e.g. after a
  failed recalculation left a registration stale
"""

from __future__ import annotations

import dataclasses
import sys

import click
import uvicorn

from eventreg import __version__
from eventreg.api.app import create_app
from eventreg.config import ConfigError, Settings
from eventreg.ledger import PaymentLedger
from eventreg.logging import setup_logging
from eventreg.registry import NotFoundError, RegistrationStore, StoreError


def _load_settings(db_path: str | None) -> Settings:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    if db_path is not None:
        settings = dataclasses.replace(settings, db_path=db_path)
    return settings


@click.group()
@click.version_option(version=__version__)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
def main(verbose: bool) -> None:
    """eventreg - event registration and payment tracking."""
    setup_logging(level="DEBUG" if verbose else None)


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
@click.option(
    "--db-path",
    default=None,
    help="SQLite database file (default: EVENTREG_DB_PATH or eventreg.db)",
)
def serve(host: str, port: int, db_path: str | None) -> None:
    """Run the HTTP API."""
    settings = _load_settings(db_path)
    click.echo(f"Serving eventreg {__version__} on http://{host}:{port} (db={settings.db_path})")
    uvicorn.run(create_app(settings), host=host, port=port, log_level="info")


@main.command()
@click.argument("registration_ids", nargs=-1)
@click.option(
    "--all",
    "recalculate_all",
    is_flag=True,
    help="Recalculate every registration",
)
@click.option(
    "--db-path",
    default=None,
    help="SQLite database file (default: EVENTREG_DB_PATH or eventreg.db)",
)
def recalculate(
    registration_ids: tuple[str, ...], recalculate_all: bool, db_path: str | None
) -> None:
    """Recompute total paid and status from the payment ledger.

    Pass one or more registration IDs, or --all.
    """
    if not registration_ids and not recalculate_all:
        click.echo("Give at least one registration ID or --all", err=True)
        sys.exit(2)

    settings = _load_settings(db_path)
    try:
        store = RegistrationStore(settings.db_path)
    except StoreError as e:
        click.echo(f"Database error: {e}", err=True)
        sys.exit(1)
    ledger = PaymentLedger(store)
    failures = 0

    try:
        ids = list(registration_ids)
        if recalculate_all:
            ids = [r.id for r in store.list_registrations()]

        for registration_id in ids:
            try:
                snapshot = ledger.recalculate(registration_id)
            except NotFoundError as e:
                click.echo(f"  {registration_id}: {e}", err=True)
                failures += 1
                continue
            click.echo(
                f"  {registration_id}: paid={snapshot.total_paid} "
                f"status={snapshot.status.value}"
            )

        click.echo(f"\nRecalculated {len(ids) - failures} of {len(ids)} registrations")
    except StoreError as e:
        click.echo(f"Database error: {e}", err=True)
        sys.exit(1)
    finally:
        store.close()

    if failures:
        sys.exit(1)
