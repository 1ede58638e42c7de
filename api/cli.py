"""Command line entry point: `songmarket serve | migrate | seed | send-test-email`."""

import asyncio
import os
import sys

import click
import uvicorn

from core import db, schema
from core.logging import setup_logging

DEFAULT_PORT = 3000


async def _with_pool(coro_factory):
    await db.init_pool()
    try:
        return await coro_factory()
    finally:
        await db.close_pool()


@click.group()
def cli():
    """Song market API management."""
    setup_logging()


@cli.command()
@click.option("--host", default=lambda: os.environ.get("HOST", "0.0.0.0"), show_default="$HOST or 0.0.0.0")
@click.option(
    "--port",
    type=int,
    default=lambda: int(os.environ.get("PORT", DEFAULT_PORT)),
    show_default="$PORT or 3000",
)
def serve(host: str, port: int):
    """Run the API server. Never touches the data."""
    uvicorn.run("main:app", host=host, port=port)


@cli.command()
def migrate():
    """Create the users, songs and banners tables if missing."""
    asyncio.run(_with_pool(schema.apply_schema))
    click.echo("Schema is up to date")


@cli.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def seed(yes: bool):
    """Wipe users and songs and load the sample data."""
    from seeding.loader import SeedRefusedError, seed as run_seed

    if not yes:
        click.confirm("This deletes every user and song. Continue?", abort=True)

    try:
        stats = asyncio.run(_with_pool(run_seed))
    except SeedRefusedError as exc:
        click.echo(f"Seeding refused: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Seeded {stats.users} users and {stats.songs} songs")


@cli.command("send-test-email")
def send_test_email():
    """Send the fixed test message through the configured SMTP relay."""
    from notifications.mailer import send_test_email_background

    send_test_email_background()


if __name__ == "__main__":
    cli()
