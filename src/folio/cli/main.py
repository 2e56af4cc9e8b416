"""Folio CLI — database chores that have no HTTP endpoint.

Usage:
    folio seed                                   # Admin, default categories, sample posts
    folio create-admin alice --email a@x.io      # Prompts for the password
    folio purge-sessions                         # Delete expired login sessions
    folio hash-password                          # Print a hash for manual inserts
    folio contacts --limit 20                    # Latest contact form submissions
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys
from typing import Optional

import click

from folio.errors import Conflict


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


async def _with_session(fn):
    """Open a session on the configured database, run fn(db), dispose."""
    from folio.db.engine import async_session_factory, engine

    try:
        async with async_session_factory() as db:
            return await fn(db)
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="folio")
def cli():
    """Folio — portfolio site backend administration."""


@cli.command()
@click.option("--no-samples", is_flag=True, help="Skip the sample blog posts.")
def seed(no_samples: bool):
    """Create the admin user, default categories, and sample posts."""
    from folio.config import settings
    from folio.services.seed import seed_database

    cfg = settings.model_copy(update={"seed_sample_content": not no_samples})
    report = _run(_with_session(lambda db: seed_database(db, cfg)))

    click.secho("Seeding complete", fg="green", bold=True)
    click.echo(f"  admin created:      {'yes' if report.admin_created else 'no (exists)'}")
    click.echo(f"  categories created: {len(report.categories_created)}")
    click.echo(f"  posts created:      {len(report.posts_created)}")


@cli.command("create-admin")
@click.argument("username")
@click.option("--email", default=None)
@click.option("--full-name", default=None)
@click.password_option()
def create_admin(
    username: str,
    email: Optional[str],
    full_name: Optional[str],
    password: str,
):
    """Create an admin principal."""
    from folio.services.auth_service import AuthService

    async def _create(db):
        return await AuthService(db).create_user(
            username,
            password,
            email=email,
            full_name=full_name,
            is_admin=True,
        )

    try:
        user = _run(_with_session(_create))
    except Conflict as e:
        click.secho(f"Error: {e.message}", fg="red", err=True)
        sys.exit(1)
    click.secho(f"Created admin '{user.username}' (id {user.id})", fg="green")


@cli.command("purge-sessions")
def purge_sessions():
    """Delete expired login sessions."""
    from folio.services.auth_service import AuthService

    count = _run(_with_session(lambda db: AuthService(db).purge_expired_sessions()))
    click.echo(f"Purged {count} expired session(s)")


@cli.command("hash-password")
@click.password_option()
def hash_password_cmd(password: str):
    """Print the stored form ("hash.salt") of a password."""
    from folio.auth.password import hash_password

    click.echo(hash_password(password))


@cli.command()
@click.option("--limit", default=20, show_default=True)
def contacts(limit: int):
    """Show the latest contact form submissions."""
    from folio.services.contact_service import ContactService

    rows = _run(_with_session(lambda db: ContactService(db).list_submissions()))
    if not rows:
        click.echo("No submissions.")
        return

    for row in rows[:limit]:
        click.secho(
            f"#{row.id}  {row.created_at:%Y-%m-%d %H:%M}  {row.name} <{row.email}>",
            bold=True,
        )
        click.echo(f"  service: {row.service}")
        click.echo(f"  {row.message[:200]}")


def main():
    cli()


if __name__ == "__main__":
    main()
