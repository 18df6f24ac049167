"""yogastudio CLI — database bootstrap and demo data.

Usage:
    yogastudio init-db                      # Create all tables
    yogastudio reset-db                     # Wipe users/participations, add demo user
    yogastudio add-teacher Margot DELAHAYE  # Insert a teacher

Every command accepts --database-url (defaults to YOGA_DATABASE_URL).
"""

from __future__ import annotations

import asyncio
import concurrent.futures
from typing import Awaitable, Callable, TypeVar

import click
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from yogastudio.config import settings
from yogastudio.db.engine import build_engine
from yogastudio.db.models import Base, Participation, User
from yogastudio.services.teacher_service import TeacherService
from yogastudio.services.user_service import UserService

T = TypeVar("T")

DEMO_EMAIL = "yoga@studio.com"
DEMO_PASSWORD = "123456"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


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


async def _with_session(
    database_url: str, work: Callable[[AsyncSession], Awaitable[T]]
) -> T:
    engine = build_engine(database_url)
    try:
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        async with factory() as session:
            return await work(session)
    finally:
        await engine.dispose()


async def _create_schema(database_url: str) -> None:
    engine = build_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _reset(session: AsyncSession) -> User:
    await session.execute(delete(Participation))
    await session.execute(delete(User))
    await session.commit()
    return await UserService(session).register(
        email=DEMO_EMAIL,
        password=DEMO_PASSWORD,
        first_name="John",
        last_name="Doe",
    )


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

database_url_option = click.option(
    "--database-url",
    default=lambda: settings.database_url,
    show_default="YOGA_DATABASE_URL",
    help="SQLAlchemy async database URL.",
)


@click.group()
def cli():
    """Yoga Studio backend administration."""


@cli.command("init-db")
@database_url_option
def init_db(database_url: str):
    """Create all tables that do not exist yet."""
    _run(_create_schema(database_url))
    click.secho("Database schema created", fg="green")


@cli.command("reset-db")
@database_url_option
def reset_db(database_url: str):
    """Delete all users and participations, then insert the demo user."""
    user = _run(_with_session(database_url, _reset))
    click.secho(f"Database reset; demo user {user.email} (id={user.id})", fg="green")


@cli.command("add-teacher")
@click.argument("first_name")
@click.argument("last_name")
@database_url_option
def add_teacher(first_name: str, last_name: str, database_url: str):
    """Insert a teacher."""
    teacher = _run(
        _with_session(
            database_url,
            lambda s: TeacherService(s).create(first_name, last_name),
        )
    )
    click.secho(f"Teacher {teacher.first_name} {teacher.last_name} (id={teacher.id})", fg="green")


if __name__ == "__main__":
    cli()
