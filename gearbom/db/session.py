"""Async engine and session wiring for gearbom.

Two unit-of-work entry points share one session factory:
- get_async_session: FastAPI dependency, one session per request
- session_scope: async context manager for scripts and background jobs

Both commit once on success and roll back on any exception. Repositories
never commit.
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from gearbom.config.settings import Settings, get_settings


class Base(DeclarativeBase):
    """Declarative base for catalog and coverage tables."""

    pass


def _engine_kwargs(settings: Settings) -> dict:
    kwargs: dict = {"echo": settings.DB_ECHO}
    # aiosqlite has no server to ping; pooled Postgres connections can go stale.
    if not settings.DATABASE_URL.startswith("sqlite"):
        kwargs["pool_pre_ping"] = True
    return kwargs


_settings = get_settings()

engine = create_async_engine(_settings.DATABASE_URL, **_engine_kwargs(_settings))

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session; commit on success, roll back on error."""
    async with session_scope() as session:
        yield session


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Open a session, commit when the block exits cleanly, roll back otherwise."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
