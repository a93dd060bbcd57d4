"""Async SQLAlchemy engine for persisted tenancy warnings.

Only used when TENANCY_WARN_PERSIST is enabled. Warnings are written from
detached tasks, so the pool is sized by DatabaseSettings and never
overflows: a burst of warnings waits for a connection instead of opening
new ones against the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "build_async_url",
    "create_write_engine",
]

ASYNC_DRIVER = "postgresql+asyncpg"


def build_async_url(settings: DatabaseSettings) -> str:
    """Render the asyncpg URL, percent-encoding the credentials."""
    url = URL.create(
        drivername=ASYNC_DRIVER,
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)


def create_write_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the engine backing SqlAlchemyTenancyHealthTracker."""
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_max_connections,
        max_overflow=0,
        pool_pre_ping=True,
    )
