"""Database infrastructure - shared connection primitives."""

from infrastructure.database.dependencies import (
    close_database_connections,
    get_write_sessionmaker,
)
from infrastructure.database.models import Base

__all__ = [
    "Base",
    "close_database_connections",
    "get_write_sessionmaker",
]
