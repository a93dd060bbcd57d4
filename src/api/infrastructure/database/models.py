"""SQLAlchemy declarative base shared by all ORM models.

This module provides the declarative base class for all SQLAlchemy ORM
models. Alembic reads ``Base.metadata`` to autogenerate migrations.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models.

    All models in the application should inherit from this base class.
    It provides the declarative base functionality and type hints for SQLAlchemy 2.0.
    """

    # Type annotation for SQLAlchemy
    type_annotation_map: dict[type, Any] = {}
