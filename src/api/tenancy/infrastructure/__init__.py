"""Tenancy infrastructure layer - health trackers and warning dispatch."""

from tenancy.infrastructure.in_memory_health_tracker import (
    InMemoryTenancyHealthTracker,
)
from tenancy.infrastructure.sqlalchemy_health_tracker import (
    SqlAlchemyTenancyHealthTracker,
)
from tenancy.infrastructure.warning_dispatcher import WarningDispatcher

__all__ = [
    "InMemoryTenancyHealthTracker",
    "SqlAlchemyTenancyHealthTracker",
    "WarningDispatcher",
]
