"""Ports for the tenancy bounded context.

Interfaces to external collaborators, implemented in the infrastructure
layer.
"""

from tenancy.ports.exceptions import WarningPersistenceDisabledError
from tenancy.ports.health_tracker import (
    RouteWarningCount,
    TenancyHealthTracker,
    WarningPage,
    WarningQuery,
    WarningStats,
)

__all__ = [
    "RouteWarningCount",
    "TenancyHealthTracker",
    "WarningPage",
    "WarningPersistenceDisabledError",
    "WarningQuery",
    "WarningStats",
]
