"""Health tracker port.

The health tracker receives tenancy warnings recorded in soft mode and
answers the aggregate queries behind the tenancy health endpoints. Recording
is best-effort: callers treat it as fire-and-forget and absorb failures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from tenancy.domain.value_objects import TenancyWarning, TenancyWarningRecord

MAX_WARNING_PAGE_SIZE = 500
DEFAULT_WARNING_PAGE_SIZE = 100


@dataclass(frozen=True)
class WarningStats:
    """Warning counts since a point in time."""

    total: int
    by_type: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class RouteWarningCount:
    """Number of warnings observed on one route."""

    route: str
    method: str
    count: int


@dataclass(frozen=True)
class WarningQuery:
    """Filter and pagination for listing stored warnings."""

    since: datetime | None = None
    until: datetime | None = None
    tenant_id: str | None = None
    limit: int = DEFAULT_WARNING_PAGE_SIZE
    offset: int = 0

    def __post_init__(self) -> None:
        if self.limit < 1 or self.limit > MAX_WARNING_PAGE_SIZE:
            raise ValueError(
                f"limit must be between 1 and {MAX_WARNING_PAGE_SIZE}, got {self.limit}"
            )
        if self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")


@dataclass(frozen=True)
class WarningPage:
    """A page of stored warnings with the total number of matches."""

    warnings: list[TenancyWarningRecord]
    total: int


class TenancyHealthTracker(Protocol):
    """Sink for soft-mode tenancy warnings."""

    @property
    def persistence_enabled(self) -> bool:
        """Whether individual warnings are stored and can be listed."""
        ...

    async def record_warning(self, warning: TenancyWarning) -> None:
        """Record a warning. May raise; callers absorb failures."""
        ...

    async def get_stats(
        self,
        since: datetime,
        tenant_id: str | None = None,
    ) -> WarningStats:
        """Count warnings since ``since``, optionally for one tenant."""
        ...

    def get_top_routes(self, limit: int = 5) -> list[RouteWarningCount]:
        """Routes with the most warnings since process start."""
        ...

    async def get_warnings(self, query: WarningQuery) -> WarningPage:
        """List stored warnings.

        Raises:
            WarningPersistenceDisabledError: If persistence is disabled.
        """
        ...
