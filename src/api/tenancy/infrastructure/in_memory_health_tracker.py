"""In-memory health tracker.

Keeps a bounded buffer of recent warnings plus per-route counters. Used
when warning persistence is disabled; contents are lost on restart.
"""

from __future__ import annotations

from collections import Counter, deque
from datetime import datetime

from tenancy.domain.value_objects import TenancyWarning, TenancyWarningRecord
from tenancy.infrastructure.observability import (
    DefaultHealthTrackerProbe,
    HealthTrackerProbe,
)
from tenancy.ports.exceptions import WarningPersistenceDisabledError
from tenancy.ports.health_tracker import (
    RouteWarningCount,
    WarningPage,
    WarningQuery,
    WarningStats,
)


class RouteCounter:
    """Counts warnings per (method, route) since process start."""

    def __init__(self) -> None:
        self._counts: Counter[tuple[str, str]] = Counter()

    def increment(self, warning: TenancyWarning) -> None:
        self._counts[(warning.method, warning.route)] += 1

    def top(self, limit: int) -> list[RouteWarningCount]:
        return [
            RouteWarningCount(route=route, method=method, count=count)
            for (method, route), count in self._counts.most_common(limit)
        ]


def summarize(records: list[TenancyWarningRecord]) -> WarningStats:
    """Count records overall and per warning type."""
    by_type: Counter[str] = Counter(record.warn_type.value for record in records)
    return WarningStats(total=len(records), by_type=dict(by_type))


class InMemoryTenancyHealthTracker:
    """Health tracker backed by a bounded in-process buffer."""

    def __init__(
        self,
        capacity: int = 1000,
        probe: HealthTrackerProbe | None = None,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._records: deque[TenancyWarningRecord] = deque(maxlen=capacity)
        self._routes = RouteCounter()
        self._probe = probe or DefaultHealthTrackerProbe()

    @property
    def persistence_enabled(self) -> bool:
        return False

    async def record_warning(self, warning: TenancyWarning) -> None:
        if len(self._records) == self._capacity:
            self._probe.buffer_trimmed(self._capacity)
        self._records.append(TenancyWarningRecord(warning=warning))
        self._routes.increment(warning)

    async def get_stats(
        self,
        since: datetime,
        tenant_id: str | None = None,
    ) -> WarningStats:
        matching = [
            record
            for record in self._records
            if record.occurred_at >= since
            and (
                tenant_id is None
                or record.warning.effective_tenant_id == tenant_id
            )
        ]
        return summarize(matching)

    def get_top_routes(self, limit: int = 5) -> list[RouteWarningCount]:
        return self._routes.top(limit)

    async def get_warnings(self, query: WarningQuery) -> WarningPage:
        raise WarningPersistenceDisabledError(
            "In-memory tracker does not store individual warnings"
        )
