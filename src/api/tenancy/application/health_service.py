"""Application service for tenancy health reporting.

Aggregates the warnings collected by the health tracker during soft mode
into the views operators use to decide when strict mode can be enabled.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from tenancy.domain.readiness import StrictReadiness, compute_strict_readiness
from tenancy.domain.value_objects import EnforcementMode
from tenancy.ports.exceptions import WarningPersistenceDisabledError
from tenancy.ports.health_tracker import (
    RouteWarningCount,
    TenancyHealthTracker,
    WarningPage,
    WarningQuery,
    WarningStats,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
TOP_ROUTES_LIMIT = 5


@dataclass(frozen=True)
class PlatformTenancyHealth:
    """Platform-wide tenancy health snapshot."""

    mode: EnforcementMode
    last_24_hours: WarningStats
    last_7_days: WarningStats
    all_time_total: int
    top_routes: list[RouteWarningCount]
    readiness: StrictReadiness
    persistence_enabled: bool


@dataclass(frozen=True)
class TenantTenancyHealth:
    """Tenancy health snapshot for a single tenant."""

    mode: EnforcementMode
    tenant_id: str
    last_24_hours: WarningStats
    persistence_enabled: bool


class TenancyHealthService:
    """Read-side service over the tenancy health tracker."""

    def __init__(
        self,
        tracker: TenancyHealthTracker,
        mode: EnforcementMode,
        readiness_threshold: int,
    ) -> None:
        self._tracker = tracker
        self._mode = mode
        self._readiness_threshold = readiness_threshold

    async def get_platform_health(
        self, now: datetime | None = None
    ) -> PlatformTenancyHealth:
        """Build the platform-wide health snapshot.

        Args:
            now: Reference time (defaults to the current UTC time).
        """
        now = now or datetime.now(UTC)
        last_24h = await self._tracker.get_stats(now - timedelta(hours=24))
        last_7d = await self._tracker.get_stats(now - timedelta(days=7))
        all_time = await self._tracker.get_stats(_EPOCH)

        return PlatformTenancyHealth(
            mode=self._mode,
            last_24_hours=last_24h,
            last_7_days=last_7d,
            all_time_total=all_time.total,
            top_routes=self._tracker.get_top_routes(TOP_ROUTES_LIMIT),
            readiness=compute_strict_readiness(
                last_24h.total, self._readiness_threshold
            ),
            persistence_enabled=self._tracker.persistence_enabled,
        )

    async def get_tenant_health(
        self,
        tenant_id: str,
        now: datetime | None = None,
    ) -> TenantTenancyHealth:
        """Build the health snapshot for one tenant's last 24 hours."""
        now = now or datetime.now(UTC)
        stats = await self._tracker.get_stats(
            now - timedelta(hours=24), tenant_id=tenant_id
        )
        return TenantTenancyHealth(
            mode=self._mode,
            tenant_id=tenant_id,
            last_24_hours=stats,
            persistence_enabled=self._tracker.persistence_enabled,
        )

    async def list_warnings(self, query: WarningQuery) -> WarningPage:
        """List stored warnings.

        Raises:
            WarningPersistenceDisabledError: If the tracker keeps no records.
        """
        if not self._tracker.persistence_enabled:
            raise WarningPersistenceDisabledError(
                "Set TENANCY_WARN_PERSIST=true to enable warning storage"
            )
        return await self._tracker.get_warnings(query)
