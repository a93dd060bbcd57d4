"""Unit tests for InMemoryTenancyHealthTracker."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from tenancy.domain.value_objects import TenancyWarning, WarnType
from tenancy.infrastructure.in_memory_health_tracker import (
    InMemoryTenancyHealthTracker,
)
from tenancy.infrastructure.observability import HealthTrackerProbe
from tenancy.ports.exceptions import WarningPersistenceDisabledError
from tenancy.ports.health_tracker import RouteWarningCount, WarningQuery


def make_warning(
    route: str = "/api/tasks",
    method: str = "GET",
    warn_type: WarnType = WarnType.MISSING_TENANT_ID,
    tenant_id: str | None = "t1",
) -> TenancyWarning:
    return TenancyWarning(
        route=route,
        method=method,
        warn_type=warn_type,
        effective_tenant_id=tenant_id,
    )


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=HealthTrackerProbe)


class TestInMemoryTenancyHealthTracker:
    def test_rejects_non_positive_capacity(self):
        with pytest.raises(ValueError, match="capacity"):
            InMemoryTenancyHealthTracker(capacity=0)

    def test_persistence_is_disabled(self):
        assert InMemoryTenancyHealthTracker().persistence_enabled is False

    @pytest.mark.asyncio
    async def test_stats_count_by_type(self, mock_probe):
        tracker = InMemoryTenancyHealthTracker(probe=mock_probe)
        await tracker.record_warning(make_warning(warn_type=WarnType.MISMATCH))
        await tracker.record_warning(make_warning())
        await tracker.record_warning(make_warning())

        stats = await tracker.get_stats(datetime.now(UTC) - timedelta(hours=1))

        assert stats.total == 3
        assert stats.by_type == {"mismatch": 1, "missing-tenantId": 2}

    @pytest.mark.asyncio
    async def test_stats_respect_since(self, mock_probe):
        tracker = InMemoryTenancyHealthTracker(probe=mock_probe)
        await tracker.record_warning(make_warning())

        stats = await tracker.get_stats(datetime.now(UTC) + timedelta(minutes=1))

        assert stats.total == 0
        assert stats.by_type == {}

    @pytest.mark.asyncio
    async def test_stats_filter_by_tenant(self, mock_probe):
        tracker = InMemoryTenancyHealthTracker(probe=mock_probe)
        await tracker.record_warning(make_warning(tenant_id="t1"))
        await tracker.record_warning(make_warning(tenant_id="t2"))
        await tracker.record_warning(make_warning(tenant_id=None))

        stats = await tracker.get_stats(
            datetime.now(UTC) - timedelta(hours=1), tenant_id="t2"
        )

        assert stats.total == 1

    @pytest.mark.asyncio
    async def test_buffer_is_bounded(self, mock_probe):
        tracker = InMemoryTenancyHealthTracker(capacity=2, probe=mock_probe)
        for _ in range(3):
            await tracker.record_warning(make_warning())

        stats = await tracker.get_stats(datetime.now(UTC) - timedelta(hours=1))

        assert stats.total == 2
        mock_probe.buffer_trimmed.assert_called_once_with(2)

    @pytest.mark.asyncio
    async def test_top_routes_survive_buffer_trimming(self, mock_probe):
        tracker = InMemoryTenancyHealthTracker(capacity=1, probe=mock_probe)
        await tracker.record_warning(make_warning(route="/api/tasks"))
        await tracker.record_warning(make_warning(route="/api/tasks"))
        await tracker.record_warning(make_warning(route="/api/projects", method="POST"))

        top = tracker.get_top_routes(limit=5)

        assert top == [
            RouteWarningCount(route="/api/tasks", method="GET", count=2),
            RouteWarningCount(route="/api/projects", method="POST", count=1),
        ]

    @pytest.mark.asyncio
    async def test_get_warnings_requires_persistence(self, mock_probe):
        tracker = InMemoryTenancyHealthTracker(probe=mock_probe)

        with pytest.raises(WarningPersistenceDisabledError):
            await tracker.get_warnings(WarningQuery())
