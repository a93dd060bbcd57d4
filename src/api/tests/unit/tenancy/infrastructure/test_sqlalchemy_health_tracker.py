"""Unit tests for SqlAlchemyTenancyHealthTracker with a mocked sessionmaker."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from tenancy.domain.value_objects import (
    TenancyWarning,
    TenancyWarningRecord,
    WarnType,
)
from tenancy.infrastructure.models import TenancyWarningModel
from tenancy.infrastructure.observability import HealthTrackerProbe
from tenancy.infrastructure.sqlalchemy_health_tracker import (
    SqlAlchemyTenancyHealthTracker,
)
from tenancy.ports.health_tracker import WarningQuery


@pytest.fixture
def mock_session() -> MagicMock:
    session = MagicMock()
    session.execute = AsyncMock()
    session.begin.return_value.__aenter__.return_value = None
    session.begin.return_value.__aexit__.return_value = False
    return session


@pytest.fixture
def mock_session_factory(mock_session) -> MagicMock:
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = mock_session
    factory.return_value.__aexit__.return_value = False
    return factory


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=HealthTrackerProbe)


@pytest.fixture
def tracker(mock_session_factory, mock_probe) -> SqlAlchemyTenancyHealthTracker:
    return SqlAlchemyTenancyHealthTracker(
        session_factory=mock_session_factory, probe=mock_probe
    )


@pytest.fixture
def warning() -> TenancyWarning:
    return TenancyWarning(
        route="/api/tasks/7",
        method="PATCH",
        warn_type=WarnType.MISMATCH,
        actor_user_id="user-1",
        effective_tenant_id="t1",
        resource_id="7",
        notes="Cannot update task:7: belongs to different tenant",
    )


class TestRecordWarning:
    def test_persistence_is_enabled(self, tracker):
        assert tracker.persistence_enabled is True

    @pytest.mark.asyncio
    async def test_adds_model_in_transaction(
        self, tracker, mock_session, mock_probe, warning
    ):
        await tracker.record_warning(warning)

        mock_session.begin.assert_called_once()
        model = mock_session.add.call_args.args[0]
        assert isinstance(model, TenancyWarningModel)
        assert model.route == "/api/tasks/7"
        assert model.warn_type == "mismatch"
        assert model.effective_tenant_id == "t1"
        mock_probe.warning_persisted.assert_called_once_with(
            warning_id=model.id, warn_type="mismatch"
        )

    @pytest.mark.asyncio
    async def test_failure_is_reported_and_reraised(
        self, tracker, mock_session, mock_probe, warning
    ):
        error = RuntimeError("connection reset")
        mock_session.add.side_effect = error

        with pytest.raises(RuntimeError):
            await tracker.record_warning(warning)

        mock_probe.warning_persist_failed.assert_called_once_with(
            route="/api/tasks/7", error=error
        )
        mock_probe.warning_persisted.assert_not_called()

    @pytest.mark.asyncio
    async def test_routes_are_counted(self, tracker, warning):
        await tracker.record_warning(warning)
        await tracker.record_warning(warning)

        top = tracker.get_top_routes()

        assert top[0].route == "/api/tasks/7"
        assert top[0].count == 2


class TestQueries:
    @pytest.mark.asyncio
    async def test_get_stats_sums_grouped_counts(self, tracker, mock_session):
        result = MagicMock()
        result.all.return_value = [("mismatch", 3), ("missing-tenantId", 2)]
        mock_session.execute.return_value = result

        stats = await tracker.get_stats(datetime(2026, 1, 1, tzinfo=UTC))

        assert stats.total == 5
        assert stats.by_type == {"mismatch": 3, "missing-tenantId": 2}

    @pytest.mark.asyncio
    async def test_get_warnings_returns_page_and_total(
        self, tracker, mock_session, warning
    ):
        record = TenancyWarningRecord(warning=warning)
        count_result = MagicMock()
        count_result.scalar_one.return_value = 42
        page_result = MagicMock()
        page_result.scalars.return_value.all.return_value = [
            TenancyWarningModel.from_record(record)
        ]
        mock_session.execute.side_effect = [count_result, page_result]

        page = await tracker.get_warnings(WarningQuery(tenant_id="t1", limit=1))

        assert page.total == 42
        assert page.warnings == [record]
        assert mock_session.execute.await_count == 2
