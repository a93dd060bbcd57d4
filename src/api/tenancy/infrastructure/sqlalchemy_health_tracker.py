"""PostgreSQL implementation of the tenancy health tracker.

Warnings are dispatched off the request path, outside
any request-scoped session, so each write opens its own short transaction
from the shared sessionmaker.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenancy.domain.value_objects import TenancyWarning, TenancyWarningRecord
from tenancy.infrastructure.in_memory_health_tracker import RouteCounter
from tenancy.infrastructure.models import TenancyWarningModel
from tenancy.infrastructure.observability import (
    DefaultHealthTrackerProbe,
    HealthTrackerProbe,
)
from tenancy.ports.health_tracker import (
    RouteWarningCount,
    WarningPage,
    WarningQuery,
    WarningStats,
)


class SqlAlchemyTenancyHealthTracker:
    """Health tracker storing every warning in the tenancy_warnings table.

    Per-route counters are kept in memory since process start, matching the
    in-memory tracker's top-routes view.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: HealthTrackerProbe | None = None,
    ) -> None:
        """Initialize tracker with a sessionmaker.

        Args:
            session_factory: Sessionmaker bound to the write engine
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._probe = probe or DefaultHealthTrackerProbe()
        self._routes = RouteCounter()

    @property
    def persistence_enabled(self) -> bool:
        return True

    async def record_warning(self, warning: TenancyWarning) -> None:
        """Insert the warning in its own transaction.

        Raises:
            Exception: Database errors propagate after being reported; the
                enforcement layer absorbs them.
        """
        self._routes.increment(warning)
        record = TenancyWarningRecord(warning=warning)

        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(TenancyWarningModel.from_record(record))
        except Exception as e:
            self._probe.warning_persist_failed(route=warning.route, error=e)
            raise

        self._probe.warning_persisted(
            warning_id=record.id, warn_type=warning.warn_type.value
        )

    async def get_stats(
        self,
        since: datetime,
        tenant_id: str | None = None,
    ) -> WarningStats:
        stmt = (
            select(TenancyWarningModel.warn_type, func.count())
            .where(TenancyWarningModel.occurred_at >= since)
            .group_by(TenancyWarningModel.warn_type)
        )
        if tenant_id is not None:
            stmt = stmt.where(TenancyWarningModel.effective_tenant_id == tenant_id)

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            by_type = {warn_type: int(count) for warn_type, count in result.all()}

        return WarningStats(total=sum(by_type.values()), by_type=by_type)

    def get_top_routes(self, limit: int = 5) -> list[RouteWarningCount]:
        return self._routes.top(limit)

    async def get_warnings(self, query: WarningQuery) -> WarningPage:
        conditions = []
        if query.since is not None:
            conditions.append(TenancyWarningModel.occurred_at >= query.since)
        if query.until is not None:
            conditions.append(TenancyWarningModel.occurred_at <= query.until)
        if query.tenant_id is not None:
            conditions.append(
                TenancyWarningModel.effective_tenant_id == query.tenant_id
            )

        count_stmt = select(func.count()).select_from(TenancyWarningModel)
        page_stmt = (
            select(TenancyWarningModel)
            .order_by(TenancyWarningModel.occurred_at.desc())
            .offset(query.offset)
            .limit(query.limit)
        )
        if conditions:
            count_stmt = count_stmt.where(*conditions)
            page_stmt = page_stmt.where(*conditions)

        async with self._session_factory() as session:
            total = (await session.execute(count_stmt)).scalar_one()
            models = (await session.execute(page_stmt)).scalars().all()

        return WarningPage(
            warnings=[model.to_record() for model in models],
            total=int(total),
        )
