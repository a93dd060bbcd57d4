"""Pydantic models for tenancy health API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from tenancy.application.health_service import (
    PlatformTenancyHealth,
    TenantTenancyHealth,
)
from tenancy.domain.value_objects import TenancyWarningRecord
from tenancy.ports.health_tracker import RouteWarningCount, WarningPage, WarningStats


class WarningStatsResponse(BaseModel):
    """Warning counts for a time window."""

    total: int = Field(..., description="Number of warnings in the window")
    by_type: dict[str, int] = Field(
        default_factory=dict, description="Counts keyed by warning type"
    )

    @classmethod
    def from_domain(cls, stats: WarningStats) -> WarningStatsResponse:
        return cls(total=stats.total, by_type=dict(stats.by_type))


class RouteWarningCountResponse(BaseModel):
    """Warning count for one route."""

    route: str
    method: str
    count: int

    @classmethod
    def from_domain(cls, entry: RouteWarningCount) -> RouteWarningCountResponse:
        return cls(route=entry.route, method=entry.method, count=entry.count)


class WarningCountsResponse(BaseModel):
    """Warning totals across the standard reporting windows."""

    last_24_hours: WarningStatsResponse
    last_7_days: WarningStatsResponse
    total: int = Field(..., description="All warnings the tracker still knows about")


class ReadinessResponse(BaseModel):
    """Whether strict mode can be enabled, and what blocks it."""

    can_enable_strict: bool
    blockers: list[str] = Field(default_factory=list)


class PlatformHealthResponse(BaseModel):
    """Response model for platform-wide tenancy health."""

    current_mode: str = Field(..., description="Enforcement mode: off, soft or strict")
    warning_stats: WarningCountsResponse
    top_routes: list[RouteWarningCountResponse]
    readiness_check: ReadinessResponse
    persistence_enabled: bool

    @classmethod
    def from_domain(cls, health: PlatformTenancyHealth) -> PlatformHealthResponse:
        """Convert the platform health snapshot to an API response.

        Args:
            health: Snapshot built by TenancyHealthService

        Returns:
            PlatformHealthResponse
        """
        return cls(
            current_mode=health.mode.value,
            warning_stats=WarningCountsResponse(
                last_24_hours=WarningStatsResponse.from_domain(health.last_24_hours),
                last_7_days=WarningStatsResponse.from_domain(health.last_7_days),
                total=health.all_time_total,
            ),
            top_routes=[
                RouteWarningCountResponse.from_domain(r) for r in health.top_routes
            ],
            readiness_check=ReadinessResponse(
                can_enable_strict=health.readiness.can_enable_strict,
                blockers=list(health.readiness.blockers),
            ),
            persistence_enabled=health.persistence_enabled,
        )


class TenantHealthResponse(BaseModel):
    """Response model for a single tenant's tenancy health."""

    enforcement_mode: str
    tenant_id: str
    warnings_last_24h: WarningStatsResponse
    persistence_enabled: bool

    @classmethod
    def from_domain(cls, health: TenantTenancyHealth) -> TenantHealthResponse:
        return cls(
            enforcement_mode=health.mode.value,
            tenant_id=health.tenant_id,
            warnings_last_24h=WarningStatsResponse.from_domain(health.last_24_hours),
            persistence_enabled=health.persistence_enabled,
        )


class TenancyWarningResponse(BaseModel):
    """Response model for one stored tenancy warning."""

    id: str = Field(..., description="Warning ID (ULID format)")
    occurred_at: datetime
    route: str
    method: str
    warn_type: str
    actor_user_id: str | None = None
    effective_tenant_id: str | None = None
    resource_id: str | None = None
    notes: str | None = None

    @classmethod
    def from_domain(cls, record: TenancyWarningRecord) -> TenancyWarningResponse:
        warning = record.warning
        return cls(
            id=record.id,
            occurred_at=record.occurred_at,
            route=warning.route,
            method=warning.method,
            warn_type=warning.warn_type.value,
            actor_user_id=warning.actor_user_id,
            effective_tenant_id=warning.effective_tenant_id,
            resource_id=warning.resource_id,
            notes=warning.notes,
        )


class WarningListResponse(BaseModel):
    """Response model for a page of stored warnings."""

    warnings: list[TenancyWarningResponse]
    total: int = Field(..., description="Total matching warnings across all pages")

    @classmethod
    def from_domain(cls, page: WarningPage) -> WarningListResponse:
        return cls(
            warnings=[TenancyWarningResponse.from_domain(w) for w in page.warnings],
            total=page.total,
        )
