"""HTTP routes for tenancy health and strict-mode readiness."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from shared_kernel.middleware.tenant_context import CallerContext
from tenancy.application.health_service import TenancyHealthService
from tenancy.dependencies.caller_context import get_caller_context
from tenancy.dependencies.enforcement import get_health_service
from tenancy.ports.exceptions import WarningPersistenceDisabledError
from tenancy.ports.health_tracker import (
    DEFAULT_WARNING_PAGE_SIZE,
    MAX_WARNING_PAGE_SIZE,
    WarningQuery,
)
from tenancy.presentation.health.models import (
    PlatformHealthResponse,
    TenantHealthResponse,
    WarningListResponse,
)

TENANT_ADMIN_ROLE = "admin"

router = APIRouter(tags=["tenancy-health"])


def require_authenticated_caller(
    caller: Annotated[CallerContext, Depends(get_caller_context)],
) -> CallerContext:
    """Raise 401 if the request carries no upstream identity."""
    if not caller.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return caller


def require_super_user(
    caller: Annotated[CallerContext, Depends(require_authenticated_caller)],
) -> CallerContext:
    """Raise 403 unless the caller holds the super user role."""
    if not caller.is_super_user:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super user access required",
        )
    return caller


@router.get("/super/health")
async def get_platform_health(
    _: Annotated[CallerContext, Depends(require_super_user)],
    service: Annotated[TenancyHealthService, Depends(get_health_service)],
) -> PlatformHealthResponse:
    """Get platform-wide tenancy health.

    Reports the current enforcement mode, warning counts for the last 24
    hours, 7 days and all time, the routes producing the most warnings, and
    whether strict mode can be enabled.

    Raises:
        HTTPException: 401 if unauthenticated
        HTTPException: 403 if the caller is not a super user
    """
    health = await service.get_platform_health()
    return PlatformHealthResponse.from_domain(health)


@router.get("/super/warnings")
async def list_warnings(
    _: Annotated[CallerContext, Depends(require_super_user)],
    service: Annotated[TenancyHealthService, Depends(get_health_service)],
    since: Annotated[datetime | None, Query(alias="from")] = None,
    until: Annotated[datetime | None, Query(alias="to")] = None,
    tenant_id: Annotated[str | None, Query(alias="tenantId")] = None,
    limit: Annotated[
        int, Query(ge=1, le=MAX_WARNING_PAGE_SIZE)
    ] = DEFAULT_WARNING_PAGE_SIZE,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> WarningListResponse:
    """List stored tenancy warnings, newest first.

    Raises:
        HTTPException: 403 if the caller is not a super user
        HTTPException: 501 if warning persistence is disabled
    """
    query = WarningQuery(
        since=since,
        until=until,
        tenant_id=tenant_id,
        limit=limit,
        offset=offset,
    )
    try:
        page = await service.list_warnings(query)
    except WarningPersistenceDisabledError as e:
        raise HTTPException(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            detail=str(e),
        ) from e
    return WarningListResponse.from_domain(page)


@router.get("/tenant/health")
async def get_tenant_health(
    caller: Annotated[CallerContext, Depends(require_authenticated_caller)],
    service: Annotated[TenancyHealthService, Depends(get_health_service)],
) -> TenantHealthResponse:
    """Get tenancy health for the caller's effective tenant.

    Available to tenant admins and super users.

    Raises:
        HTTPException: 403 if the caller is neither admin nor super user
        HTTPException: 400 if the caller has no effective tenant
    """
    if not caller.is_super_user and caller.role != TENANT_ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )

    if caller.effective_tenant_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No tenant context",
        )

    health = await service.get_tenant_health(caller.effective_tenant_id)
    return TenantHealthResponse.from_domain(health)
