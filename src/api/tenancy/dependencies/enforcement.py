"""Tenancy enforcement FastAPI dependencies.

Wires the enforcer, health tracker and request scope, and translates policy
rejections into HTTP responses.

Usage in FastAPI routes:
    @router.put("/projects/{project_id}")
    async def update_project(
        project_id: str,
        enforcer: Annotated[TenancyEnforcer, Depends(get_tenancy_enforcer)],
        scope: Annotated[RequestScope, Depends(get_request_scope)],
    ):
        existing = await repo.get(project_id)
        result = enforcer.validate_update(
            existing.tenant_id,
            scope.caller.effective_tenant_id,
            "project",
            project_id,
        )
        enforce_write(enforcer, result, scope, "project", project_id)
        ...
"""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, Response, status

from infrastructure.database.dependencies import get_write_sessionmaker
from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.middleware.tenant_context import CallerContext
from shared_kernel.observability_context import ObservationContext
from tenancy.application.enforcement import RequestScope, TenancyEnforcer
from tenancy.application.health_service import TenancyHealthService
from tenancy.application.observability import (
    DefaultTenancyEnforcementProbe,
    TenancyEnforcementProbe,
)
from tenancy.dependencies.caller_context import get_caller_context
from tenancy.domain.exceptions import TenantViolationError
from tenancy.domain.guards import TenancyGuard
from tenancy.domain.value_objects import (
    EnforcementMode,
    ValidationResult,
    WriteValidationResult,
)
from tenancy.infrastructure import (
    InMemoryTenancyHealthTracker,
    SqlAlchemyTenancyHealthTracker,
    WarningDispatcher,
)
from tenancy.ports.health_tracker import TenancyHealthTracker

REQUEST_ID_HEADER = "X-Request-Id"


def get_enforcement_mode(
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> EnforcementMode:
    """Extract the resolved enforcement mode from tenancy settings.

    A thin sub-dependency so tests can override the mode without building
    a settings object.
    """
    return settings.enforcement_mode


@lru_cache
def get_health_tracker() -> TenancyHealthTracker:
    """Get the application-scoped health tracker (singleton).

    Uses the database-backed tracker when TENANCY_WARN_PERSIST is enabled,
    otherwise a bounded in-memory buffer.
    """
    settings = get_tenancy_settings()
    if settings.warn_persist:
        return SqlAlchemyTenancyHealthTracker(session_factory=get_write_sessionmaker())
    return InMemoryTenancyHealthTracker(capacity=settings.warning_buffer_size)


@lru_cache
def get_warning_dispatcher() -> WarningDispatcher:
    """Get the application-scoped warning dispatcher (singleton)."""
    return WarningDispatcher()


def get_tenancy_enforcement_probe(
    request: Request,
    caller: Annotated[CallerContext, Depends(get_caller_context)],
) -> TenancyEnforcementProbe:
    """Get TenancyEnforcementProbe bound to the current request."""
    context = ObservationContext(
        request_id=request.headers.get(REQUEST_ID_HEADER),
        user_id=caller.user_id,
        tenant_id=caller.effective_tenant_id,
    )
    return DefaultTenancyEnforcementProbe().with_context(context)


def get_tenancy_enforcer(
    mode: Annotated[EnforcementMode, Depends(get_enforcement_mode)],
    tracker: Annotated[TenancyHealthTracker, Depends(get_health_tracker)],
    probe: Annotated[TenancyEnforcementProbe, Depends(get_tenancy_enforcement_probe)],
) -> TenancyEnforcer:
    """Get TenancyEnforcer bound to the process-wide mode."""
    return TenancyEnforcer(mode=mode, tracker=tracker, probe=probe)


async def get_request_scope(
    request: Request,
    response: Response,
    caller: Annotated[CallerContext, Depends(get_caller_context)],
    dispatcher: Annotated[WarningDispatcher, Depends(get_warning_dispatcher)],
) -> RequestScope:
    """Collect the request-level collaborators the enforcer acts on.

    Async so it runs on the event loop: the dispatcher is bound to that loop
    here, which lets sync route handlers dispatch from their worker thread.
    """
    dispatcher.bind_loop(asyncio.get_running_loop())
    return RequestScope(
        route=request.url.path,
        method=request.method,
        caller=caller,
        response_headers=response.headers,
        defer=dispatcher.dispatch,
    )


def get_tenancy_guard(
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
    probe: Annotated[TenancyEnforcementProbe, Depends(get_tenancy_enforcement_probe)],
) -> TenancyGuard:
    """Get the development guard rails configured by TENANCY_GUARD_MODE."""
    return TenancyGuard(mode=settings.guard_mode, reporter=probe.guard_violation)


def get_health_service(
    mode: Annotated[EnforcementMode, Depends(get_enforcement_mode)],
    tracker: Annotated[TenancyHealthTracker, Depends(get_health_tracker)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> TenancyHealthService:
    """Get TenancyHealthService instance."""
    return TenancyHealthService(
        tracker=tracker,
        mode=mode,
        readiness_threshold=settings.strict_readiness_threshold,
    )


def _forbidden(error: TenantViolationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail={"code": error.code.value, "message": error.message},
    )


def enforce_read(
    enforcer: TenancyEnforcer,
    result: ValidationResult,
    scope: RequestScope,
    resource_type: str,
    resource_id: str | None = None,
) -> None:
    """Apply an ownership verdict, raising 403 when the read is denied.

    Raises:
        HTTPException 403: With code TENANT_VIOLATION.
    """
    try:
        enforcer.enforce_read(result, scope, resource_type, resource_id)
    except TenantViolationError as e:
        raise _forbidden(e) from e


def enforce_write(
    enforcer: TenancyEnforcer,
    result: WriteValidationResult,
    scope: RequestScope,
    resource_type: str,
    resource_id: str | None = None,
) -> None:
    """Apply a write guard verdict, raising 403 when the write is blocked.

    Raises:
        HTTPException 403: With code TENANT_VIOLATION.
    """
    try:
        enforcer.enforce_write(result, scope, resource_type, resource_id)
    except TenantViolationError as e:
        raise _forbidden(e) from e
