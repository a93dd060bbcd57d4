"""Tenant context requirement dependency.

Apply to routes that categorically require tenant scoping:

    @router.get("/projects", dependencies=[Depends(require_tenant_context)])
    async def list_projects(...):
        ...

Off mode passes every request through. Super users pass through and remain
subject to the per-operation write guards. Otherwise a caller without an
effective tenant is rejected in strict mode and annotated with a warning
header in soft mode.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, status

from tenancy.application.enforcement import RequestScope, TenancyEnforcer
from tenancy.dependencies.enforcement import get_request_scope, get_tenancy_enforcer
from tenancy.domain.value_objects import TenancyErrorCode

TENANT_CONTEXT_REQUIRED_MESSAGE = "This operation requires tenant context"


def require_tenant_context(
    enforcer: Annotated[TenancyEnforcer, Depends(get_tenancy_enforcer)],
    scope: Annotated[RequestScope, Depends(get_request_scope)],
) -> None:
    """Reject requests without tenant context in strict mode.

    Raises:
        HTTPException 403: With code NO_TENANT_CONTEXT (strict mode only).
    """
    if enforcer.handle_context_requirement(scope):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "code": TenancyErrorCode.NO_TENANT_CONTEXT.value,
                "message": TENANT_CONTEXT_REQUIRED_MESSAGE,
            },
        )
