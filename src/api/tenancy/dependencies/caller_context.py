"""Caller context FastAPI dependency.

Builds the CallerContext for the current request from the identity headers
set by the upstream authentication gateway:

    X-User-Id          authenticated user id
    X-User-Role        role name (e.g. super_user, admin, employee, client)
    X-User-Tenant-Id   the user's home tenant
    X-Tenant-Id        optional tenant override, honoured for super users only

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        caller: Annotated[CallerContext, Depends(get_caller_context)],
    ):
        # caller.effective_tenant_id is the tenant the request acts as
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.middleware.observability import (
    CallerContextProbe,
    DefaultCallerContextProbe,
)
from shared_kernel.middleware.tenant_context import CallerContext
from tenancy.domain.exceptions import TenantContextRequiredError


def get_caller_context_probe() -> CallerContextProbe:
    """Get CallerContextProbe instance."""
    return DefaultCallerContextProbe()


def resolve_caller_context(
    user_id: str | None,
    role: str | None,
    home_tenant_id: str | None,
    x_tenant_id: str | None,
    super_user_role: str,
    probe: CallerContextProbe,
) -> CallerContext:
    """Resolve who is calling and which tenant they act as.

    This is the core logic for the caller context dependency. Empty header
    values are treated as absent.

    Args:
        user_id: Authenticated user id, or None for anonymous requests.
        role: The user's role name.
        home_tenant_id: The user's own tenant.
        x_tenant_id: The X-Tenant-Id override header value.
        super_user_role: Role name that may act as any tenant.
        probe: Domain probe for observability.

    Returns:
        CallerContext with the effective tenant and how it was resolved.
    """
    user_id = (user_id or "").strip() or None
    if user_id is None:
        probe.anonymous_caller()
        return CallerContext.anonymous()

    role = (role or "").strip() or None
    home_tenant_id = (home_tenant_id or "").strip() or None
    x_tenant_id = (x_tenant_id or "").strip() or None
    is_super_user = role is not None and role == super_user_role

    if is_super_user:
        if x_tenant_id:
            probe.tenant_override_applied(tenant_id=x_tenant_id, user_id=user_id)
            effective_tenant_id = x_tenant_id
            source = "override"
        else:
            effective_tenant_id = None
            source = "none"
    else:
        if x_tenant_id and x_tenant_id != home_tenant_id:
            probe.tenant_override_ignored(
                requested_tenant_id=x_tenant_id,
                user_id=user_id,
            )
        if home_tenant_id is None:
            probe.home_tenant_missing(user_id=user_id, role=role or "")
        effective_tenant_id = home_tenant_id
        source = "home" if home_tenant_id else "none"

    probe.caller_resolved(
        user_id=user_id,
        role=role or "",
        effective_tenant_id=effective_tenant_id,
    )

    return CallerContext(
        user_id=user_id,
        role=role,
        home_tenant_id=home_tenant_id,
        effective_tenant_id=effective_tenant_id,
        is_super_user=is_super_user,
        source=source,
    )


def get_caller_context(
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
    probe: Annotated[CallerContextProbe, Depends(get_caller_context_probe)],
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
    x_user_role: Annotated[str | None, Header(alias="X-User-Role")] = None,
    x_user_tenant_id: Annotated[str | None, Header(alias="X-User-Tenant-Id")] = None,
    x_tenant_id: Annotated[str | None, Header(alias="X-Tenant-Id")] = None,
) -> CallerContext:
    """Resolve the caller context for the current request (FastAPI dependency)."""
    return resolve_caller_context(
        user_id=x_user_id,
        role=x_user_role,
        home_tenant_id=x_user_tenant_id,
        x_tenant_id=x_tenant_id,
        super_user_role=settings.super_user_role,
        probe=probe,
    )


def require_effective_tenant_id(caller: CallerContext) -> str | None:
    """Return the tenant the caller acts as, or None.

    Data-access paths call this instead of reading request state directly.
    """
    return caller.effective_tenant_id


def require_tenant_id_for_create(caller: CallerContext, entity_type: str) -> str:
    """Return the tenant id a new tenant-scoped entity must be created under.

    Raises:
        TenantContextRequiredError: If the caller has no effective tenant.
    """
    if caller.effective_tenant_id:
        return caller.effective_tenant_id

    if caller.is_super_user:
        message = (
            f"Tenant context required to create {entity_type}. "
            "Super users must send the X-Tenant-Id header to select a tenant."
        )
    else:
        message = (
            f"Tenant context required to create {entity_type}. "
            "Your account is not associated with a tenant."
        )
    raise TenantContextRequiredError(message, entity_type=entity_type)


def tenant_id_for_create(entity_type: str):
    """Build a dependency yielding the tenant id for creating ``entity_type``.

    Usage:
        @router.post("/projects")
        async def create_project(
            tenant_id: Annotated[str, Depends(tenant_id_for_create("project"))],
        ):
            ...

    Raises:
        HTTPException 400: With code TENANT_CONTEXT_REQUIRED when the caller
            has no effective tenant.
    """

    def dependency(
        caller: Annotated[CallerContext, Depends(get_caller_context)],
    ) -> str:
        try:
            return require_tenant_id_for_create(caller, entity_type)
        except TenantContextRequiredError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"code": e.code.value, "message": str(e)},
            ) from e

    return dependency
