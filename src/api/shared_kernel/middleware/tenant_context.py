"""Caller context value object for the resolved request identity.

This module contains the pure value object that represents who is calling
and which tenant they act as for the current request. It is
framework-agnostic and contains no business logic, making it safe for the
shared kernel.

The actual resolution logic (gateway header extraction, super user tenant
override) lives in the tenancy bounded context's dependency layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class CallerContext:
    """Resolved caller context for the current request.

    Constructed once at the pipeline boundary so downstream validators
    never inspect loosely typed request state.

    Attributes:
        user_id: The authenticated user's ID, or None for anonymous callers.
        role: The caller's role name, or None for anonymous callers.
        home_tenant_id: The tenant the user belongs to (None for super users
            without a home tenant and for anonymous callers).
        effective_tenant_id: The tenant the caller acts as for this request.
        is_super_user: Whether the caller holds the cross-tenant role.
        source: How the effective tenant was resolved - 'home' for the
            user's own tenant, 'override' for a super user X-Tenant-Id
            header, 'none' when there is no tenant context.
    """

    user_id: str | None
    role: str | None
    home_tenant_id: str | None
    effective_tenant_id: str | None
    is_super_user: bool = False
    source: Literal["home", "override", "none"] = "none"

    @property
    def is_authenticated(self) -> bool:
        """Whether an upstream identity was attached to the request."""
        return self.user_id is not None

    @property
    def has_tenant_context(self) -> bool:
        """Whether the caller acts as a concrete tenant."""
        return self.effective_tenant_id is not None

    @classmethod
    def anonymous(cls) -> CallerContext:
        """Context for a request without an authenticated identity."""
        return cls(
            user_id=None,
            role=None,
            home_tenant_id=None,
            effective_tenant_id=None,
        )
