"""FastAPI dependencies for the tenancy bounded context."""

from tenancy.dependencies.caller_context import (
    get_caller_context,
    require_effective_tenant_id,
    require_tenant_id_for_create,
    resolve_caller_context,
    tenant_id_for_create,
)
from tenancy.dependencies.enforcement import (
    enforce_read,
    enforce_write,
    get_enforcement_mode,
    get_health_service,
    get_health_tracker,
    get_request_scope,
    get_tenancy_enforcer,
    get_tenancy_guard,
    get_warning_dispatcher,
)
from tenancy.dependencies.require_tenant_context import require_tenant_context

__all__ = [
    "enforce_read",
    "enforce_write",
    "get_caller_context",
    "get_enforcement_mode",
    "get_health_service",
    "get_health_tracker",
    "get_request_scope",
    "get_tenancy_enforcer",
    "get_tenancy_guard",
    "get_warning_dispatcher",
    "require_effective_tenant_id",
    "require_tenant_context",
    "require_tenant_id_for_create",
    "resolve_caller_context",
    "tenant_id_for_create",
]
