"""Read-path ownership validation.

Decides whether a caller acting as ``effective_tenant_id`` may read a
resource stored under ``resource_tenant_id``. The branches are evaluated in
order and the first match wins:

1. OFF: always valid, fallback, no warning.
2. No tenant context: denied in STRICT, tolerated with a warning in SOFT.
3. Legacy row without a tenant (None): denied in STRICT, tolerated in SOFT.
4. Tenant mismatch: denied in every active mode.
5. Clean match.
"""

from __future__ import annotations

from tenancy.domain.value_objects import EnforcementMode, ValidationResult


def validate_ownership(
    resource_tenant_id: str | None,
    effective_tenant_id: str | None,
    resource_type: str,
    resource_id: str,
    *,
    mode: EnforcementMode,
) -> ValidationResult:
    """Validate that the caller's tenant owns the resource being read.

    Args:
        resource_tenant_id: Tenant stored on the row; None for orphan rows.
        effective_tenant_id: Tenant the caller acts as; None without context.
        resource_type: Resource kind used in messages (e.g. "task").
        resource_id: Resource identifier used in messages.
        mode: The resolved enforcement mode.

    Returns:
        ValidationResult; ``valid=False`` must become a 403 at the call site.
    """
    if mode is EnforcementMode.OFF:
        return ValidationResult(valid=True, should_fallback=True)

    strict = mode is EnforcementMode.STRICT

    if not effective_tenant_id:
        if strict:
            return ValidationResult(
                valid=False,
                should_fallback=False,
                warning=f"No tenant context for {resource_type} access",
            )
        return ValidationResult(
            valid=True,
            should_fallback=True,
            warning=f"No tenant context for {resource_type}:{resource_id}",
        )

    if resource_tenant_id is None:
        if strict:
            return ValidationResult(
                valid=False,
                should_fallback=False,
                warning=f"{resource_type}:{resource_id} has no tenantId (strict mode)",
            )
        return ValidationResult(
            valid=True,
            should_fallback=True,
            warning=f"{resource_type}:{resource_id} has legacy null tenantId",
        )

    if resource_tenant_id != effective_tenant_id:
        return ValidationResult(
            valid=False,
            should_fallback=False,
            warning=f"Cross-tenant access denied for {resource_type}:{resource_id}",
        )

    return ValidationResult(valid=True, should_fallback=False)
