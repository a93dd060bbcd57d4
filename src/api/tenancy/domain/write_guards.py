"""Write guards for INSERT, UPDATE and DELETE operations.

Unlike reads, a tenant mismatch on a write is always blocked once a tenant
context exists, in SOFT as well as STRICT mode. Creating or mutating data
under a foreign tenant is never tolerated.
"""

from __future__ import annotations

from tenancy.domain.value_objects import EnforcementMode, WriteValidationResult


def validate_insert(
    insert_tenant_id: str | None,
    effective_tenant_id: str | None,
    resource_type: str,
    *,
    mode: EnforcementMode,
) -> WriteValidationResult:
    """Validate the tenant id stamped on a new row.

    Args:
        insert_tenant_id: Tenant id carried by the insert payload.
        effective_tenant_id: Tenant the caller acts as.
        resource_type: Resource kind used in messages (e.g. "project").
        mode: The resolved enforcement mode.

    Returns:
        WriteValidationResult; ``blocked=True`` means the insert must not run.
    """
    if mode is EnforcementMode.OFF:
        return WriteValidationResult.allowed()

    strict = mode is EnforcementMode.STRICT

    if not effective_tenant_id:
        if strict:
            return WriteValidationResult.rejected(
                f"Cannot create {resource_type}: no tenant context"
            )
        return WriteValidationResult.allowed(
            f"Creating {resource_type} without tenant context"
        )

    if not insert_tenant_id:
        if strict:
            return WriteValidationResult.rejected(
                f"Cannot create {resource_type}: tenantId required in strict mode"
            )
        return WriteValidationResult.allowed(f"Creating {resource_type} without tenantId")

    if insert_tenant_id != effective_tenant_id:
        return WriteValidationResult.rejected(
            f"Cannot create {resource_type} for different tenant"
        )

    return WriteValidationResult.allowed()


def validate_update(
    existing_tenant_id: str | None,
    effective_tenant_id: str | None,
    resource_type: str,
    resource_id: str,
    *,
    mode: EnforcementMode,
) -> WriteValidationResult:
    """Validate that the caller's tenant owns the row being modified.

    Args:
        existing_tenant_id: Tenant stored on the row; None for orphan rows.
        effective_tenant_id: Tenant the caller acts as.
        resource_type: Resource kind used in messages.
        resource_id: Resource identifier used in messages.
        mode: The resolved enforcement mode.

    Returns:
        WriteValidationResult; ``blocked=True`` means the update must not run.
    """
    if mode is EnforcementMode.OFF:
        return WriteValidationResult.allowed()

    strict = mode is EnforcementMode.STRICT
    resource = f"{resource_type}:{resource_id}"

    if not effective_tenant_id:
        if strict:
            return WriteValidationResult.rejected(
                f"Cannot update {resource}: no tenant context"
            )
        return WriteValidationResult.allowed(
            f"Updating {resource} without tenant context"
        )

    if not existing_tenant_id:
        if strict:
            return WriteValidationResult.rejected(
                f"Cannot update {resource}: resource has no tenantId"
            )
        return WriteValidationResult.allowed(
            f"Updating legacy {resource} without tenantId"
        )

    if existing_tenant_id != effective_tenant_id:
        return WriteValidationResult.rejected(
            f"Cannot update {resource}: belongs to different tenant"
        )

    return WriteValidationResult.allowed()


def validate_delete(
    existing_tenant_id: str | None,
    effective_tenant_id: str | None,
    resource_type: str,
    resource_id: str,
    *,
    mode: EnforcementMode,
) -> WriteValidationResult:
    """Validate a deletion; ownership semantics are identical to updates."""
    return validate_update(
        existing_tenant_id,
        effective_tenant_id,
        resource_type,
        resource_id,
        mode=mode,
    )


def ensure_insert_tenant_id(
    candidate_tenant_id: str | None,
    effective_tenant_id: str | None,
) -> str | None:
    """Resolve the tenant id to stamp on a new row.

    Prefers an explicitly supplied value, else inherits the caller's
    effective tenant, else None.
    """
    if candidate_tenant_id:
        return candidate_tenant_id
    return effective_tenant_id
