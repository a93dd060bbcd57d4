"""Tenancy domain layer.

Pure policy: mode resolution, ownership validation and write guards.
Nothing in this package performs I/O or depends on a web framework.
"""

from tenancy.domain.enforcement_mode import (
    is_soft,
    is_soft_or_strict,
    is_strict,
    resolve_mode,
)
from tenancy.domain.ownership import validate_ownership
from tenancy.domain.value_objects import (
    EnforcementMode,
    TenancyErrorCode,
    TenancyWarning,
    ValidationResult,
    WarnType,
    WriteValidationResult,
)
from tenancy.domain.write_guards import (
    ensure_insert_tenant_id,
    validate_delete,
    validate_insert,
    validate_update,
)

__all__ = [
    "EnforcementMode",
    "TenancyErrorCode",
    "TenancyWarning",
    "ValidationResult",
    "WarnType",
    "WriteValidationResult",
    "ensure_insert_tenant_id",
    "is_soft",
    "is_soft_or_strict",
    "is_strict",
    "resolve_mode",
    "validate_delete",
    "validate_insert",
    "validate_ownership",
    "validate_update",
]
