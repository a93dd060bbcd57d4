"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for enforcement modes, validation verdicts and the
warnings forwarded to the health tracker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from ulid import ULID


class EnforcementMode(StrEnum):
    """Process-wide tenancy enforcement mode.

    OFF keeps legacy behaviour untouched, SOFT observes and warns without
    blocking, STRICT blocks every detected violation.
    """

    OFF = "off"
    SOFT = "soft"
    STRICT = "strict"


class WarnType(StrEnum):
    """Category of a tenancy warning sent to the health tracker."""

    MISMATCH = "mismatch"
    MISSING_TENANT_ID = "missing-tenantId"


class TenancyErrorCode(StrEnum):
    """Error codes surfaced verbatim to callers on policy rejections."""

    TENANT_VIOLATION = "TENANT_VIOLATION"
    NO_TENANT_CONTEXT = "NO_TENANT_CONTEXT"
    TENANT_CONTEXT_REQUIRED = "TENANT_CONTEXT_REQUIRED"


class GuardMode(StrEnum):
    """Behaviour of the development guard rails on a violation."""

    WARN = "warn"
    THROW = "throw"
    OFF = "off"


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of the read-path ownership validator.

    Attributes:
        valid: Whether the read may proceed.
        should_fallback: Ownership was not strictly verified; the caller
            continues but the record may be pre-migration.
        warning: Human-readable explanation, if any.
    """

    valid: bool
    should_fallback: bool
    warning: str | None = None


@dataclass(frozen=True)
class WriteValidationResult:
    """Verdict of a write guard.

    ``blocked`` means the mutation must not be executed. A result may be
    valid and still carry a warning that is surfaced without blocking.
    """

    valid: bool
    blocked: bool
    error: str | None = None
    warning: str | None = None

    @classmethod
    def allowed(cls, warning: str | None = None) -> WriteValidationResult:
        """Create a non-blocking result, optionally carrying a warning."""
        return cls(valid=True, blocked=False, warning=warning)

    @classmethod
    def rejected(cls, error: str) -> WriteValidationResult:
        """Create a blocking result with the given error message."""
        return cls(valid=False, blocked=True, error=error)


@dataclass(frozen=True)
class TenancyWarning:
    """Payload forwarded to the health tracker for a (near-)violation.

    Created per event; this bounded context never persists it itself.
    """

    route: str
    method: str
    warn_type: WarnType
    actor_user_id: str | None = None
    effective_tenant_id: str | None = None
    resource_id: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class TenancyWarningRecord:
    """A TenancyWarning as stored by a health tracker."""

    warning: TenancyWarning
    id: str = field(default_factory=lambda: str(ULID()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def warn_type(self) -> WarnType:
        """Shortcut to the wrapped warning's type."""
        return self.warning.warn_type
