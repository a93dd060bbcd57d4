"""Tenancy enforcement service.

Binds the pure validators to the process-wide enforcement mode and turns
their verdicts into request-level effects: a structured log line, a
response header annotation, and (in soft mode only) a best-effort warning
forwarded to the health tracker.

Block-vs-allow is decided purely by the validator result before any
telemetry is attempted. The ``handle_*`` methods never raise; converting a
rejection into an HTTP response is left to the presentation edge.
"""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass
from typing import Any

from shared_kernel.middleware.tenant_context import CallerContext
from tenancy.application.observability import (
    DefaultTenancyEnforcementProbe,
    TenancyEnforcementProbe,
)
from tenancy.domain import enforcement_mode, ownership, write_guards
from tenancy.domain.exceptions import TenantViolationError
from tenancy.domain.value_objects import (
    EnforcementMode,
    TenancyWarning,
    ValidationResult,
    WarnType,
    WriteValidationResult,
)
from tenancy.ports.health_tracker import TenancyHealthTracker

TENANCY_WARNING_HEADER = "X-Tenancy-Warn"
NO_TENANT_CONTEXT_WARNING = "No tenant context"

Deferrer = Callable[..., Any]


def add_warning_header(headers: MutableMapping[str, str], message: str) -> None:
    """Append a warning to the X-Tenancy-Warn response header.

    Multiple warnings from one request accumulate, joined by "; ". Header
    values are latin-1 on the wire, so other characters become "?".
    """
    message = message.encode("latin-1", "replace").decode("latin-1")
    existing = headers.get(TENANCY_WARNING_HEADER)
    if existing:
        headers[TENANCY_WARNING_HEADER] = f"{existing}; {message}"
    else:
        headers[TENANCY_WARNING_HEADER] = message


@dataclass(frozen=True)
class RequestScope:
    """Request-level collaborators needed to act on a verdict.

    Attributes:
        route: Request path.
        method: HTTP method.
        caller: Resolved caller context.
        response_headers: Mutable headers of the outgoing response.
        defer: Schedules a coroutine function without awaiting it
            (``WarningDispatcher.dispatch`` in the web layer).
    """

    route: str
    method: str
    caller: CallerContext
    response_headers: MutableMapping[str, str]
    defer: Deferrer

    @property
    def context(self) -> str:
        """Human-readable "METHOD path" label for log lines."""
        return f"{self.method} {self.route}"


class TenancyEnforcer:
    """Applies the tenancy policy for one enforcement mode.

    Validators are pure; this class owns the mode so call sites never read
    configuration themselves.
    """

    def __init__(
        self,
        mode: EnforcementMode,
        tracker: TenancyHealthTracker,
        probe: TenancyEnforcementProbe | None = None,
    ) -> None:
        self._mode = mode
        self._tracker = tracker
        self._probe = probe or DefaultTenancyEnforcementProbe()

    @property
    def mode(self) -> EnforcementMode:
        return self._mode

    @property
    def tracker(self) -> TenancyHealthTracker:
        return self._tracker

    def is_strict(self) -> bool:
        return enforcement_mode.is_strict(self._mode)

    def is_soft_or_strict(self) -> bool:
        return enforcement_mode.is_soft_or_strict(self._mode)

    # ------------------------------------------------------------------
    # Validators bound to the current mode
    # ------------------------------------------------------------------

    def validate_ownership(
        self,
        resource_tenant_id: str | None,
        effective_tenant_id: str | None,
        resource_type: str,
        resource_id: str,
    ) -> ValidationResult:
        return ownership.validate_ownership(
            resource_tenant_id,
            effective_tenant_id,
            resource_type,
            resource_id,
            mode=self._mode,
        )

    def validate_insert(
        self,
        insert_tenant_id: str | None,
        effective_tenant_id: str | None,
        resource_type: str,
    ) -> WriteValidationResult:
        return write_guards.validate_insert(
            insert_tenant_id,
            effective_tenant_id,
            resource_type,
            mode=self._mode,
        )

    def validate_update(
        self,
        existing_tenant_id: str | None,
        effective_tenant_id: str | None,
        resource_type: str,
        resource_id: str,
    ) -> WriteValidationResult:
        return write_guards.validate_update(
            existing_tenant_id,
            effective_tenant_id,
            resource_type,
            resource_id,
            mode=self._mode,
        )

    def validate_delete(
        self,
        existing_tenant_id: str | None,
        effective_tenant_id: str | None,
        resource_type: str,
        resource_id: str,
    ) -> WriteValidationResult:
        return write_guards.validate_delete(
            existing_tenant_id,
            effective_tenant_id,
            resource_type,
            resource_id,
            mode=self._mode,
        )

    def ensure_insert_tenant_id(
        self,
        candidate_tenant_id: str | None,
        caller: CallerContext,
    ) -> str | None:
        return write_guards.ensure_insert_tenant_id(
            candidate_tenant_id, caller.effective_tenant_id
        )

    # ------------------------------------------------------------------
    # Verdict handling
    # ------------------------------------------------------------------

    def handle_read_validation(
        self,
        result: ValidationResult,
        scope: RequestScope,
        resource_type: str,
        resource_id: str | None = None,
    ) -> bool:
        """Act on an ownership verdict.

        Returns:
            True when the read must be rejected with 403. Never raises.
        """
        denied = not result.valid
        if denied:
            message = result.warning or "Access denied"
            self._probe.access_denied(
                self._mode,
                scope.context,
                message,
                scope.caller.user_id,
                resource_type=resource_type,
            )
            self._forward_warning(scope, WarnType.MISMATCH, resource_id, message)
        elif result.warning:
            self._warn(scope, result.warning, resource_type)
            self._forward_warning(
                scope, WarnType.MISSING_TENANT_ID, resource_id, result.warning
            )
        return denied

    def handle_write_validation(
        self,
        result: WriteValidationResult,
        scope: RequestScope,
        resource_type: str,
        resource_id: str | None = None,
    ) -> bool:
        """Act on a write guard verdict.

        Blocked writes are logged and, in soft mode, forwarded as a
        ``mismatch`` warning. Allowed writes with a warning are logged,
        annotated on the response and forwarded as ``missing-tenantId``.

        Returns:
            True when the write is blocked. Never raises.
        """
        blocked = result.blocked
        if blocked:
            message = result.error or "Write blocked"
            self._probe.write_blocked(
                self._mode,
                scope.context,
                message,
                scope.caller.user_id,
                resource_type=resource_type,
            )
            self._forward_warning(scope, WarnType.MISMATCH, resource_id, message)
        elif result.warning:
            self._warn(scope, result.warning, resource_type)
            self._forward_warning(
                scope, WarnType.MISSING_TENANT_ID, resource_id, result.warning
            )
        return blocked

    def enforce_read(
        self,
        result: ValidationResult,
        scope: RequestScope,
        resource_type: str,
        resource_id: str | None = None,
    ) -> None:
        """Handle an ownership verdict and raise if the read is denied.

        Raises:
            TenantViolationError: When the verdict denies access.
        """
        if self.handle_read_validation(result, scope, resource_type, resource_id):
            raise TenantViolationError(result.warning or "Access denied")

    def enforce_write(
        self,
        result: WriteValidationResult,
        scope: RequestScope,
        resource_type: str,
        resource_id: str | None = None,
    ) -> None:
        """Handle a write guard verdict and raise if the write is blocked.

        Raises:
            TenantViolationError: When the verdict blocks the write.
        """
        if self.handle_write_validation(result, scope, resource_type, resource_id):
            raise TenantViolationError(result.error or "Write blocked")

    def handle_context_requirement(self, scope: RequestScope) -> bool:
        """Check that the caller has a tenant context for a tenant-scoped route.

        Super users pass through; the write guards still apply to each of
        their operations.

        Returns:
            True when the request must be rejected (strict mode only).
        """
        if self._mode is EnforcementMode.OFF:
            return False
        if scope.caller.is_super_user or scope.caller.has_tenant_context:
            return False
        if enforcement_mode.is_strict(self._mode):
            self._probe.access_denied(
                self._mode,
                scope.context,
                "This operation requires tenant context",
                scope.caller.user_id,
            )
            return True
        self._probe.tenancy_warning(
            self._mode,
            scope.context,
            "Operation without tenant context",
            scope.caller.user_id,
        )
        self._annotate(scope, NO_TENANT_CONTEXT_WARNING)
        return False

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------

    async def record_warning(self, warning: TenancyWarning) -> None:
        """Forward a warning to the health tracker (soft mode only).

        Failures are logged and swallowed; a dropped warning only affects
        migration-readiness visibility.
        """
        if not enforcement_mode.is_soft(self._mode):
            return
        try:
            await self._tracker.record_warning(warning)
            self._probe.warning_recorded(warning.route, warning.warn_type.value)
        except Exception as e:
            self._probe.warning_record_failed(warning.route, e)

    def _warn(self, scope: RequestScope, message: str, resource_type: str) -> None:
        self._probe.tenancy_warning(
            self._mode,
            scope.context,
            message,
            scope.caller.user_id,
            resource_type=resource_type,
        )
        self._annotate(scope, message)

    def _annotate(self, scope: RequestScope, message: str) -> None:
        try:
            add_warning_header(scope.response_headers, message)
        except Exception as e:
            self._probe.warning_header_failed(scope.route, e)

    def _forward_warning(
        self,
        scope: RequestScope,
        warn_type: WarnType,
        resource_id: str | None,
        notes: str,
    ) -> None:
        if not enforcement_mode.is_soft(self._mode):
            return
        warning = TenancyWarning(
            route=scope.route,
            method=scope.method,
            warn_type=warn_type,
            actor_user_id=scope.caller.user_id,
            effective_tenant_id=scope.caller.effective_tenant_id,
            resource_id=resource_id,
            notes=notes,
        )
        try:
            scope.defer(self.record_warning, warning)
        except Exception as e:
            self._probe.warning_record_failed(scope.route, e)
