"""Protocol for tenancy enforcement observability.

Defines the interface for domain probes that capture enforcement verdicts,
warnings and telemetry failures. Every warning line carries the active mode
so soft-mode noise can be told apart from strict-mode rejections.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

from tenancy.domain.value_objects import EnforcementMode

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenancyEnforcementProbe(Protocol):
    """Domain probe for tenancy enforcement operations."""

    def tenancy_warning(
        self,
        mode: EnforcementMode,
        context: str,
        message: str,
        user_id: str | None = None,
        resource_type: str | None = None,
    ) -> None:
        """Record a non-blocking tenancy warning."""
        ...

    def access_denied(
        self,
        mode: EnforcementMode,
        context: str,
        message: str,
        user_id: str | None = None,
        resource_type: str | None = None,
    ) -> None:
        """Record that a read was rejected by the ownership validator."""
        ...

    def write_blocked(
        self,
        mode: EnforcementMode,
        context: str,
        message: str,
        user_id: str | None = None,
        resource_type: str | None = None,
    ) -> None:
        """Record that a mutation was blocked by a write guard."""
        ...

    def warning_recorded(self, route: str, warn_type: str) -> None:
        """Record that a warning reached the health tracker."""
        ...

    def warning_record_failed(self, route: str, error: Exception) -> None:
        """Record that forwarding a warning to the health tracker failed."""
        ...

    def warning_header_failed(self, route: str, error: Exception) -> None:
        """Record that the warning could not be added to the response headers."""
        ...

    def guard_violation(self, message: str, details: dict[str, Any]) -> None:
        """Record a development guard rail violation."""
        ...

    def with_context(self, context: ObservationContext) -> TenancyEnforcementProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenancyEnforcementProbe:
    """Default implementation of TenancyEnforcementProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenancyEnforcementProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenancyEnforcementProbe(logger=self._logger, context=context)

    def tenancy_warning(
        self,
        mode: EnforcementMode,
        context: str,
        message: str,
        user_id: str | None = None,
        resource_type: str | None = None,
    ) -> None:
        """Record a non-blocking tenancy warning."""
        self._logger.warning(
            "tenancy_warning",
            mode=mode.value,
            context=context,
            message=message,
            actor_user_id=user_id,
            resource_type=resource_type,
            **self._get_context_kwargs(),
        )

    def access_denied(
        self,
        mode: EnforcementMode,
        context: str,
        message: str,
        user_id: str | None = None,
        resource_type: str | None = None,
    ) -> None:
        """Record that a read was rejected by the ownership validator."""
        self._logger.warning(
            "tenancy_access_denied",
            mode=mode.value,
            context=context,
            message=message,
            actor_user_id=user_id,
            resource_type=resource_type,
            **self._get_context_kwargs(),
        )

    def write_blocked(
        self,
        mode: EnforcementMode,
        context: str,
        message: str,
        user_id: str | None = None,
        resource_type: str | None = None,
    ) -> None:
        """Record that a mutation was blocked by a write guard."""
        self._logger.warning(
            "tenancy_write_blocked",
            mode=mode.value,
            context=context,
            message=message,
            actor_user_id=user_id,
            resource_type=resource_type,
            **self._get_context_kwargs(),
        )

    def warning_recorded(self, route: str, warn_type: str) -> None:
        """Record that a warning reached the health tracker."""
        self._logger.debug(
            "tenancy_warning_recorded",
            route=route,
            warn_type=warn_type,
            **self._get_context_kwargs(),
        )

    def warning_record_failed(self, route: str, error: Exception) -> None:
        """Record that forwarding a warning to the health tracker failed."""
        self._logger.error(
            "tenancy_warning_record_failed",
            route=route,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def warning_header_failed(self, route: str, error: Exception) -> None:
        """Record that the warning could not be added to the response headers."""
        self._logger.error(
            "tenancy_warning_header_failed",
            route=route,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def guard_violation(self, message: str, details: dict[str, Any]) -> None:
        """Record a development guard rail violation."""
        self._logger.warning(
            "tenancy_guard_violation",
            message=message,
            **{**details, **self._get_context_kwargs()},
        )
