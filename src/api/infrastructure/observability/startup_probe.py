"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def enforcement_mode_configured(
        self, mode: str, persistence_enabled: bool
    ) -> None:
        """Record the tenancy enforcement mode the process runs with."""
        ...

    def unrecognized_enforcement_mode(self, raw_value: str) -> None:
        """Record that TENANCY_ENFORCEMENT held an unknown value (treated as off)."""
        ...

    def application_shutdown(self) -> None:
        """Record that the application is shutting down."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def enforcement_mode_configured(
        self, mode: str, persistence_enabled: bool
    ) -> None:
        """Record the tenancy enforcement mode the process runs with."""
        self._logger.info(
            "tenancy_enforcement_mode_configured",
            mode=mode,
            persistence_enabled=persistence_enabled,
            **self._get_context_kwargs(),
        )

    def unrecognized_enforcement_mode(self, raw_value: str) -> None:
        """Record that TENANCY_ENFORCEMENT held an unknown value (treated as off)."""
        self._logger.warning(
            "tenancy_enforcement_mode_unrecognized",
            raw_value=raw_value,
            message="Unrecognized TENANCY_ENFORCEMENT value, enforcement is off",
            **self._get_context_kwargs(),
        )

    def application_shutdown(self) -> None:
        """Record that the application is shutting down."""
        self._logger.info("application_shutdown", **self._get_context_kwargs())
