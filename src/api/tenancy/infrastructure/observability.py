"""Domain probe for health tracker operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class HealthTrackerProbe(Protocol):
    """Domain probe for health tracker storage operations."""

    def warning_persisted(self, warning_id: str, warn_type: str) -> None:
        """Record that a warning was written to the database."""
        ...

    def warning_persist_failed(self, route: str, error: Exception) -> None:
        """Record that writing a warning to the database failed."""
        ...

    def buffer_trimmed(self, capacity: int) -> None:
        """Record that the in-memory buffer dropped its oldest warning."""
        ...

    def with_context(self, context: ObservationContext) -> HealthTrackerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultHealthTrackerProbe:
    """Default implementation of HealthTrackerProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultHealthTrackerProbe:
        """Create a new probe with observation context bound."""
        return DefaultHealthTrackerProbe(logger=self._logger, context=context)

    def warning_persisted(self, warning_id: str, warn_type: str) -> None:
        """Record that a warning was written to the database."""
        self._logger.debug(
            "tenancy_warning_persisted",
            warning_id=warning_id,
            warn_type=warn_type,
            **self._get_context_kwargs(),
        )

    def warning_persist_failed(self, route: str, error: Exception) -> None:
        """Record that writing a warning to the database failed."""
        self._logger.error(
            "tenancy_warning_persist_failed",
            route=route,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def buffer_trimmed(self, capacity: int) -> None:
        """Record that the in-memory buffer dropped its oldest warning."""
        self._logger.debug(
            "tenancy_warning_buffer_trimmed",
            capacity=capacity,
            **self._get_context_kwargs(),
        )
