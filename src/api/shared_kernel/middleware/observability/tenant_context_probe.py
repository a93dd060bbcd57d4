"""Domain probe for caller context resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving the caller's effective
tenant from gateway identity headers and the X-Tenant-Id override.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CallerContextProbe(Protocol):
    """Domain probe for caller context resolution operations."""

    def caller_resolved(
        self,
        user_id: str,
        role: str,
        effective_tenant_id: str | None,
    ) -> None:
        """Record that the caller context was resolved for an authenticated user."""
        ...

    def anonymous_caller(self) -> None:
        """Record that a request carried no upstream identity."""
        ...

    def tenant_override_applied(
        self,
        tenant_id: str,
        user_id: str,
    ) -> None:
        """Record that a super user acts as another tenant via X-Tenant-Id."""
        ...

    def tenant_override_ignored(
        self,
        requested_tenant_id: str,
        user_id: str,
    ) -> None:
        """Record that a non-super user sent an X-Tenant-Id header."""
        ...

    def home_tenant_missing(self, user_id: str, role: str) -> None:
        """Record that a non-super user has no tenant configured."""
        ...

    def with_context(self, context: ObservationContext) -> CallerContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCallerContextProbe:
    """Default implementation of CallerContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultCallerContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultCallerContextProbe(logger=self._logger, context=context)

    def caller_resolved(
        self,
        user_id: str,
        role: str,
        effective_tenant_id: str | None,
    ) -> None:
        """Record that the caller context was resolved for an authenticated user."""
        self._logger.debug(
            "caller_context_resolved",
            user_id=user_id,
            role=role,
            effective_tenant_id=effective_tenant_id,
            **self._get_context_kwargs(),
        )

    def anonymous_caller(self) -> None:
        """Record that a request carried no upstream identity."""
        self._logger.debug(
            "caller_context_anonymous",
            **self._get_context_kwargs(),
        )

    def tenant_override_applied(
        self,
        tenant_id: str,
        user_id: str,
    ) -> None:
        """Record that a super user acts as another tenant via X-Tenant-Id."""
        self._logger.info(
            "caller_context_tenant_override_applied",
            tenant_id=tenant_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def tenant_override_ignored(
        self,
        requested_tenant_id: str,
        user_id: str,
    ) -> None:
        """Record that a non-super user sent an X-Tenant-Id header."""
        self._logger.warning(
            "caller_context_tenant_override_ignored",
            requested_tenant_id=requested_tenant_id,
            user_id=user_id,
            message="X-Tenant-Id is only honoured for super users",
            **self._get_context_kwargs(),
        )

    def home_tenant_missing(self, user_id: str, role: str) -> None:
        """Record that a non-super user has no tenant configured."""
        self._logger.error(
            "caller_context_home_tenant_missing",
            user_id=user_id,
            role=role,
            **self._get_context_kwargs(),
        )
