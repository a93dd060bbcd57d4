"""Development guard rails for common tenancy mistakes.

These guards do not decide policy. They catch code paths that would bypass
the enforcement gate (an insert without tenant id, a tenant id taken from
the client payload) and either report them, raise, or stay silent depending
on the configured GuardMode.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from tenancy.domain.exceptions import TenancyGuardError
from tenancy.domain.value_objects import GuardMode

GuardReporter = Callable[[str, dict[str, Any]], None]


def _ignore(message: str, details: dict[str, Any]) -> None:
    return None


class TenancyGuard:
    """Guard rails bound to a GuardMode.

    Args:
        mode: WARN reports through ``reporter``, THROW raises
            TenancyGuardError, OFF does nothing.
        reporter: Callback receiving the message and structured details.
            The application layer passes a probe method here.
    """

    def __init__(
        self,
        mode: GuardMode = GuardMode.WARN,
        reporter: GuardReporter | None = None,
    ) -> None:
        self._mode = mode
        self._reporter = reporter or _ignore

    @property
    def mode(self) -> GuardMode:
        return self._mode

    def _violation(self, message: str, **details: Any) -> None:
        if self._mode is GuardMode.OFF:
            return
        if self._mode is GuardMode.THROW:
            raise TenancyGuardError(f"[TenancyGuard] {message}")
        self._reporter(message, details)

    def assert_tenant_id_on_insert(
        self,
        payload: Mapping[str, Any],
        table_name: str,
        request_id: str | None = None,
    ) -> None:
        """Report an insert payload for a tenant-owned table without tenant id."""
        if not payload.get("tenant_id"):
            self._violation(
                f"Missing tenant_id in insert to {table_name}",
                table=table_name,
                request_id=request_id,
            )

    def assert_no_client_tenant_id(
        self,
        body: Mapping[str, Any] | None,
        query: Mapping[str, Any] | None,
        context: str,
        request_id: str | None = None,
    ) -> None:
        """Report a tenant id supplied by the client instead of the session."""
        in_body = bool(body) and "tenant_id" in body
        in_query = bool(query) and "tenant_id" in query
        if in_body or in_query:
            self._violation(
                f"Client-supplied tenant_id detected in {context}. "
                "Use the effective tenant from the session instead.",
                context=context,
                source="body" if in_body else "query",
                request_id=request_id,
            )

    def assert_tenant_ownership(
        self,
        entity_tenant_id: str | None,
        expected_tenant_id: str,
        entity_type: str,
        entity_id: str,
        request_id: str | None = None,
    ) -> None:
        """Ensure an entity belongs to the expected tenant before mutating it.

        Raises:
            TenancyGuardError: Always on mismatch, whatever the guard mode.
        """
        if entity_tenant_id == expected_tenant_id:
            return
        self._violation(
            f"Cross-tenant access attempt: {entity_type} {entity_id} belongs to "
            f"tenant {entity_tenant_id}, not {expected_tenant_id}",
            entity_type=entity_type,
            entity_id=entity_id,
            entity_tenant_id=entity_tenant_id,
            expected_tenant_id=expected_tenant_id,
            request_id=request_id,
        )
        raise TenancyGuardError("Forbidden: Cross-tenant access denied")
