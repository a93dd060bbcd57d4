"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so tenancy warnings can be correlated with the
    request and caller that triggered them. The route is not part of the
    context: enforcement events already carry it.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        user_id: Identifier of the calling user (if authenticated).
        tenant_id: Effective tenant of the caller (if any).

    Example:
        context = ObservationContext(request_id="req-123", user_id="user-456")
        probe = DefaultTenancyEnforcementProbe().with_context(context)
    """

    request_id: str | None = None
    user_id: str | None = None
    tenant_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        if self.tenant_id is not None:
            result["tenant_id"] = self.tenant_id
        return result
