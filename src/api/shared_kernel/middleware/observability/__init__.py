"""Observability for shared middleware operations."""

from shared_kernel.middleware.observability.tenant_context_probe import (
    CallerContextProbe,
    DefaultCallerContextProbe,
)

__all__ = [
    "CallerContextProbe",
    "DefaultCallerContextProbe",
]
