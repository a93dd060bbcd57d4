"""Domain-Oriented Observability for the tenancy application layer."""

from tenancy.application.observability.enforcement_probe import (
    DefaultTenancyEnforcementProbe,
    TenancyEnforcementProbe,
)

__all__ = [
    "DefaultTenancyEnforcementProbe",
    "TenancyEnforcementProbe",
]
