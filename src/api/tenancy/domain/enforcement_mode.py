"""Enforcement mode resolution.

Classifies the raw configuration string into an EnforcementMode. Resolution
never fails: an unset or unrecognized value collapses to OFF.
"""

from __future__ import annotations

from tenancy.domain.value_objects import EnforcementMode


def resolve_mode(raw: str | None) -> EnforcementMode:
    """Resolve a raw configuration value into an enforcement mode.

    Args:
        raw: The configured value (case-insensitive), or None if unset.

    Returns:
        STRICT for "strict", SOFT for "soft", OFF for anything else.
    """
    value = (raw or "").lower()
    if value == EnforcementMode.STRICT:
        return EnforcementMode.STRICT
    if value == EnforcementMode.SOFT:
        return EnforcementMode.SOFT
    return EnforcementMode.OFF


def is_strict(mode: EnforcementMode) -> bool:
    return mode is EnforcementMode.STRICT


def is_soft(mode: EnforcementMode) -> bool:
    return mode is EnforcementMode.SOFT


def is_soft_or_strict(mode: EnforcementMode) -> bool:
    """Whether enforcement is active at all (observing or blocking)."""
    return mode is not EnforcementMode.OFF
