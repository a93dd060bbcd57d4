"""Strict-mode readiness assessment.

Soft mode is the migration period: warnings recorded there show which data
and code paths would break under strict enforcement. Readiness summarises
whether switching to strict is expected to be safe.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StrictReadiness:
    """Whether strict mode can be enabled, and what blocks it otherwise."""

    can_enable_strict: bool
    blockers: list[str] = field(default_factory=list)


def compute_strict_readiness(
    warnings_last_24h: int,
    threshold: int,
) -> StrictReadiness:
    """Assess strict-mode readiness from recent warning volume.

    Args:
        warnings_last_24h: Number of tenancy warnings in the last 24 hours.
        threshold: Maximum number of recent warnings tolerated.

    Returns:
        StrictReadiness with one blocker per failed criterion.
    """
    blockers: list[str] = []
    if warnings_last_24h > threshold:
        blockers.append(
            f"{warnings_last_24h} tenancy warnings in last 24 hours "
            f"(threshold: {threshold})"
        )
    return StrictReadiness(can_enable_strict=not blockers, blockers=blockers)
