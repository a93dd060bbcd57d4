"""Tenancy presentation layer.

Read-side HTTP surface for operators watching a soft-mode rollout. The
enforcement itself is applied through dependencies on tenant-scoped routes.
"""

from __future__ import annotations

from fastapi import APIRouter

from tenancy.presentation import health

router = APIRouter(
    prefix="/tenancy",
    tags=["tenancy"],
)

router.include_router(health.router)

__all__ = ["router"]
