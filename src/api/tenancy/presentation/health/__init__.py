"""Tenancy health presentation - routes and response models."""

from tenancy.presentation.health.routes import router

__all__ = ["router"]
