"""Shared middleware for cross-cutting concerns.

This module contains request-pipeline value objects that are shared across
bounded contexts. The caller context is the primary component, carrying the
resolved identity and effective tenant of the current request.
"""
