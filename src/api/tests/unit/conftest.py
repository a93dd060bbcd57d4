"""Unit test fixtures."""

import pytest

from infrastructure.settings import get_tenancy_settings
from tenancy.dependencies.enforcement import (
    get_health_tracker,
    get_warning_dispatcher,
)


@pytest.fixture(autouse=True)
def clear_cached_singletons():
    """Reset cached settings and trackers so tests never share state."""
    yield
    get_tenancy_settings.cache_clear()
    get_health_tracker.cache_clear()
    get_warning_dispatcher.cache_clear()
