"""Main FastAPI application entry point."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.database.dependencies import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings, get_tenancy_settings
from infrastructure.version import __version__
from tenancy.dependencies.enforcement import get_warning_dispatcher
from tenancy.presentation import router as tenancy_router

configure_logging(debug=get_settings().debug)


@asynccontextmanager
async def tenancy_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Reporting the enforcement mode the process runs with
    - Binding the warning dispatcher to the event loop
    - Draining pending warning dispatches on shutdown
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    probe = DefaultStartupProbe()
    dispatcher = get_warning_dispatcher()
    dispatcher.bind_loop(asyncio.get_running_loop())

    tenancy_settings = get_tenancy_settings()
    if not tenancy_settings.enforcement_recognized:
        probe.unrecognized_enforcement_mode(tenancy_settings.enforcement)
    probe.enforcement_mode_configured(
        mode=tenancy_settings.enforcement_mode.value,
        persistence_enabled=tenancy_settings.warn_persist,
    )

    yield

    probe.application_shutdown()
    await dispatcher.drain()
    await close_database_connections()


app = FastAPI(
    title=get_settings().app_name,
    description="Multi-tenant data isolation policy gate",
    version=__version__,
    lifespan=tenancy_lifespan,
)

app.include_router(tenancy_router)


@app.get("/health")
def health():
    """Basic health check endpoint, including the tenancy enforcement mode."""
    return {
        "status": "ok",
        "tenancy_enforcement": get_tenancy_settings().enforcement_mode.value,
    }
