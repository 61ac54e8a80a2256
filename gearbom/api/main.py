"""FastAPI application entry point for gearbom.

Mounts the BOM and coverage routers and owns the process-wide coverage
run lock. Library modules log through stdlib logging; request-level events
here go through structlog.
"""

import asyncio
import logging

import structlog
from fastapi import FastAPI
from sqlalchemy import text

from gearbom.api.bom import router as bom_router
from gearbom.api.coverage import router as coverage_router
from gearbom.config.settings import Environment, Settings, get_settings

APP_VERSION = "0.1.0"

settings = get_settings()


def configure_logging(settings: Settings) -> None:
    """Apply LOG_LEVEL to stdlib and structlog loggers alike."""
    level = logging.getLevelNamesMapping()[settings.LOG_LEVEL.value]
    logging.basicConfig(level=level)
    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.ENVIRONMENT == Environment.DEV
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging(settings)

logger: structlog.stdlib.BoundLogger = structlog.get_logger()

app = FastAPI(
    title="gearbom API",
    description="Gearmotor BOM resolution and catalog coverage analysis.",
    version=APP_VERSION,
)

# Single-flight guard for coverage regeneration within this process.
app.state.coverage_lock = asyncio.Lock()

app.include_router(bom_router)
app.include_router(coverage_router)


@app.get("/health")
async def health_check() -> dict:
    """Liveness probe: 200 always, "degraded" when the catalog DB is unreachable."""
    try:
        from gearbom.db.session import async_session_factory
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
        database_ok = True
    except Exception:
        logger.warning("health_check_database_unavailable")
        database_ok = False

    return {
        "status": "ok" if database_ok else "degraded",
        "version": APP_VERSION,
        "checks": {"api": True, "database": database_ok},
        "coverage_run_active": app.state.coverage_lock.locked(),
    }


@app.get("/api/version")
async def get_version() -> dict[str, str]:
    return {
        "name": "gearbom",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
