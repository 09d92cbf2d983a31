"""
Main FastAPI application entry point.

Lifespan:
    - Startup: create tables and seed roles (development/testing only),
      start the fact reconciliation loop when
      ``settings.reconcile_interval_seconds > 0``
    - Shutdown: stop the loop, close the policy client and the database
"""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from trip_authz.core.config import settings
from trip_authz.core.container import (
    get_database,
    get_fact_reconciler,
    get_logger,
    get_policy_client,
)
from trip_authz.infrastructure.persistence.seeds import init_database
from trip_authz.presentation.routers.api.v1 import v1_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    database = get_database()

    if settings.is_development or settings.is_testing:
        seeded = await init_database(database)
        logger.info("database_initialized", seeded_roles=seeded)

    reconcile_task: asyncio.Task[None] | None = None
    if settings.reconcile_interval_seconds > 0:
        reconcile_task = asyncio.create_task(
            get_fact_reconciler().run_reconciliation_loop(
                settings.reconcile_interval_seconds
            )
        )

    logger.info(
        "application_started",
        environment=settings.environment.value,
        authorization_strategy=settings.authorization_strategy.value,
    )

    yield

    if reconcile_task is not None:
        reconcile_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await reconcile_task

    await get_policy_client().aclose()
    await database.close()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Trip authorization and policy fact synchronization",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(v1_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        dict: Health status and database reachability.
    """
    database_ok = await get_database().check_connection()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "ok" if database_ok else "unreachable",
    }
