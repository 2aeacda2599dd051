"""
Book Service main application entry point.

This module defines the FastAPI application that serves the Book Service API,
including all routes and dependencies.
"""

import asyncio
import contextlib
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.exceptions import register_exception_handlers

from .config import settings
from .db import close_engine, create_tables
from .logging_config import logger, setup_logging, setup_middleware
from .routers import book_router, health_router
from .services.cascade import get_cascade_dispatcher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle manager.

    Creates missing tables and starts the cascade sweep on startup; stops the
    sweep and releases the database engine on shutdown.
    """
    app.logger.info(f"'{settings.PROJECT_NAME}' startup sequence initiated.")
    app.startup_time = time.time()

    try:
        await create_tables()
    except Exception as e:
        logger.error(f"Table creation failed: {e}", exc_info=True)

    sweep_task = None
    if settings.CASCADE_SWEEP_INTERVAL_SECONDS > 0:
        sweep_task = asyncio.create_task(
            get_cascade_dispatcher().run_forever(settings.CASCADE_SWEEP_INTERVAL_SECONDS)
        )

    yield

    # --- Application Shutdown ---
    app.logger.info(f"'{settings.PROJECT_NAME}' shutdown sequence initiated.")
    if sweep_task is not None:
        sweep_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweep_task
    await close_engine()
    app.logger.info(f"'{settings.PROJECT_NAME}' shutdown sequence complete.")


# Configure logging before app initialization
setup_logging()

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Book catalogue for the library. Authentication is delegated to the User Service.",
    version="1.0.0",
    root_path=settings.ROOT_PATH,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    swagger_ui_parameters={"persistAuthorization": True},
)

# Initialize application logger
app.logger = logging.getLogger(settings.PROJECT_NAME)

# Setup middleware - MUST be done before application starts
setup_middleware(app)

register_exception_handlers(app, logger)

# --- Service-Specific Routers ---
app.include_router(health_router)
app.include_router(book_router)


@app.get("/", tags=["root"], include_in_schema=False)
async def root():
    """Root endpoint for basic service information."""
    return {"service": settings.PROJECT_NAME, "version": "1.0.0"}
