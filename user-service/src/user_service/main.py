import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.exceptions import register_exception_handlers

from .bootstrap import bootstrap
from .config import settings
from .db import close_engine, get_session_factory
from .logging_config import logger, setup_logging, setup_middleware
from .rate_limiting import setup_rate_limiting
from .routers import (
    auth_router,
    favourite_router,
    health_router,
    internal_router,
    user_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle manager.

    Runs the idempotent bootstrap (tables and initial admin) on startup and
    releases the database engine on shutdown. A failed bootstrap is logged and
    the service still starts, so health probes can report the problem.
    """
    app.logger.info(f"'{settings.PROJECT_NAME}' startup sequence initiated.")
    app.startup_time = time.time()

    app.logger.info("Running bootstrap process...")
    try:
        async with get_session_factory()() as session:
            await bootstrap(session)
    except Exception as e:
        logger.error(f"Bootstrap process failed: {e}", exc_info=True)

    app.logger.info("Application startup complete.")

    yield

    # --- Application Shutdown ---
    app.logger.info(f"{settings.PROJECT_NAME} shutdown sequence initiated.")
    await close_engine()
    app.logger.info(f"{settings.PROJECT_NAME} shutdown sequence complete.")


# Configure logging before app initialization
setup_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Identity authority for the library: registration, login, token verification, user administration and favourite books.",
    version="1.0.0",
    root_path=settings.ROOT_PATH,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "User Authentication",
            "description": "Registration, login and token verification for other services.",
        },
        {
            "name": "Favourites",
            "description": "The authenticated user's favourite books.",
        },
        {
            "name": "Users",
            "description": "Administrative user lookup and role/status changes.",
        },
    ],
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    swagger_ui_parameters={"persistAuthorization": True},
)

# Initialize application logger
app.logger = logging.getLogger(settings.PROJECT_NAME)

# Setup middleware - MUST be done before application starts
setup_middleware(app)

# Setup rate limiting
setup_rate_limiting(app)

register_exception_handlers(app, logger)


# --- Include Service-Specific Routers ---
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(favourite_router)
app.include_router(user_router)
app.include_router(internal_router)
