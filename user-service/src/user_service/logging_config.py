import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.logging_config import LoggingMiddleware, configure_logging

from .config import settings

logger = logging.getLogger("user_service")


def setup_logging() -> None:
    configure_logging(settings.LOGGING_LEVEL)
    logger.info(f"Logging configured at level {settings.LOGGING_LEVEL}")


def setup_middleware(app: FastAPI) -> None:
    """Attach CORS and request logging middleware."""
    app.add_middleware(LoggingMiddleware, logger=logger)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
