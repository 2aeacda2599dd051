from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from .config import settings
from .logging_config import logger

# Specific rate limits for sensitive endpoints
LOGIN_LIMIT = settings.RATE_LIMIT_LOGIN
REGISTER_LIMIT = settings.RATE_LIMIT_REGISTER

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
    strategy="fixed-window",  # "moving-window" is more accurate but more resource-intensive
)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Answer with the standard error envelope when a limit is hit."""
    logger.warning(f"Rate limit exceeded on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=429,
        content={"message": "Rate limit exceeded.", "data": {"limit": exc.detail}},
    )


def setup_rate_limiting(app):
    """Configure rate limiting for the FastAPI application"""
    app.state.limiter = limiter

    if settings.RATE_LIMIT_ENABLED:
        logger.info(
            f"Rate limiting is enabled with the following limits: "
            f"Login={LOGIN_LIMIT}, Register={REGISTER_LIMIT}"
        )
    else:
        logger.info("Rate limiting is disabled")

    app.add_middleware(SlowAPIMiddleware)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
