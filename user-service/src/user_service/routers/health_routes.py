# user-service/src/user_service/routers/health_routes.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..db import get_db
from ..logging_config import logger

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/liveness", summary="Checks if the service is running")
async def liveness_check():
    """
    Liveness probe.

    Returns 200 as long as the process is serving requests.
    """
    return {"status": "alive", "service": settings.PROJECT_NAME}


@router.get("/readiness", summary="Checks if the service is ready to accept traffic")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """
    Readiness probe; checks that the database answers.
    """
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e.__class__.__name__}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable.",
        )

    return {"status": "ready", "dependencies": {"database": "ok"}}
