"""
Startup bootstrap for the User Service.

Creates missing tables and ensures the initial super-admin identity exists.
Both steps are idempotent, so the bootstrap runs on every startup and can
also be run on its own with `python -m user_service.bootstrap`.
"""

import asyncio
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shared.schemas.identity import Role

from .config import settings as app_settings
from .crud import users as users_crud
from .db import close_engine, create_tables, get_session_factory
from .logging_config import logger, setup_logging
from .models import User
from .schemas.user_schemas import UserCreate


async def ensure_initial_admin(
    db: AsyncSession, name: str, email: str, password: str
) -> User:
    """
    Return the super-admin registered under `email`, creating it if needed.

    An existing account with that email is left exactly as it is.
    """
    existing_user = await users_crud.get_user_by_email(db, email)
    if existing_user:
        logger.info(f"Initial admin '{email}' already exists (role: {existing_user.role})")
        return existing_user

    logger.info(f"Creating initial admin '{email}'")
    admin_in = UserCreate(name=name, email=email, password=password)
    return await users_crud.create_user(db, admin_in, role=Role.SUPER_ADMIN)


async def bootstrap(db: AsyncSession) -> Optional[User]:
    """Create tables, then the initial admin when credentials are configured."""
    await create_tables()
    logger.info("Bootstrap: tables ensured.")

    if not (app_settings.INITIAL_ADMIN_EMAIL and app_settings.INITIAL_ADMIN_PASSWORD):
        logger.info("No admin credentials provided. Skipping admin user creation.")
        return None

    return await ensure_initial_admin(
        db,
        app_settings.INITIAL_ADMIN_NAME,
        app_settings.INITIAL_ADMIN_EMAIL,
        app_settings.INITIAL_ADMIN_PASSWORD,
    )


async def run_bootstrap() -> None:
    """Run the bootstrap against the configured database with its own session."""
    async with get_session_factory()() as session:
        await bootstrap(session)
    await close_engine()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(run_bootstrap())
