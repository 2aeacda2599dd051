"""
Unit tests for the initial admin bootstrap.
"""

import pytest

from shared.schemas.identity import Role
from user_service.bootstrap import ensure_initial_admin
from user_service.crud import users as users_crud
from user_service.security import verify_password


@pytest.mark.asyncio
async def test_creates_super_admin_once(db_session):
    first = await ensure_initial_admin(db_session, "Root", "Root@Example.com", "s3cret-pass")
    second = await ensure_initial_admin(db_session, "Root", "root@example.com", "other-pass")

    assert first.id == second.id
    assert first.role == Role.SUPER_ADMIN.value
    assert first.email == "root@example.com"
    assert verify_password("s3cret-pass", second.password_hash)

    users, total = await users_crud.list_users(db_session)
    assert total == 1


@pytest.mark.asyncio
async def test_existing_account_is_left_alone(db_session, make_user):
    existing = await make_user(email="root@example.com", role=Role.ADMIN)

    admin = await ensure_initial_admin(db_session, "Root", "root@example.com", "s3cret-pass")

    assert admin.id == existing.id
    assert admin.role == Role.ADMIN.value
