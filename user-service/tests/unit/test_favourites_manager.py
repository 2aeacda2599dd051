"""
Unit tests for the favourites consistency manager.
"""

import uuid

import pytest

from shared.exceptions import (
    AlreadyFavourite,
    InvalidBookReference,
    NotFavourite,
    NotFoundError,
    UpstreamUnreachable,
)
from shared.schemas.identity import Role
from shared.security.gateway import RequestIdentity
from user_service.crud import favourites as favourites_crud
from user_service.schemas.favourite_schemas import FavouriteBooksResponse
from user_service.services.favourites import FavouritesManager, parse_book_id


@pytest.fixture
def manager(db_session, book_client) -> FavouritesManager:
    return FavouritesManager(db_session, book_client)


def identity_for(user) -> RequestIdentity:
    return RequestIdentity(user_id=user.id, role=Role(user.role), credential="Bearer t")


def test_parse_book_id():
    book_id = uuid.uuid4()

    assert parse_book_id(str(book_id)) == book_id
    assert parse_book_id("123") is None
    assert parse_book_id("") is None


@pytest.mark.asyncio
async def test_empty_list_makes_no_outbound_call(manager, make_user, book_client):
    user = await make_user()

    result = await manager.list_favourites(identity_for(user))

    assert result.total == 0
    assert result.books == []
    book_client.fetch_books.assert_not_called()


@pytest.mark.asyncio
async def test_list_after_add_makes_one_filtered_call(manager, make_user, book_client):
    user = await make_user()
    book_id = uuid.uuid4()
    book_client.fetch_books.return_value = FavouriteBooksResponse(
        total=1, books=[{"id": str(book_id), "title": "Dune"}]
    )

    await manager.add_favourite(user.id, str(book_id))
    result = await manager.list_favourites(identity_for(user), page=2)

    book_client.fetch_books.assert_awaited_once_with(
        [book_id], page=2, authorization="Bearer t"
    )
    assert result.total == 1
    assert result.books[0]["title"] == "Dune"


@pytest.mark.asyncio
async def test_list_propagates_upstream_failure(manager, make_user, book_client):
    user = await make_user()
    await manager.add_favourite(user.id, str(uuid.uuid4()))
    book_client.fetch_books.side_effect = UpstreamUnreachable("Book service")

    with pytest.raises(UpstreamUnreachable):
        await manager.list_favourites(identity_for(user))


@pytest.mark.asyncio
async def test_add_then_remove_round_trip(manager, make_user, db_session):
    user = await make_user()
    book_id = uuid.uuid4()

    await manager.add_favourite(user.id, str(book_id))
    assert await favourites_crud.list_favourite_book_ids(db_session, user.id) == [book_id]

    await manager.remove_favourite(user.id, str(book_id))
    assert await favourites_crud.list_favourite_book_ids(db_session, user.id) == []


@pytest.mark.asyncio
async def test_duplicate_add_is_rejected(manager, make_user, db_session):
    user = await make_user()
    book_id = str(uuid.uuid4())
    await manager.add_favourite(user.id, book_id)

    with pytest.raises(AlreadyFavourite) as exc_info:
        await manager.add_favourite(user.id, book_id)

    assert exc_info.value.status_code == 400
    assert len(await favourites_crud.list_favourite_book_ids(db_session, user.id)) == 1


@pytest.mark.asyncio
async def test_same_book_for_two_users_is_allowed(manager, make_user):
    first, second = await make_user(), await make_user()
    book_id = str(uuid.uuid4())

    await manager.add_favourite(first.id, book_id)
    await manager.add_favourite(second.id, book_id)


@pytest.mark.asyncio
async def test_malformed_book_id_is_rejected(manager, make_user):
    user = await make_user()

    with pytest.raises(InvalidBookReference) as exc_info:
        await manager.add_favourite(user.id, "not-an-id")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_remove_absent_book(manager, make_user):
    user = await make_user()

    with pytest.raises(NotFavourite):
        await manager.remove_favourite(user.id, str(uuid.uuid4()))
    with pytest.raises(NotFavourite):
        await manager.remove_favourite(user.id, "not-an-id")


@pytest.mark.asyncio
async def test_unknown_user(manager):
    with pytest.raises(NotFoundError) as exc_info:
        await manager.add_favourite(uuid.uuid4(), str(uuid.uuid4()))

    assert exc_info.value.message == "User not found."


@pytest.mark.asyncio
async def test_cascade_remove_is_idempotent(manager, make_user, db_session):
    first, second = await make_user(), await make_user()
    deleted, kept = uuid.uuid4(), uuid.uuid4()
    await manager.add_favourite(first.id, str(deleted))
    await manager.add_favourite(first.id, str(kept))
    await manager.add_favourite(second.id, str(deleted))

    assert await manager.cascade_remove(str(deleted)) == 2
    assert await manager.cascade_remove(str(deleted)) == 0
    assert await manager.cascade_remove("not-an-id") == 0

    assert await favourites_crud.list_favourite_book_ids(db_session, first.id) == [kept]
    assert await favourites_crud.list_favourite_book_ids(db_session, second.id) == []


@pytest.mark.asyncio
async def test_cascaded_book_disappears_from_list(manager, make_user, book_client):
    user = await make_user()
    book_id = str(uuid.uuid4())
    await manager.add_favourite(user.id, book_id)

    await manager.cascade_remove(book_id)
    result = await manager.list_favourites(identity_for(user))

    assert result.total == 0
    book_client.fetch_books.assert_not_called()
