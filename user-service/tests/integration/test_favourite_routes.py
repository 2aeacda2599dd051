"""
Integration tests for the favourite books routes.
"""

import uuid

import pytest
from fastapi import status

from shared.exceptions import UpstreamRejected, UpstreamUnreachable
from user_service.schemas.favourite_schemas import FavouriteBooksResponse


@pytest.mark.asyncio
async def test_favourites_require_authentication(client):
    response = await client.get("/users/favourites")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_add_list_remove(client, make_user, auth_header, book_client):
    user = await make_user()
    headers = auth_header(user)
    book_id = str(uuid.uuid4())
    book_client.fetch_books.return_value = FavouriteBooksResponse(
        total=1, books=[{"id": book_id, "title": "Dune"}]
    )

    added = await client.post("/users/favourites", json={"bookId": book_id}, headers=headers)
    listed = await client.get("/users/favourites?page=1", headers=headers)
    removed = await client.request(
        "DELETE", "/users/favourites", json={"bookId": book_id}, headers=headers
    )

    assert added.status_code == status.HTTP_201_CREATED
    assert added.json() == {"message": "Book added to favourites."}
    assert listed.status_code == status.HTTP_200_OK
    assert listed.json() == {"total": 1, "books": [{"id": book_id, "title": "Dune"}]}
    assert removed.status_code == status.HTTP_200_OK

    book_client.fetch_books.assert_awaited_once()
    args, kwargs = book_client.fetch_books.call_args
    assert [str(i) for i in args[0]] == [book_id]
    assert kwargs["authorization"] == headers["Authorization"]


@pytest.mark.asyncio
async def test_empty_favourites(client, make_user, auth_header, book_client):
    user = await make_user()

    response = await client.get("/users/favourites", headers=auth_header(user))

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"total": 0, "books": []}
    book_client.fetch_books.assert_not_called()


@pytest.mark.asyncio
async def test_add_duplicate_is_400(client, make_user, auth_header):
    user = await make_user()
    book_id = str(uuid.uuid4())
    await client.post("/users/favourites", json={"bookId": book_id}, headers=auth_header(user))

    response = await client.post(
        "/users/favourites", json={"bookId": book_id}, headers=auth_header(user)
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Book is already in favourites."}


@pytest.mark.asyncio
async def test_add_malformed_id_is_404(client, make_user, auth_header):
    user = await make_user()

    response = await client.post(
        "/users/favourites", json={"bookId": "12345"}, headers=auth_header(user)
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Invalid book id."}


@pytest.mark.asyncio
async def test_remove_absent_is_404(client, make_user, auth_header):
    user = await make_user()

    response = await client.request(
        "DELETE",
        "/users/favourites",
        json={"bookId": str(uuid.uuid4())},
        headers=auth_header(user),
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Book is not in favourites."}


@pytest.mark.asyncio
async def test_list_when_book_service_is_down(client, make_user, auth_header, book_client):
    user = await make_user()
    headers = auth_header(user)
    await client.post("/users/favourites", json={"bookId": str(uuid.uuid4())}, headers=headers)
    book_client.fetch_books.side_effect = UpstreamUnreachable("Book service")

    response = await client.get("/users/favourites", headers=headers)

    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert response.json() == {"message": "Service unavailable."}


@pytest.mark.asyncio
async def test_list_mirrors_book_service_rejection(client, make_user, auth_header, book_client):
    user = await make_user()
    headers = auth_header(user)
    await client.post("/users/favourites", json={"bookId": str(uuid.uuid4())}, headers=headers)
    book_client.fetch_books.side_effect = UpstreamRejected(
        "Book service", 403, "Not authorized."
    )

    response = await client.get("/users/favourites", headers=headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"message": "Not authorized."}
