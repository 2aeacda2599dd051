# user-service/src/user_service/routers/favourite_routes.py
from fastapi import APIRouter, Depends, Query, status

from shared.schemas.common import Message
from shared.security.gateway import RequestIdentity

from ..dependencies import requires
from ..schemas.favourite_schemas import FavouriteBookRequest, FavouriteBooksResponse
from ..services.favourites import FavouritesManager, get_favourites_manager

router = APIRouter(prefix="/users/favourites", tags=["Favourites"])


@router.get("", response_model=FavouriteBooksResponse, summary="List my favourite books")
async def list_favourites(
    page: int = Query(1, ge=1, description="Page number"),
    identity: RequestIdentity = Depends(requires("list-favourites")),
    manager: FavouritesManager = Depends(get_favourites_manager),
):
    return await manager.list_favourites(identity, page=page)


@router.post(
    "",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book to my favourites",
)
async def add_favourite(
    body: FavouriteBookRequest,
    identity: RequestIdentity = Depends(requires("add-favourite")),
    manager: FavouritesManager = Depends(get_favourites_manager),
):
    await manager.add_favourite(identity.user_id, body.book_id)
    return Message(message="Book added to favourites.")


@router.delete("", response_model=Message, summary="Remove a book from my favourites")
async def remove_favourite(
    body: FavouriteBookRequest,
    identity: RequestIdentity = Depends(requires("remove-favourite")),
    manager: FavouritesManager = Depends(get_favourites_manager),
):
    await manager.remove_favourite(identity.user_id, body.book_id)
    return Message(message="Book removed from favourites.")
