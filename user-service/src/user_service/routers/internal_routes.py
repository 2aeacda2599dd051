# user-service/src/user_service/routers/internal_routes.py
from fastapi import APIRouter, Depends

from ..dependencies import require_internal_service
from ..schemas.favourite_schemas import CascadeRemovalResponse
from ..services.favourites import FavouritesManager, get_favourites_manager

# Service-to-service endpoints; never exposed to end users.
router = APIRouter(
    prefix="/internal",
    tags=["Internal"],
    dependencies=[Depends(require_internal_service)],
    include_in_schema=False,
)


@router.delete("/favourites/{book_id}", response_model=CascadeRemovalResponse)
async def cascade_remove_book(
    book_id: str,
    manager: FavouritesManager = Depends(get_favourites_manager),
):
    """Called by the book_service after a book is deleted. Safe to repeat."""
    removed = await manager.cascade_remove(book_id)
    return CascadeRemovalResponse(
        message="Book removed from favourites.", removed=removed
    )
