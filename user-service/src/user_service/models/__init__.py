from .user import FavouriteBook, User

__all__ = ["FavouriteBook", "User"]
