from . import favourites, users

__all__ = ["favourites", "users"]
