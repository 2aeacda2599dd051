from .favourites import FavouritesManager, get_favourites_manager
from .identity import IdentityAuthority, get_identity_authority

__all__ = [
    "FavouritesManager",
    "IdentityAuthority",
    "get_favourites_manager",
    "get_identity_authority",
]
