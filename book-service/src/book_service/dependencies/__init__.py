from .auth import BOOK_SERVICE_POLICY, get_identity_resolver, requires

__all__ = ["BOOK_SERVICE_POLICY", "get_identity_resolver", "requires"]
