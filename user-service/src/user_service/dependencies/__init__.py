from .auth import (
    USER_SERVICE_POLICY,
    get_identity_resolver,
    require_internal_service,
    requires,
)

__all__ = [
    "USER_SERVICE_POLICY",
    "get_identity_resolver",
    "require_internal_service",
    "requires",
]
