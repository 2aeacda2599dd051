from .gateway import (
    AccessPolicy,
    AuthorizationGateway,
    IdentityResolver,
    RequestIdentity,
    authorize_role,
)
from .jwt import decode_jwt, encode_jwt, parse_bearer

__all__ = [
    "AccessPolicy",
    "AuthorizationGateway",
    "IdentityResolver",
    "RequestIdentity",
    "authorize_role",
    "decode_jwt",
    "encode_jwt",
    "parse_bearer",
]
