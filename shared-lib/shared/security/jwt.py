from __future__ import annotations

from typing import Any, Mapping, Optional

from jose import JWTError, jwt

from ..exceptions import TokenInvalid, TokenMissing


def parse_bearer(authorization: Optional[str]) -> str:
    """Parse the token out of an `Authorization: Bearer <token>` header value.

    - No header at all is `TokenMissing`
    - Anything other than exactly two parts with a bearer scheme is `TokenInvalid`
    """
    if not authorization:
        raise TokenMissing()
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise TokenInvalid("Malformed authorization header.")
    return parts[1]


def encode_jwt(claims: Mapping[str, Any], *, secret: str, algorithm: str) -> str:
    """Sign a claim set."""
    return jwt.encode(dict(claims), secret, algorithm=algorithm)


def decode_jwt(token: str, *, secret: str, algorithm: str) -> dict:
    """Decode and verify a JWT; signature and expiry are always checked."""
    options = {
        "verify_signature": True,
        "verify_exp": True,
        "require_exp": True,
    }
    try:
        return jwt.decode(token, secret, algorithms=[algorithm], options=options)
    except JWTError as e:
        raise TokenInvalid() from e
