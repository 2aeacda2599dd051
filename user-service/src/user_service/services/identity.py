"""
Identity Authority.

The only component that holds the token signing secret. It issues tokens at
login and turns a presented token back into `{userId, role}` for both this
service's own routes and, through the /auth/authorize endpoint, for every
service that delegates authentication here.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import AccountDisabled, InvalidCredentials, TokenInvalid, TokenMissing
from shared.schemas.identity import ResolvedIdentity, Role
from shared.security.jwt import decode_jwt, encode_jwt

from ..config import settings
from ..crud import users as users_crud
from ..logging_config import logger
from ..security import verify_password


class IdentityAuthority:
    """Issues and verifies identity tokens and authenticates logins."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        token_lifetime: timedelta = timedelta(hours=10),
    ):
        if not secret:
            raise ValueError("A signing secret is required")
        self.__secret = secret
        self.algorithm = algorithm
        self.token_lifetime = token_lifetime

    def __repr__(self) -> str:
        return (
            f"IdentityAuthority(algorithm={self.algorithm!r}, "
            f"token_lifetime={self.token_lifetime!r})"
        )

    def issue_token(
        self,
        email: str,
        user_id: UUID,
        role: Role,
        issued_at: Optional[datetime] = None,
    ) -> str:
        """Sign `{email, userId, role, exp}`; expiry is absolute from issuance."""
        issued_at = issued_at or datetime.now(timezone.utc)
        claims = {
            "email": email,
            "userId": str(user_id),
            "role": Role(role).value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.token_lifetime).timestamp()),
        }
        return encode_jwt(claims, secret=self.__secret, algorithm=self.algorithm)

    def verify_token(self, token: Optional[str]) -> ResolvedIdentity:
        """
        Decode a token into the identity it was issued for.

        Account status is deliberately not consulted here; a token stays valid
        until it expires.

        Raises:
            TokenMissing: If no token is given
            TokenInvalid: If the signature, structure or expiry does not validate
        """
        if not token:
            raise TokenMissing()

        payload = decode_jwt(token, secret=self.__secret, algorithm=self.algorithm)
        try:
            return ResolvedIdentity.model_validate(payload)
        except PydanticValidationError as e:
            logger.warning(f"Token payload failed validation: {e.error_count()} error(s)")
            raise TokenInvalid() from e

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> str:
        """
        Check a login and issue a token.

        Raises:
            InvalidCredentials: Unknown email or wrong password (indistinguishable)
            AccountDisabled: Correct credentials on a disabled account
        """
        user = await users_crud.get_user_by_email(db, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentials()

        if not user.is_active:
            logger.info(f"Login rejected: account {user.id} is disabled")
            raise AccountDisabled()

        logger.info(f"Login succeeded for user {user.id}")
        return self.issue_token(user.email, user.id, Role(user.role))


@lru_cache
def get_identity_authority() -> IdentityAuthority:
    """FastAPI dependency returning the process-wide Identity Authority."""
    return IdentityAuthority(
        secret=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        token_lifetime=timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
    )
