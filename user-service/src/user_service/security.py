"""
Password hashing for the User Service.

The hash is treated as an opaque one-way function: callers only ever hash a
new password or verify a candidate against a stored hash.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored bcrypt hash (constant time)."""
    return pwd_context.verify(plain_password, hashed_password)
