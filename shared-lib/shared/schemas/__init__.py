"""
Shared schemas package.
Contains Pydantic models and validation schemas used across microservices.
"""

from .common import Message
from .identity import AccountStatus, ResolvedIdentity, Role

__all__ = ["AccountStatus", "Message", "ResolvedIdentity", "Role"]
