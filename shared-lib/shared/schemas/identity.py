from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    DISABLED = "disabled"


class ResolvedIdentity(BaseModel):
    """
    The `{userId, role}` pair a credential resolves to.

    This schema is the shared contract between the user_service verify
    endpoint and every service that delegates authentication to it.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")
    role: Role
