from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from shared.schemas.identity import AccountStatus, Role


class CamelModel(BaseModel):
    """Base for schemas exchanged on the wire with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserLoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str


class UserResponse(CamelModel):
    id: UUID
    name: str
    email: str
    role: Role
    status: AccountStatus
    created_at: Optional[datetime] = None


class UserRegisteredResponse(BaseModel):
    message: str
    user: UserResponse


class UserListResponse(BaseModel):
    total: int
    users: List[UserResponse]


class PermissionsUpdate(BaseModel):
    """Role and/or status change; at least one must be given."""

    role: Optional[Role] = None
    status: Optional[AccountStatus] = None

    @model_validator(mode="after")
    def require_a_change(self) -> "PermissionsUpdate":
        if self.role is None and self.status is None:
            raise ValueError("role or status is required")
        return self


class PermissionsUpdatedResponse(BaseModel):
    message: str
    user: UserResponse
