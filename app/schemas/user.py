"""Request/response schemas for the user endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, model_validator

from app.schemas.base import CamelModel, Email, UserType
from app.schemas.role import RoleOut


class ProfileOut(CamelModel):
    first_name: str
    last_name: str
    status: str | None = None


class UserOut(CamelModel):
    """User row as listed (no password)."""

    id: UUID
    email: str
    name: str
    type: UserType
    created_at: datetime


class UserDetail(UserOut):
    roles: list[RoleOut] = Field(default_factory=list)
    profile: ProfileOut | None = None


class UsersPage(CamelModel):
    """One page of users; page_size is the number of rows returned."""

    page: int
    page_size: int
    total: int
    users: list[UserOut]


class AssignRoleRequest(CamelModel):
    role_id: UUID
    user_id: UUID


class ProfileUpdateRequest(CamelModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: Email | None = None

    @model_validator(mode="after")
    def require_a_field(self) -> "ProfileUpdateRequest":
        if self.name is None and self.email is None:
            raise ValueError("Provide name and/or email")
        return self
