"""Request/response schemas for the role endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel, UserType
from app.schemas.permission import PermissionOut


class RoleCreate(CamelModel):
    name: UserType
    permissions_id: list[UUID] = Field(default_factory=list, description="Permission ids to attach")
    users_id: list[UUID] | None = Field(default=None, description="Optional user ids to attach")


class RoleOut(CamelModel):
    id: UUID
    name: UserType
    created_at: datetime
    permissions: list[PermissionOut] = Field(default_factory=list)
