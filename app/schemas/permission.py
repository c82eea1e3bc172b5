"""Request/response schemas for the permission endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from app.schemas.base import CamelModel, MessageResponse, UserType


class PermissionCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255, description="Permission name, e.g. READ_users")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class PermissionOut(CamelModel):
    id: UUID
    name: str
    created_at: datetime


class RoleSummary(CamelModel):
    """Role reference (id and name) used in permission detail and delete results."""

    id: UUID
    name: UserType


class PermissionDetail(PermissionOut):
    roles: list[RoleSummary] = Field(default_factory=list)


class PermissionDeleteResponse(MessageResponse):
    affected_roles: list[RoleSummary] = Field(
        default_factory=list,
        description="Roles the permission was detached from",
    )
