"""Schemas for the admin dashboard statistics."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel, UserType


class UserStats(CamelModel):
    total: int
    new_this_week: int


class RoleStats(CamelModel):
    total: int
    types: list[UserType]


class PermissionStats(CamelModel):
    total: int
    new_this_month: int


class DashboardCounts(CamelModel):
    users: UserStats
    roles: RoleStats
    permissions: PermissionStats


class RecentActivity(CamelModel):
    type: Literal["user_registered"] = "user_registered"
    entity: Literal["user"] = "user"
    data: dict[str, str] = Field(default_factory=dict)
    timestamp: datetime


class DashboardStats(CamelModel):
    stats: DashboardCounts
    recent_activities: list[RecentActivity]
