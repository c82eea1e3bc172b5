"""SQLAlchemy ORM models."""

from app.models.associations import role_permissions, role_users
from app.models.base import Base
from app.models.permission import Permission
from app.models.profile import Profile
from app.models.role import ROLE_NAMES, Role
from app.models.user import User

__all__ = [
    "Base",
    "Permission",
    "Profile",
    "ROLE_NAMES",
    "Role",
    "User",
    "role_permissions",
    "role_users",
]
