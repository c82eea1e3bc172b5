"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.models.associations import role_users
from app.models.base import Base, IdentityMixin
from app.models.role import ROLE_NAMES, role_name_enum


class User(IdentityMixin, Base):
    """
    User account for JWT authentication and role-based access control.

    type: account type, one of ROLE_NAMES. Set at registration together with the
    matching Role; used for row-level visibility and type-scoped permissions.
    password: bcrypt hash, never serialized.
    """

    __tablename__ = "users"

    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)
    type = Column(role_name_enum, nullable=False, default="user", index=True)

    profile = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    roles = relationship(
        "Role",
        secondary=role_users,
        back_populates="users",
    )


__all__ = ["ROLE_NAMES", "User"]
