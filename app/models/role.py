"""ORM model for the fixed set of roles (admin, user, owner)."""

from sqlalchemy import Column, Enum
from sqlalchemy.orm import relationship

from app.models.associations import role_permissions, role_users
from app.models.base import Base, IdentityMixin

# Role names double as account types (User.type).
ROLE_NAMES = ("admin", "user", "owner")

# Shared by roles.name and users.type; bound to the metadata so the type is created once.
role_name_enum = Enum(*ROLE_NAMES, name="role_name", metadata=Base.metadata)


class Role(IdentityMixin, Base):
    """Named bundle of permissions assignable to users. Names are unique."""

    __tablename__ = "roles"

    name = Column(role_name_enum, nullable=False, unique=True)

    permissions = relationship(
        "Permission",
        secondary=role_permissions,
        back_populates="roles",
    )
    users = relationship(
        "User",
        secondary=role_users,
        back_populates="roles",
    )
