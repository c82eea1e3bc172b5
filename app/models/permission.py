"""ORM model for named permission strings (e.g. READ_users)."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.models.associations import role_permissions
from app.models.base import Base, IdentityMixin


class Permission(IdentityMixin, Base):
    """
    An atomic capability granted through roles.

    Names follow ACTION_resource (DELETE_admins, READ_users) and are matched exactly.
    """

    __tablename__ = "permissions"

    name = Column(String(255), nullable=False, unique=True, index=True)

    roles = relationship(
        "Role",
        secondary=role_permissions,
        back_populates="permissions",
    )
