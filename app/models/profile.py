"""ORM model for the per-user profile (owned one-to-one by User)."""

from sqlalchemy import Column, Date, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.models.base import Base, IdentityMixin


class Profile(IdentityMixin, Base):
    __tablename__ = "profiles"

    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")
    status = Column(String(64), nullable=True)
    date_of_birth = Column(Date, nullable=True)

    user = relationship("User", back_populates="profile")
