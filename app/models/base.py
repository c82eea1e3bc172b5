"""SQLAlchemy declarative Base and the columns shared by every RBAC table."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class IdentityMixin:
    """UUID primary key plus creation timestamp (used for newest/oldest ordering)."""

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Client-side default keeps sub-second ordering on databases whose now() is coarse.
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
