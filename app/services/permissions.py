"""Permission mutation guard: unique names and deletion that detaches from roles first."""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models import Permission
from app.services.errors import ConflictError, NotFoundError, SystemFailureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AffectedRole:
    id: UUID
    name: str


@dataclass(frozen=True)
class PermissionDeleteResult:
    message: str
    affected_roles: list[AffectedRole] = field(default_factory=list)


def create_permission(db: Session, name: str) -> Permission:
    """Insert a permission; names are unique and compared exactly."""
    if db.query(Permission.id).filter(Permission.name == name).first() is not None:
        raise ConflictError(f"Permission with name '{name}' already exists")

    permission = Permission(name=name)
    db.add(permission)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"Permission with name '{name}' already exists") from e
    db.refresh(permission)
    logger.info(
        "Permission created",
        extra={"permission_id": str(permission.id), "permission_name": name},
    )
    return permission


def get_all_permissions(db: Session) -> list[Permission]:
    """All permissions, newest first."""
    return db.query(Permission).order_by(Permission.created_at.desc()).all()


def get_permission_by_id(db: Session, permission_id: UUID) -> Permission:
    permission = (
        db.query(Permission)
        .options(selectinload(Permission.roles))
        .filter(Permission.id == permission_id)
        .first()
    )
    if permission is None:
        raise NotFoundError(f"Permission with ID '{permission_id}' not found")
    return permission


def delete_permission(db: Session, permission_id: UUID) -> PermissionDeleteResult:
    """
    Delete a permission even while roles use it.

    Every referencing role loses the permission first; the affected roles are returned
    so callers can warn about the change.
    """
    permission = get_permission_by_id(db, permission_id)
    permission_name = permission.name
    affected = [AffectedRole(id=role.id, name=role.name) for role in permission.roles]

    try:
        for role in list(permission.roles):
            role.permissions.remove(permission)
        db.flush()
        db.delete(permission)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(
            "Permission deletion failed", extra={"permission_id": str(permission_id)}
        )
        raise SystemFailureError("Failed to delete permission") from e

    logger.info(
        "Permission deleted",
        extra={
            "permission_id": str(permission_id),
            "permission_name": permission_name,
            "affected_role_count": len(affected),
        },
    )
    if affected:
        message = (
            f"Permission '{permission_name}' deleted successfully and removed from "
            f"{len(affected)} role{'s' if len(affected) > 1 else ''}"
        )
    else:
        message = f"Permission '{permission_name}' deleted successfully"
    return PermissionDeleteResult(message=message, affected_roles=affected)
