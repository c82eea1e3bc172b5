"""Role mutation guard: unique role names and in-use protected deletion."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models import Permission, Role, User
from app.services.errors import InUseError, NotFoundError, RoleExistsError, SystemFailureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteResult:
    message: str


def _permissions_by_ids(db: Session, ids: Iterable[UUID]) -> list[Permission]:
    ids = list(ids)
    if not ids:
        return []
    return db.query(Permission).filter(Permission.id.in_(ids)).all()


def create_role(
    db: Session,
    name: str,
    permission_ids: Iterable[UUID],
    user_ids: Iterable[UUID] | None = None,
) -> Role:
    """
    Create a role with the given permissions and (optionally) users.

    The name is the uniqueness key. An existing role is never updated in place; the
    RoleExistsError says whether its permission set matched the requested one.
    Unknown permission or user ids are ignored.
    """
    permission_ids = list(permission_ids)
    permissions = _permissions_by_ids(db, permission_ids)

    existing = (
        db.query(Role)
        .options(selectinload(Role.permissions))
        .filter(Role.name == name)
        .first()
    )
    if existing is not None:
        existing_ids = {p.id for p in existing.permissions}
        raise RoleExistsError(name, identical_permissions=existing_ids == set(permission_ids))

    role = Role(name=name)
    role.permissions = permissions
    user_ids = list(user_ids or [])
    if user_ids:
        role.users = db.query(User).filter(User.id.in_(user_ids)).all()
    db.add(role)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise RoleExistsError(name, identical_permissions=False) from e
    db.refresh(role)
    logger.info(
        "Role created",
        extra={
            "role_id": str(role.id),
            "role_name": name,
            "permission_count": len(permissions),
            "user_count": len(role.users),
        },
    )
    return role


def delete_role(db: Session, role_id: UUID) -> DeleteResult:
    """
    Delete a role that no user holds.

    Permission links are cleared and the row removed in a single commit; the
    permissions themselves are kept.
    """
    role = (
        db.query(Role)
        .options(selectinload(Role.users), selectinload(Role.permissions))
        .filter(Role.id == role_id)
        .first()
    )
    if role is None:
        raise NotFoundError(f"Role with ID '{role_id}' not found")

    user_count = len(role.users)
    if user_count > 0:
        plural = "s" if user_count > 1 else ""
        raise InUseError(
            f"Cannot delete role '{role.name}' because it is assigned to {user_count} user{plural}",
            user_count=user_count,
        )

    role_name = role.name
    try:
        role.permissions = []
        db.flush()
        db.delete(role)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Role deletion failed", extra={"role_id": str(role_id)})
        raise SystemFailureError("Failed to delete role") from e

    logger.info("Role deleted", extra={"role_id": str(role_id), "role_name": role_name})
    return DeleteResult(message=f"Role '{role_name}' deleted successfully")


def get_all_roles(db: Session) -> list[Role]:
    """All roles with their permissions, newest first."""
    return (
        db.query(Role)
        .options(selectinload(Role.permissions))
        .order_by(Role.created_at.desc())
        .all()
    )
