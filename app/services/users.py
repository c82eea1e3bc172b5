"""User reads and mutations: role assignment, deletion, profile edits, filtered listing."""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from app.models import Role, User
from app.services.auth import split_name
from app.services.authorization import (
    Action,
    permission_names,
    require_scoped_permission,
    visible_user_types,
)
from app.services.errors import ConflictError, InvalidInputError, NotFoundError
from app.services.roles import DeleteResult

logger = logging.getLogger(__name__)

ALREADY_HAS_ROLE = "User already has this role."


@dataclass(frozen=True)
class AssignRoleResult:
    assigned: bool
    message: str


@dataclass(frozen=True)
class UsersPageResult:
    page: int
    page_size: int
    total: int
    users: list[User]


def get_user(db: Session, user_id: UUID) -> User:
    """A single user with roles, each role's permissions, and profile."""
    user = (
        db.query(User)
        .options(
            selectinload(User.roles).selectinload(Role.permissions),
            selectinload(User.profile),
        )
        .filter(User.id == user_id)
        .first()
    )
    if user is None:
        raise NotFoundError(f"User with ID '{user_id}' not found")
    return user


def get_users(db: Session, page: int, page_size: int, acting_user: User) -> UsersPageResult:
    """
    One page of the users the acting user may see, oldest first.

    Visibility is per account type: READ_admins shows admins, READ_users shows users,
    READ_owners shows owners. No READ permission means an empty page.
    """
    if page < 1 or page_size < 1:
        raise InvalidInputError("page and pageSize must be positive integers")

    allowed_types = sorted(visible_user_types(permission_names(acting_user)))
    if not allowed_types:
        return UsersPageResult(page=page, page_size=0, total=0, users=[])

    query = db.query(User).filter(User.type.in_(allowed_types))
    total = query.count()
    users = (
        query.order_by(User.created_at.asc(), User.id.asc())
        .offset(page_size * (page - 1))
        .limit(page_size)
        .all()
    )
    return UsersPageResult(page=page, page_size=len(users), total=total, users=users)


def edit_user(db: Session, role_id: UUID, user_id: UUID, acting_user: User) -> AssignRoleResult:
    """
    Give the target user an additional role.

    Requires the EDIT permission for the target's account type. Assigning a role the
    user already holds is a no-op.
    """
    user = db.query(User).options(selectinload(User.roles)).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError(f"User with ID '{user_id}' not found")
    role = db.query(Role).filter(Role.id == role_id).first()
    if role is None:
        raise NotFoundError(f"Role with ID '{role_id}' not found")

    require_scoped_permission(acting_user, Action.EDIT, user.type)

    if any(existing.id == role.id for existing in user.roles):
        return AssignRoleResult(assigned=False, message=ALREADY_HAS_ROLE)

    user.roles.append(role)
    db.commit()
    logger.info(
        "Role assigned",
        extra={
            "user_id": str(user.id),
            "role_id": str(role.id),
            "acting_user_id": str(acting_user.id),
        },
    )
    return AssignRoleResult(assigned=True, message="User edited successfully!")


def delete_user(db: Session, user_id: UUID, acting_user: User) -> DeleteResult:
    """Hard-delete a user; requires the DELETE permission for the target's account type."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError(f"User with ID '{user_id}' not found")

    require_scoped_permission(acting_user, Action.DELETE, user.type)

    db.delete(user)
    db.commit()
    logger.info(
        "User deleted",
        extra={"user_id": str(user_id), "acting_user_id": str(acting_user.id)},
    )
    return DeleteResult(message="User deleted successfully!")


def update_user_profile(
    db: Session,
    user_id: UUID,
    name: str | None = None,
    email: str | None = None,
) -> User:
    """
    Apply the supplied fields only.

    A new email must not belong to another user. A new name also updates the
    profile's first and last name.
    """
    user = db.query(User).options(selectinload(User.profile)).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")

    if email is not None and email != user.email:
        taken = db.query(User.id).filter(User.email == email, User.id != user.id).first()
        if taken is not None:
            raise ConflictError(f"User with email '{email}' already exists")
        user.email = email
    if name is not None:
        user.name = name
        if user.profile is not None:
            user.profile.first_name, user.profile.last_name = split_name(name)

    db.commit()
    db.refresh(user)
    logger.info("Profile updated", extra={"user_id": str(user.id)})
    return user
