"""Authorization gate: resolve a caller's current permissions and check them by exact name."""

import logging
from collections.abc import Iterable
from enum import Enum

from sqlalchemy.orm import Session, selectinload

from app.models import Role, User
from app.schemas.auth import TokenClaims
from app.services.errors import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


class Action(str, Enum):
    READ = "READ"
    CREATE = "CREATE"
    EDIT = "EDIT"
    DELETE = "DELETE"


# (action, account type) -> permission name. The only place type-scoped names are defined.
SCOPED_PERMISSIONS: dict[tuple[Action, str], str] = {
    (Action.READ, "admin"): "READ_admins",
    (Action.READ, "user"): "READ_users",
    (Action.READ, "owner"): "READ_owners",
    (Action.CREATE, "admin"): "CREATE_admins",
    (Action.CREATE, "user"): "CREATE_users",
    (Action.CREATE, "owner"): "CREATE_owners",
    (Action.EDIT, "admin"): "EDIT_admins",
    (Action.EDIT, "user"): "EDIT_users",
    (Action.EDIT, "owner"): "EDIT_owners",
    (Action.DELETE, "admin"): "DELETE_admins",
    (Action.DELETE, "user"): "DELETE_users",
    (Action.DELETE, "owner"): "DELETE_owners",
}


def scoped_permission(action: Action, user_type: str) -> str:
    """Permission required to perform action on accounts of user_type."""
    try:
        return SCOPED_PERMISSIONS[(action, user_type)]
    except KeyError:
        raise ValueError(f"No permission defined for {action.value} on type {user_type!r}") from None


def scoped_permissions(action: Action) -> list[str]:
    """All permission names for one action, e.g. every READ_* entry."""
    return [name for (a, _), name in SCOPED_PERMISSIONS.items() if a is action]


def visible_user_types(names: Iterable[str]) -> set[str]:
    """Account types whose rows a holder of these permissions may list."""
    held = set(names)
    return {
        user_type
        for (action, user_type), name in SCOPED_PERMISSIONS.items()
        if action is Action.READ and name in held
    }


def permission_names(user: User) -> frozenset[str]:
    """Union of permission names across all of the user's roles."""
    return frozenset(p.name for role in user.roles for p in role.permissions)


def has_permission(user: User, required: str) -> bool:
    """Exact membership only; no wildcard, prefix or case folding."""
    return required in permission_names(user)


def load_principal(db: Session, claims: TokenClaims) -> User:
    """
    Re-load the caller with roles and permissions from the database.

    Token claims only identify the caller; role state may have changed since issuance.
    """
    user = (
        db.query(User)
        .options(selectinload(User.roles).selectinload(Role.permissions))
        .filter(User.id == claims.id)
        .first()
    )
    if user is None:
        raise AuthenticationError("User not found")
    return user


def authorize(db: Session, claims: TokenClaims, required: str) -> User:
    """Return the caller if they hold `required`; raise AuthorizationError otherwise."""
    user = load_principal(db, claims)
    if not has_permission(user, required):
        logger.info(
            "Authorization denied",
            extra={"user_id": str(user.id), "required_permission": required},
        )
        raise AuthorizationError(f"Missing permission: {required}")
    return user


def authorize_any(db: Session, claims: TokenClaims, candidates: Iterable[str]) -> User:
    """Return the caller if they hold at least one of `candidates`."""
    candidates = list(candidates)
    user = load_principal(db, claims)
    held = permission_names(user)
    if not any(name in held for name in candidates):
        logger.info(
            "Authorization denied",
            extra={"user_id": str(user.id), "required_any": ",".join(candidates)},
        )
        raise AuthorizationError(f"Missing permission: one of {', '.join(candidates)}")
    return user


def require_scoped_permission(acting_user: User, action: Action, target_type: str) -> None:
    """Data-scoped check: may acting_user perform action on an account of target_type?"""
    required = scoped_permission(action, target_type)
    if not has_permission(acting_user, required):
        logger.info(
            "Scoped authorization denied",
            extra={"user_id": str(acting_user.id), "required_permission": required},
        )
        raise AuthorizationError(
            f"You don't have a permission to {action.value.lower()} {target_type}"
        )
