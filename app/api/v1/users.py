"""User endpoints: filtered listing, detail, role assignment, profile update, deletion."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_any_permission, require_permission
from app.core.config import settings
from app.core.database import get_db
from app.models import User
from app.schemas.base import MessageResponse
from app.schemas.user import (
    AssignRoleRequest,
    ProfileUpdateRequest,
    UserDetail,
    UserOut,
    UsersPage,
)
from app.services import users as user_service
from app.services.authorization import Action, scoped_permission, scoped_permissions

router = APIRouter()


@router.get("", response_model=UsersPage)
def list_users(
    current_user: Annotated[User, Depends(require_any_permission(*scoped_permissions(Action.READ)))],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int | None, Query(alias="pageSize", ge=1)] = None,
) -> UsersPage:
    """
    Page of users, oldest first, restricted to the account types the caller may read
    (READ_admins, READ_users, READ_owners).
    """
    size = min(page_size or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    result = user_service.get_users(db, page, size, current_user)
    return UsersPage(
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        users=[UserOut.model_validate(u) for u in result.users],
    )


@router.put("/profile", response_model=MessageResponse)
def update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Update the caller's own name and/or email."""
    user_service.update_user_profile(db, current_user.id, name=body.name, email=body.email)
    return MessageResponse(message="Profile updated successfully!")


@router.put("", response_model=MessageResponse)
def assign_role(
    body: AssignRoleRequest,
    current_user: Annotated[User, Depends(require_permission(scoped_permission(Action.READ, "user")))],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Assign a role to a user; also requires EDIT_<type> for the target's account type."""
    result = user_service.edit_user(db, body.role_id, body.user_id, current_user)
    return MessageResponse(message=result.message)


@router.get("/{user_id}", response_model=UserDetail)
def get_user(
    user_id: UUID,
    _user: Annotated[User, Depends(require_permission(scoped_permission(Action.READ, "user")))],
    db: Annotated[Session, Depends(get_db)],
) -> UserDetail:
    """Single user with roles, permissions and profile."""
    return UserDetail.model_validate(user_service.get_user(db, user_id))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: UUID,
    current_user: Annotated[User, Depends(require_any_permission(*scoped_permissions(Action.DELETE)))],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user; requires DELETE_<type> for the target's account type."""
    result = user_service.delete_user(db, user_id, current_user)
    return MessageResponse(message=result.message)
