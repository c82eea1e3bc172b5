"""Role endpoints: list with permissions, create, delete (blocked while assigned)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_permission
from app.core.database import get_db
from app.models import User
from app.schemas.base import DataResponse, MessageResponse
from app.schemas.role import RoleCreate, RoleOut
from app.services import roles as role_service

router = APIRouter()


@router.get("", response_model=DataResponse[list[RoleOut]])
def list_roles(
    _user: Annotated[User, Depends(require_permission("READ_admins"))],
    db: Annotated[Session, Depends(get_db)],
) -> DataResponse[list[RoleOut]]:
    """All roles with their permissions, newest first."""
    roles = role_service.get_all_roles(db)
    return DataResponse[list[RoleOut]](data=[RoleOut.model_validate(r) for r in roles])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_role(
    body: RoleCreate,
    _user: Annotated[User, Depends(require_permission("CREATE_admins"))],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    role_service.create_role(db, body.name, body.permissions_id, body.users_id)
    return MessageResponse(message="Role created successfully!")


@router.delete("/{role_id}", response_model=MessageResponse)
def delete_role(
    role_id: UUID,
    _user: Annotated[User, Depends(require_permission("DELETE_admins"))],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a role that is not assigned to any user."""
    result = role_service.delete_role(db, role_id)
    return MessageResponse(message=result.message)
