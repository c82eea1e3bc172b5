"""Permission endpoints: list, create, detail, delete (detaches from roles first)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_permission
from app.core.database import get_db
from app.models import User
from app.schemas.base import DataResponse, MessageResponse
from app.schemas.permission import (
    PermissionCreate,
    PermissionDeleteResponse,
    PermissionDetail,
    PermissionOut,
    RoleSummary,
)
from app.services import permissions as permission_service

router = APIRouter()


@router.get("", response_model=DataResponse[list[PermissionOut]])
def list_permissions(
    _user: Annotated[User, Depends(require_permission("READ_admins"))],
    db: Annotated[Session, Depends(get_db)],
) -> DataResponse[list[PermissionOut]]:
    permissions = permission_service.get_all_permissions(db)
    return DataResponse[list[PermissionOut]](
        data=[PermissionOut.model_validate(p) for p in permissions]
    )


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_permission(
    body: PermissionCreate,
    _user: Annotated[User, Depends(require_permission("CREATE_admins"))],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    permission_service.create_permission(db, body.name)
    return MessageResponse(message="Permission created successfully!")


@router.get("/{permission_id}", response_model=DataResponse[PermissionDetail])
def get_permission(
    permission_id: UUID,
    _user: Annotated[User, Depends(require_permission("READ_admins"))],
    db: Annotated[Session, Depends(get_db)],
) -> DataResponse[PermissionDetail]:
    """Permission with the roles it is attached to."""
    permission = permission_service.get_permission_by_id(db, permission_id)
    return DataResponse[PermissionDetail](data=PermissionDetail.model_validate(permission))


@router.delete("/{permission_id}", response_model=PermissionDeleteResponse)
def delete_permission(
    permission_id: UUID,
    _user: Annotated[User, Depends(require_permission("DELETE_admins"))],
    db: Annotated[Session, Depends(get_db)],
) -> PermissionDeleteResponse:
    """
    Delete a permission even if roles use it. The response lists the roles it was
    removed from so the client can warn about the change.
    """
    result = permission_service.delete_permission(db, permission_id)
    return PermissionDeleteResponse(
        message=result.message,
        affected_roles=[RoleSummary(id=r.id, name=r.name) for r in result.affected_roles],
    )
