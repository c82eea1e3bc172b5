"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthUser,
    LoginData,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
)
from app.schemas.base import DataResponse, ErrorResponse, MessageResponse, UserType
from app.schemas.dashboard import DashboardStats
from app.schemas.health import HealthResponse
from app.schemas.permission import (
    PermissionCreate,
    PermissionDeleteResponse,
    PermissionDetail,
    PermissionOut,
    RoleSummary,
)
from app.schemas.role import RoleCreate, RoleOut
from app.schemas.user import (
    AssignRoleRequest,
    ProfileUpdateRequest,
    UserDetail,
    UserOut,
    UsersPage,
)

__all__ = [
    "AssignRoleRequest",
    "AuthUser",
    "DashboardStats",
    "DataResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginData",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PermissionCreate",
    "PermissionDeleteResponse",
    "PermissionDetail",
    "PermissionOut",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "RegisterResponse",
    "RoleCreate",
    "RoleOut",
    "RoleSummary",
    "TokenClaims",
    "UserDetail",
    "UserOut",
    "UsersPage",
    "UserType",
]
