"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, dashboard, health, permissions, roles, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/user", tags=["users"])
router.include_router(permissions.router, prefix="/permission", tags=["permissions"])
router.include_router(roles.router, prefix="/role", tags=["roles"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
