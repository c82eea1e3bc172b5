"""Admin dashboard statistics."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import require_permission
from app.core.database import get_db
from app.models import User
from app.schemas.base import DataResponse
from app.schemas.dashboard import DashboardStats
from app.services.dashboard import get_dashboard_stats

router = APIRouter()


@router.get("/stats", response_model=DataResponse[DashboardStats])
def get_stats(
    _user: Annotated[User, Depends(require_permission("READ_admins"))],
    db: Annotated[Session, Depends(get_db)],
) -> DataResponse[DashboardStats]:
    """User/role/permission totals plus the five most recent sign-ups."""
    return DataResponse[DashboardStats](data=get_dashboard_stats(db))
