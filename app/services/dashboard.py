"""Aggregate counts and recent sign-ups for the admin dashboard."""

from datetime import timedelta

from sqlalchemy.orm import Session

from app.models import Permission, Role, User
from app.models.base import utcnow
from app.schemas.dashboard import (
    DashboardCounts,
    DashboardStats,
    PermissionStats,
    RecentActivity,
    RoleStats,
    UserStats,
)

RECENT_USERS_LIMIT = 5
NEW_USERS_WINDOW = timedelta(days=7)
NEW_PERMISSIONS_WINDOW = timedelta(days=30)


def get_dashboard_stats(db: Session) -> DashboardStats:
    now = utcnow()
    user_count = db.query(User).count()
    new_users = db.query(User).filter(User.created_at >= now - NEW_USERS_WINDOW).count()
    role_names = [name for (name,) in db.query(Role.name).order_by(Role.created_at.asc()).all()]
    permission_count = db.query(Permission).count()
    new_permissions = (
        db.query(Permission)
        .filter(Permission.created_at >= now - NEW_PERMISSIONS_WINDOW)
        .count()
    )
    recent_users = (
        db.query(User).order_by(User.created_at.desc()).limit(RECENT_USERS_LIMIT).all()
    )

    return DashboardStats(
        stats=DashboardCounts(
            users=UserStats(total=user_count, new_this_week=new_users),
            roles=RoleStats(total=len(role_names), types=role_names),
            permissions=PermissionStats(total=permission_count, new_this_month=new_permissions),
        ),
        recent_activities=[
            RecentActivity(
                data={"name": u.name, "email": u.email},
                timestamp=u.created_at,
            )
            for u in recent_users
        ],
    )
