"""
Seed the standard permissions, the admin and user roles, and a default admin account.
Idempotent; run from project root:

  python -m app.scripts.seed [--admin-email EMAIL] [--admin-password PASSWORD]
"""

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.models import Permission, Role, User
from app.services.auth import register_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

STANDARD_PERMISSIONS = (
    "READ_users",
    "EDIT_users",
    "DELETE_users",
    "CREATE_users",
    "READ_admins",
    "EDIT_admins",
    "DELETE_admins",
    "CREATE_admins",
)

DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_NAME = "Default Admin"
DEFAULT_ADMIN_PASSWORD = "admin123"


def seed_permissions(db: Session) -> list[Permission]:
    """Create missing standard permissions; return every permission in the table."""
    existing = {name for (name,) in db.query(Permission.name).all()}
    missing = [name for name in STANDARD_PERMISSIONS if name not in existing]
    db.add_all(Permission(name=name) for name in missing)
    db.commit()
    logger.info("Permissions seeded: created=%s", len(missing))
    return db.query(Permission).all()


def seed_role(db: Session, name: str, permissions: list[Permission]) -> Role:
    """Create the role if needed and set its permission set."""
    role = db.query(Role).filter(Role.name == name).first()
    if role is None:
        role = Role(name=name)
        db.add(role)
    role.permissions = permissions
    db.commit()
    logger.info("Role seeded: name=%s permissions=%s", name, len(permissions))
    return role


def seed(db: Session, admin_email: str, admin_password: str) -> None:
    permissions = seed_permissions(db)
    seed_role(db, "admin", permissions)
    seed_role(db, "user", [p for p in permissions if p.name.startswith("READ_")])

    if db.query(User.id).filter(User.email == admin_email).first() is not None:
        logger.info("Admin user already exists: email=%s", admin_email)
        return
    register_user(
        db,
        DEFAULT_ADMIN_NAME,
        admin_email,
        admin_password,
        user_type="admin",
        status="Accepted",
    )
    logger.info("Default admin user created: email=%s", admin_email)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed RBAC permissions, roles and an admin.")
    parser.add_argument("--admin-email", default=DEFAULT_ADMIN_EMAIL)
    parser.add_argument("--admin-password", default=DEFAULT_ADMIN_PASSWORD)
    args = parser.parse_args()

    db = SessionLocal()
    try:
        seed(db, args.admin_email, args.admin_password)
        logger.info("Seeding complete.")
        return 0
    except Exception as e:
        logger.exception("Seeding failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
