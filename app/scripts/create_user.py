"""
Create a user of any account type (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [type]
Example:
  python -m app.scripts.create_user "Jane Roe" jane@example.com your-secure-password admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.security import NAME_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.models import ROLE_NAMES
from app.schemas.base import check_email
from app.services.auth import register_user
from app.services.errors import ServiceError


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an RBAC admin user.")
    parser.add_argument("name", help="Full name (first word becomes the first name)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("type", nargs="?", default="user", choices=ROLE_NAMES)
    args = parser.parse_args()

    name = args.name.strip()
    email = args.email.strip()
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1
    try:
        check_email(email)
    except ValueError as e:
        print(f"Invalid email address: {e}", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        user = register_user(db, name, email, args.password, user_type=args.type)
        if not user.roles:
            print(
                f"Warning: no '{args.type}' role exists yet; run python -m app.scripts.seed.",
                file=sys.stderr,
            )
        print(f"Created user '{email}' with type '{args.type}'.")
        return 0
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
