"""Login and registration: credential checks, token issuance, transactional user creation."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import (
    create_access_token,
    dummy_password_hash,
    hash_password,
    verify_password,
)
from app.models import Profile, Role, User
from app.services.errors import (
    AuthSystemError,
    DuplicateEmailError,
    InvalidCredentialsError,
    SystemFailureError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


def split_name(name: str) -> tuple[str, str]:
    """'Jane Q Roe' -> ('Jane', 'Q Roe'); a single word has an empty last name."""
    first, _, last = name.strip().partition(" ")
    return first, last.strip()


def login(db: Session, email: str, password: str) -> LoginResult:
    """
    Check credentials and issue a session token.

    Unknown email and wrong password raise the same InvalidCredentialsError. Database
    failures raise AuthSystemError instead.
    """
    try:
        user = db.query(User).filter(User.email == email).first()
    except SQLAlchemyError as e:
        logger.exception("Login lookup failed")
        raise AuthSystemError() from e

    if user is None:
        verify_password(password, dummy_password_hash())
        logger.info("Login failed")
        raise InvalidCredentialsError()
    if not verify_password(password, user.password):
        logger.info("Login failed")
        raise InvalidCredentialsError()

    token = create_access_token(user)
    logger.info("Login succeeded", extra={"user_id": str(user.id)})
    return LoginResult(token=token, user=user)


def register_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    user_type: str = "user",
    status: str | None = None,
) -> User:
    """
    Create a user with its profile and default role in one transaction.

    The default roles are those whose name equals user_type. Any failure rolls back
    the whole unit, so no profile survives without its user.
    """
    if db.query(User.id).filter(User.email == email).first() is not None:
        raise DuplicateEmailError(email)

    first_name, last_name = split_name(name)
    try:
        user = User(
            name=name,
            email=email,
            password=hash_password(password),
            type=user_type,
        )
        user.profile = Profile(first_name=first_name, last_name=last_name, status=status)
        user.roles = db.query(Role).filter(Role.name == user_type).all()
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # Lost a race with a concurrent registration of the same email.
        raise DuplicateEmailError(email) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Registration failed", extra={"user_type": user_type})
        raise SystemFailureError("Failed to create user") from e

    db.refresh(user)
    logger.info(
        "User registered",
        extra={"user_id": str(user.id), "user_type": user_type, "role_count": len(user.roles)},
    )
    return user
