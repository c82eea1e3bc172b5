"""JWT login/registration and the auth dependencies (get_current_claims, require_permission)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import verify_access_token
from app.models import User
from app.schemas.auth import (
    AuthUser,
    LoginData,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
)
from app.services import auth as auth_service
from app.services.authorization import authorize, authorize_any, load_principal
from app.services.errors import AuthenticationError

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT and the user's identity.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = auth_service.login(db, body.email, body.password)
    return LoginResponse(
        data=LoginData(token=result.token, user=AuthUser.model_validate(result.user))
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """Create a 'user' account with its profile and the default 'user' role."""
    user = auth_service.register_user(db, body.name, body.email, body.password)
    return RegisterResponse(
        message="User registered successfully!",
        data=AuthUser.model_validate(user),
    )


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Dependency: require a valid Bearer JWT. Raises 401 if missing or invalid."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    claims = verify_access_token(credentials.credentials)
    if claims is None:
        raise AuthenticationError("Invalid or expired token")
    return claims


def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Dependency: the authenticated caller, re-loaded with roles and permissions."""
    return load_principal(db, claims)


def require_permission(name: str) -> Callable[..., User]:
    """Dependency factory: 403 unless the caller currently holds `name`."""

    def dependency(
        claims: Annotated[TokenClaims, Depends(get_current_claims)],
        db: Annotated[Session, Depends(get_db)],
    ) -> User:
        return authorize(db, claims, name)

    return dependency


def require_any_permission(*names: str) -> Callable[..., User]:
    """Dependency factory: 403 unless the caller holds at least one of `names`."""

    def dependency(
        claims: Annotated[TokenClaims, Depends(get_current_claims)],
        db: Annotated[Session, Depends(get_db)],
    ) -> User:
        return authorize_any(db, claims, names)

    return dependency
