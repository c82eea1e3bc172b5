"""Request/response schemas for auth endpoints and token claims."""

from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.base import CamelModel, DataResponse, Email, MessageResponse, UserType


class TokenClaims(BaseModel):
    """Identity claims carried by a session token. Not trusted for permission state."""

    id: UUID
    email: str
    name: str
    type: UserType


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: Email = Field(..., description="Account email (exact match)")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RegisterRequest(CamelModel):
    """Self-registration payload; always creates a 'user' account."""

    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    email: Email = Field(..., description="Unique account email")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class AuthUser(CamelModel):
    """Public identity fields of a user (no password)."""

    id: UUID
    email: str
    name: str
    type: UserType


class LoginData(CamelModel):
    token: str = Field(..., description="JWT; send as Authorization: Bearer <token>")
    user: AuthUser


LoginResponse = DataResponse[LoginData]


class RegisterResponse(MessageResponse):
    data: AuthUser
