"""Request/response schemas for login and token handling."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from identity.core.security import PASSWORD_MAX_LEN
from identity.schemas.user import CamelModel


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Registered email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class TokenResponse(CamelModel):
    """JWT access token returned after successful authentication."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(..., description="Token expiry (UTC)")


class TokenClaims(BaseModel):
    """Verified claims carried by an access token."""

    sub: str
    name: str | None = None
    roles: list[str] = Field(default_factory=list)
    iat: int
    exp: int


class CurrentUser(BaseModel):
    """Authenticated user (id, username, roles) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    roles: list[str]
