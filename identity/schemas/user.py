"""Request/response schemas for user registration and user records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from identity.core.security import (
    PASSWORD_MAX_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class CamelModel(BaseModel):
    """Base for API bodies: snake_case attributes, camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegistrationRequest(CamelModel):
    """Body for POST /users/registration."""

    full_name: str = Field(..., min_length=1, max_length=255, description="Display name")
    user_name: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Unique username",
    )
    email: EmailStr = Field(..., description="Unique email address")
    age: int = Field(..., ge=0, le=150, description="Age in years")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    confirm_password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    roles: list[str] = Field(default_factory=list, description="Role names to assign")


class UserRead(CamelModel):
    """User record returned by the API (no password hash)."""

    id: str
    full_name: str
    user_name: str
    email: str
    age: int
    roles: list[str]
    created_at: datetime | None = None


class RegistrationResponse(CamelModel):
    """Created user plus the access token issued for it."""

    user: UserRead
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
