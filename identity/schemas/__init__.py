"""Pydantic request/response schemas."""

from identity.schemas.auth import CurrentUser, LoginRequest, TokenClaims, TokenResponse
from identity.schemas.health import HealthResponse
from identity.schemas.user import (
    CamelModel,
    RegistrationRequest,
    RegistrationResponse,
    UserRead,
)

__all__ = [
    "CamelModel",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "RegistrationRequest",
    "RegistrationResponse",
    "TokenClaims",
    "TokenResponse",
    "UserRead",
]
