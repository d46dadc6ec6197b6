"""User endpoints: registration, login, listing and lookup by id."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from identity.api.v1.auth import get_current_user, require_admin
from identity.core.database import get_db
from identity.models import User
from identity.schemas.auth import CurrentUser, LoginRequest, TokenResponse
from identity.schemas.user import RegistrationRequest, RegistrationResponse, UserRead
from identity.services import auth_service
from identity.services.errors import AuthErrorCode, AuthServiceError

logger = logging.getLogger(__name__)
router = APIRouter()

# HTTP status for each service error code.
ERROR_STATUS: dict[AuthErrorCode, int] = {
    AuthErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    AuthErrorCode.PASSWORD_MISMATCH: status.HTTP_400_BAD_REQUEST,
    AuthErrorCode.UNKNOWN_ROLE: status.HTTP_400_BAD_REQUEST,
    AuthErrorCode.ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    AuthErrorCode.USER_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCode.SIGN_IN_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def _to_http(e: AuthServiceError) -> HTTPException:
    status_code = ERROR_STATUS[e.code]
    if status_code >= 500:
        logger.error("Auth operation failed", extra={"reason": e.code.value})
    return HTTPException(status_code=status_code, detail=e.message)


def _user_read(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        full_name=user.full_name,
        user_name=user.username,
        email=user.email,
        age=user.age,
        roles=user.role_names,
        created_at=user.created_at,
    )


@router.post("/registration", response_model=RegistrationResponse)
def register(
    body: RegistrationRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegistrationResponse:
    """
    Register a user, assign the requested roles and return an access token.

    All requested roles must already exist; otherwise nothing is created.
    """
    try:
        user, token = auth_service.register(db, body)
    except AuthServiceError as e:
        raise _to_http(e) from e
    return RegistrationResponse(
        user=_user_read(user),
        access_token=token.access_token,
        token_type=token.token_type,
        expires_at=token.expires_at,
    )


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <accessToken>
    """
    try:
        token = auth_service.login(db, body.email, body.password)
    except AuthServiceError as e:
        if e.code in (AuthErrorCode.USER_NOT_FOUND, AuthErrorCode.INVALID_CREDENTIALS):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password.",
                headers={"WWW-Authenticate": "Bearer"},
            ) from e
        raise _to_http(e) from e
    return token


@router.get("", response_model=list[UserRead])
def list_users(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserRead]:
    """List all users (any authenticated caller)."""
    return [_user_read(u) for u in auth_service.list_users(db)]


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: str,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRead:
    """Return one user by id (admin only). 404 when the id does not exist."""
    try:
        user = auth_service.get_user(db, user_id)
    except AuthServiceError as e:
        raise _to_http(e) from e
    return _user_read(user)
