"""Bearer-token auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from identity.core.config import get_settings
from identity.core.database import get_db
from identity.schemas.auth import CurrentUser
from identity.services import credential_store
from identity.services.role_assigner import has_role
from identity.services.token_issuer import read_token

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        claims = read_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    user = credential_store.find_by_id(db, claims.sub)
    if user is None:
        raise _unauthorized("User not found")
    return CurrentUser(id=user.id, username=user.username, roles=user.role_names)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user holding ADMIN_ROLE. Raises 403 otherwise."""
    if not has_role(current_user.roles, get_settings().ADMIN_ROLE):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
