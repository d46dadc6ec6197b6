"""Registration, login and user lookup: orchestrates the credential store, roles and tokens."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from identity.models import User
from identity.schemas.user import RegistrationRequest
from identity.services import credential_store, role_assigner, token_issuer
from identity.services.errors import AuthErrorCode, AuthServiceError
from identity.services.token_issuer import IssuedToken

logger = logging.getLogger(__name__)


def register(db: Session, request: RegistrationRequest) -> tuple[User, IssuedToken]:
    """
    Create a user with the requested roles and sign them in.

    Nothing is persisted unless every check passes: the password confirmation,
    username and password policy, email/username uniqueness and every role name.
    The user row and its role links are committed together.

    Returns (user, token).
    """
    if request.password != request.confirm_password:
        raise AuthServiceError(AuthErrorCode.PASSWORD_MISMATCH, "Passwords do not match!")

    credential_store.validate_username(request.user_name)
    credential_store.validate_password(request.password)

    if credential_store.find_by_email(db, request.email) is not None:
        raise AuthServiceError(AuthErrorCode.ALREADY_REGISTERED, "You are already registered.")
    if credential_store.find_by_username(db, request.user_name) is not None:
        raise AuthServiceError(AuthErrorCode.ALREADY_REGISTERED, "Username is already taken.")

    roles = role_assigner.resolve_roles(db, request.roles)
    user = credential_store.create_user(
        db,
        full_name=request.full_name,
        username=request.user_name,
        email=request.email,
        age=request.age,
        password=request.password,
        roles=roles,
    )
    token = token_issuer.issue_token(user)
    logger.info(
        "User registered",
        extra={"user_id": user.id, "role_count": len(roles)},
    )
    return user, token


def login(db: Session, email: str, password: str) -> IssuedToken:
    """Check email and password; return a signed token carrying the user's id and roles."""
    user = credential_store.find_by_email(db, email)
    if user is None:
        credential_store.check_password(None, password)
        logger.info("Login failed", extra={"reason": AuthErrorCode.USER_NOT_FOUND.value})
        raise AuthServiceError(AuthErrorCode.USER_NOT_FOUND, "User not found with this email.")

    if not credential_store.check_password(user, password):
        logger.info(
            "Login failed",
            extra={"reason": AuthErrorCode.INVALID_CREDENTIALS.value, "user_id": user.id},
        )
        raise AuthServiceError(AuthErrorCode.INVALID_CREDENTIALS, "Password is invalid.")

    return token_issuer.issue_token(user)


def list_users(db: Session) -> list[User]:
    """Return every user, oldest first."""
    return credential_store.list_all(db)


def get_user(db: Session, user_id: str) -> User:
    """Return the user with this id. Raises NOT_FOUND when absent; storage errors propagate."""
    try:
        user = credential_store.find_by_id(db, user_id)
    except SQLAlchemyError:
        logger.exception("User lookup failed", extra={"user_id": user_id})
        raise
    if user is None:
        raise AuthServiceError(AuthErrorCode.NOT_FOUND, "User not found.")
    return user
