"""User persistence: lookups, credential policy, hashed-password storage and uniqueness."""

import logging
import re
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from identity.core.config import get_settings
from identity.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
    verify_password,
)
from identity.models import Role, User
from identity.services import role_assigner
from identity.services.errors import AuthErrorCode, AuthServiceError

logger = logging.getLogger(__name__)

# Letters, digits and -._@+ are the only characters allowed in usernames.
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9\-._@+]+$")


def normalize(value: str) -> str:
    """Return the case-insensitive lookup form of a username, email or role name."""
    return value.strip().lower()


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.normalized_email == normalize(email)).first()


def find_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.normalized_username == normalize(username)).first()


def find_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def list_all(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at, User.id).all()


def validate_username(username: str) -> None:
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        raise AuthServiceError(AuthErrorCode.VALIDATION_FAILED, "Invalid username length.")
    if not USERNAME_PATTERN.match(username):
        raise AuthServiceError(
            AuthErrorCode.VALIDATION_FAILED,
            "Username may only contain letters, digits and -._@+",
        )


def validate_password(password: str) -> None:
    """Enforce length and, unless disabled, character-class complexity."""
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise AuthServiceError(
            AuthErrorCode.VALIDATION_FAILED,
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
        )
    if not get_settings().PASSWORD_REQUIRE_COMPLEXITY:
        return
    missing = []
    if not any(c.isdigit() for c in password):
        missing.append("a digit")
    if not any(c.islower() for c in password):
        missing.append("a lowercase letter")
    if not any(c.isupper() for c in password):
        missing.append("an uppercase letter")
    if all(c.isalnum() for c in password):
        missing.append("a non-alphanumeric character")
    if missing:
        raise AuthServiceError(
            AuthErrorCode.VALIDATION_FAILED,
            "Password must contain " + ", ".join(missing) + ".",
        )


def create_user(
    db: Session,
    *,
    full_name: str,
    username: str,
    email: str,
    age: int,
    password: str,
    roles: Sequence[Role] = (),
) -> User:
    """
    Insert a user with a hashed password and its role links in one commit.

    Uniqueness is enforced by the unique indexes on normalized_email and
    normalized_username, so a concurrent registration that passed the caller's
    pre-check still fails here and is reported as ALREADY_REGISTERED.
    """
    user = User(
        full_name=full_name.strip(),
        username=username.strip(),
        normalized_username=normalize(username),
        email=email.strip(),
        normalized_email=normalize(email),
        age=age,
        password_hash=hash_password(password),
    )
    role_assigner.assign_roles(user, roles)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        duplicate = _duplicate_error(db, email=email, username=username)
        if duplicate is None:
            raise
        logger.info("Registration lost uniqueness race", extra={"reason": duplicate.code.value})
        raise duplicate from e
    db.refresh(user)
    return user


def _duplicate_error(db: Session, *, email: str, username: str) -> AuthServiceError | None:
    if find_by_email(db, email) is not None:
        return AuthServiceError(AuthErrorCode.ALREADY_REGISTERED, "You are already registered.")
    if find_by_username(db, username) is not None:
        return AuthServiceError(AuthErrorCode.ALREADY_REGISTERED, "Username is already taken.")
    return None


# Checked when the email is unknown so that path also pays for one bcrypt verify.
_DUMMY_HASH = hash_password("dummy-password-for-timing")


def check_password(user: User | None, password: str) -> bool:
    """
    Verify password against the user's stored hash.

    With no user, a fixed hash is checked instead and False is returned, so an
    unknown email costs the same as a wrong password.
    """
    if user is None:
        verify_password(password, _DUMMY_HASH)
        return False
    return verify_password(password, user.password_hash)
