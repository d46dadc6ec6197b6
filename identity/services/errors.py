"""Closed set of authentication outcomes raised by the service layer."""

from enum import Enum


class AuthErrorCode(str, Enum):
    """Every business-rule failure an auth operation can report."""

    VALIDATION_FAILED = "validation_failed"
    PASSWORD_MISMATCH = "password_mismatch"
    ALREADY_REGISTERED = "already_registered"
    UNKNOWN_ROLE = "unknown_role"
    USER_NOT_FOUND = "user_not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    SIGN_IN_FAILURE = "sign_in_failure"
    NOT_FOUND = "not_found"


class AuthServiceError(Exception):
    """Raised by auth services with a typed code; routers map the code to an HTTP status."""

    def __init__(self, code: AuthErrorCode, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"AuthServiceError(code={self.code.value!r}, message={self.message!r})"
