"""Issue and verify signed bearer tokens for authenticated users."""

import jwt

from identity.core.security import create_access_token, decode_access_token
from identity.models import User
from identity.schemas.auth import TokenClaims, TokenResponse
from identity.services.errors import AuthErrorCode, AuthServiceError


class IssuedToken(TokenResponse):
    """Token handed back to the caller after a successful sign-in."""


def issue_token(user: User) -> IssuedToken:
    """Sign a token carrying the user's id, username and role names."""
    try:
        token, expires_at = create_access_token(
            sub=user.id,
            roles=user.role_names,
            extra_claims={"name": user.username},
        )
    except (jwt.PyJWTError, NotImplementedError) as e:
        raise AuthServiceError(
            AuthErrorCode.SIGN_IN_FAILURE,
            "There is an issue with signing in.",
        ) from e
    return IssuedToken(access_token=token, token_type="bearer", expires_at=expires_at)


def read_token(token: str) -> TokenClaims:
    """Verify signature and expiry. Raises jwt.PyJWTError on an invalid token."""
    payload = decode_access_token(token)
    try:
        return TokenClaims.model_validate(payload)
    except ValueError as e:
        raise jwt.InvalidTokenError("Invalid token payload") from e
