from __future__ import annotations

import datetime
from typing import Any

from jose import JWTError, jwt

from backend.core.config import settings
from backend.schemas.auth import TokenPair, TokenPayload, TokenType


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered, expired or of the wrong kind."""


def _now_utc() -> datetime.datetime:
    """Return the current UTC time as an aware datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def _secret_for(token_type: TokenType) -> str:
    if token_type == "access":
        return settings.ACCESS_TOKEN_SECRET
    return settings.REFRESH_TOKEN_SECRET


def create_token(
    subject: str,
    *,
    token_type: TokenType,
    expires_delta: datetime.timedelta,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed JWT.

    Args:
        subject: The token subject (the user ID).
        token_type: "access" or "refresh"; selects the signing secret.
        expires_delta: How long the token should be valid.
        extra_claims: Optional additional claims to embed into the token.

    Returns:
        The encoded JWT as a string.
    """
    now = _now_utc()
    payload: dict[str, Any] = {
        "sub": str(subject),
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    if extra_claims:
        payload.update(extra_claims)

    return jwt.encode(payload, _secret_for(token_type), algorithm=settings.ALGORITHM)


def create_access_token(subject: str, email: str, name: str) -> str:
    """Create a short-lived access token."""
    return create_token(
        subject,
        token_type="access",
        expires_delta=datetime.timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        extra_claims={"email": email, "name": name},
    )


def create_refresh_token(subject: str, email: str, name: str) -> str:
    """Create a long-lived refresh token."""
    return create_token(
        subject,
        token_type="refresh",
        expires_delta=datetime.timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        extra_claims={"email": email, "name": name},
    )


def issue_token_pair(subject: str, email: str, name: str) -> TokenPair:
    """Sign an access/refresh pair from the same claim set.

    Either both tokens are returned or the signing error propagates.
    """
    access = create_access_token(subject, email, name)
    refresh = create_refresh_token(subject, email, name)
    return TokenPair(access_token=access, refresh_token=refresh)


def _verify(token: str, token_type: TokenType) -> TokenPayload:
    try:
        claims = jwt.decode(token, _secret_for(token_type), algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError(f"Invalid {token_type} token: {exc}") from exc

    if claims.get("type") != token_type:
        raise InvalidTokenError(f"Not a {token_type} token")

    try:
        return TokenPayload(
            subject=claims["sub"],
            email=claims.get("email", ""),
            name=claims.get("name", ""),
            token_type=token_type,
            issued_at=datetime.datetime.fromtimestamp(claims["iat"], datetime.timezone.utc),
            expires_at=datetime.datetime.fromtimestamp(claims["exp"], datetime.timezone.utc),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidTokenError(f"Malformed {token_type} token claims") from exc


def verify_access_token(token: str) -> TokenPayload:
    """Verify signature, expiry and kind of an access token.

    Raises:
        InvalidTokenError: For tampered, expired or non-access tokens.
    """
    return _verify(token, "access")


def verify_refresh_token(token: str) -> TokenPayload:
    """Verify signature, expiry and kind of a refresh token.

    Raises:
        InvalidTokenError: For tampered, expired or non-refresh tokens.
    """
    return _verify(token, "refresh")
