"""Shared FastAPI dependencies."""
from __future__ import annotations

import logging
from typing import Annotated, Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backend.crud import user as crud_user
from backend.db.session import SessionLocal
from backend.models.user import User
from backend.security import InvalidTokenError, verify_access_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header yields our own 401 instead of 403
_auth_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for the request lifecycle.

    Yields:
        Session: SQLAlchemy database session, closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_auth_scheme)],
) -> str:
    """Extract and validate the current user id from the access token.

    Raises:
        HTTPException: 401 if the header is missing/malformed or the token is
            invalid, expired, or not an access token.

    Returns:
        str: Current user ID from the token subject ('sub').
    """
    if credentials is None or not credentials.credentials:
        logger.info("Rejected request without bearer token")
        raise _unauthorized()

    try:
        payload = verify_access_token(credentials.credentials)
    except InvalidTokenError as exc:
        logger.info("Rejected access token: %s", exc)
        raise _unauthorized() from exc
    return payload.subject


def get_current_user(
        user_id: Annotated[str, Depends(get_current_user_id)],
        db: Annotated[Session, Depends(get_db)],
) -> User:
    """Load the current user fresh from the credential store."""
    user = crud_user.get_user_by_id(db, user_id)
    if not user:
        logger.warning("Access token references missing user %s", user_id)
        raise _unauthorized()
    return user
