from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.core.config import is_production, settings
from backend.core.dependencies import get_current_user, get_db
from backend.crud import user as crud_user
from backend.models.user import User
from backend.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
)
from backend.schemas.user import UserCreate
from backend.security import (
    InvalidTokenError,
    hash_password,
    issue_token_pair,
    verify_password,
    verify_refresh_token,
)
from backend.security.passwords import burn_password_check, password_needs_rehash

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid refresh token"


# ------------------------------------------------------------------ #
# Cookie helpers                                                      #
# ------------------------------------------------------------------ #

def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    """Attach the refresh token as an httpOnly, strict same-site cookie."""
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=is_production(),
        samesite="strict",
    )


def _clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=is_production(),
        samesite="strict",
    )


def _refresh_rejected(reason: str) -> JSONResponse:
    """Build the 401 for a failed refresh; the cookie is always cleared."""
    logger.info("Refresh rejected: %s", reason)
    response = JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": INVALID_REFRESH_TOKEN},
    )
    _clear_refresh_cookie(response)
    return response


def _start_session(response: Response, user: User) -> str:
    """Issue a fresh token pair, set the refresh cookie, return the access token."""
    tokens = issue_token_pair(user.id, user.email, user.name)
    _set_refresh_cookie(response, tokens.refresh_token)
    return tokens.access_token


# ------------------------------------------------------------------ #
# Endpoints                                                           #
# ------------------------------------------------------------------ #

@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
def register(
        payload: RegisterRequest,
        response: Response,
        db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Register a new user and start a session (auto-login)."""
    if crud_user.get_user_by_email(db, payload.email):
        logger.info("Registration rejected: email already registered")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        )

    try:
        user = crud_user.create_user(
            db,
            UserCreate(name=payload.name, email=payload.email),
            password_hash=hash_password(payload.password),
        )
    except IntegrityError as exc:
        # Lost the race against a concurrent registration for the same email
        logger.info("Registration rejected by unique constraint")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with this email already exists",
        ) from exc

    logger.info("Registered user %s", user.id)
    access = _start_session(response, user)
    return AuthResponse(access_token=access, message="Registration successful")


@router.post("/login", response_model=AuthResponse, summary="Authenticate and start a session")
def login(
        payload: LoginRequest,
        response: Response,
        db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Authenticate using email and password."""
    user = crud_user.get_user_by_email(db, payload.email)
    if not user:
        # Unknown emails pay the same Argon2 cost as a real check
        burn_password_check(payload.password)
        logger.info("Login failed: unknown email")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS
        )

    if not verify_password(payload.password, user.password_hash):
        logger.info("Login failed: bad password for user %s", user.id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS
        )

    if password_needs_rehash(user.password_hash):
        crud_user.update_user(db, user.id, password_hash=hash_password(payload.password))
        logger.info("Upgraded password hash for user %s", user.id)

    logger.info("Login: user %s", user.id)
    access = _start_session(response, user)
    return AuthResponse(access_token=access, message="Login successful")


@router.post(
    "/refresh",
    response_model=AuthResponse,
    summary="Rotate the refresh cookie and issue a new access token",
    responses={401: {"description": "Refresh cookie missing, invalid or expired"}},
)
def refresh(
        response: Response,
        db: Annotated[Session, Depends(get_db)],
        refresh_token: Annotated[str | None, Cookie(alias=settings.REFRESH_COOKIE_NAME)] = None,
) -> AuthResponse | JSONResponse:
    """Exchange the refresh cookie for a new token pair.

    Stateless rotation: the previous refresh token is superseded by the new
    cookie but is not revoked server-side.
    """
    if not refresh_token:
        return _refresh_rejected("no refresh cookie")

    try:
        payload = verify_refresh_token(refresh_token)
    except InvalidTokenError as exc:
        return _refresh_rejected(str(exc))

    try:
        user = crud_user.get_user_by_id(db, payload.subject)
        if not user:
            return _refresh_rejected(f"user {payload.subject} no longer exists")
        access = _start_session(response, user)
    except Exception:
        logger.exception("Refresh failed while loading user or issuing tokens")
        return _refresh_rejected("internal error")

    return AuthResponse(access_token=access, message="Tokens refreshed")


@router.post("/logout", response_model=MessageResponse, summary="Logout (clear refresh cookie)")
def logout(response: Response) -> MessageResponse:
    """Clear the refresh cookie. Always succeeds."""
    _clear_refresh_cookie(response)
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=ProfileResponse, summary="Get current user profile")
def me(current_user: Annotated[User, Depends(get_current_user)]) -> ProfileResponse:
    """Return the current user's profile, read fresh from the store."""
    return ProfileResponse(user=crud_user.build_user_public(current_user))
