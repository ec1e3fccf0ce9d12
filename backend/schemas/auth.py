"""Auth request/response schemas and token payload types."""

from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from backend.schemas.user import UserPublic

TokenType = Literal["access", "refresh"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(BaseModel):
    """Login payload with user credentials."""
    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=1, description="User password (plain)")


class RegisterRequest(BaseModel):
    """Registration payload for creating a new account."""
    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=6, max_length=256, description="User password (plain)")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")

    @field_validator("name")
    def validate_name(cls, v: str) -> str:
        """Reject blank display names."""
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()


class AuthResponse(_CamelModel):
    """Access token handed to the client; the refresh token travels as a cookie."""
    access_token: str
    message: str


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""
    message: str


class ProfileResponse(BaseModel):
    """Wrapper around the current user's public profile."""
    user: UserPublic


class TokenPair(BaseModel):
    """Access and refresh tokens minted from the same claim set."""
    access_token: str
    refresh_token: str


class TokenPayload(BaseModel):
    """Verified claims of an access or refresh token."""
    subject: str
    email: str
    name: str
    token_type: TokenType
    issued_at: datetime.datetime
    expires_at: datetime.datetime
