"""Public security API exports."""
from __future__ import annotations

from .passwords import hash_password, verify_password
from .tokens import (
    InvalidTokenError,
    create_token,
    issue_token_pair,
    verify_access_token,
    verify_refresh_token,
)

__all__ = [
    "InvalidTokenError",
    "create_token",
    "hash_password",
    "issue_token_pair",
    "verify_access_token",
    "verify_password",
    "verify_refresh_token",
]
