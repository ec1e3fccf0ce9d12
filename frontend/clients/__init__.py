"""API clients for the Wardrobe backend."""

from .auth_client import AuthClient
from .base import APIException, BaseClient
from .token_manager import RefreshFailedError, TokenManager, default_token_manager

__all__ = [
    "APIException",
    "AuthClient",
    "BaseClient",
    "RefreshFailedError",
    "TokenManager",
    "default_token_manager",
]
