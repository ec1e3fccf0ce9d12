from __future__ import annotations

import logging
from typing import Any

import requests

from .base import APIException, BaseClient
from .token_manager import RefreshFailedError

logger = logging.getLogger(__name__)


class AuthClient(BaseClient):
    """Auth API client for register, login, refresh, logout and profile."""

    BASE_PATH = "/auth"

    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        """Register a new user; the returned access token is kept in memory."""
        payload = {"name": name, "email": email, "password": password}
        data = self.post(f"{self.BASE_PATH}/register", json_data=payload, retry_on_401=False)
        self.token_manager.set(data["accessToken"])
        return data

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Authenticate; the returned access token is kept in memory."""
        payload = {"email": email, "password": password}
        data = self.post(f"{self.BASE_PATH}/login", json_data=payload, retry_on_401=False)
        self.token_manager.set(data["accessToken"])
        return data

    def refresh(self) -> str:
        """Exchange the refresh cookie for a new access token."""
        return self.token_manager.refresh()

    def logout(self) -> None:
        """Log out on the server (best effort) and forget local credentials."""
        try:
            self.post(f"{self.BASE_PATH}/logout", retry_on_401=False)
        except (APIException, requests.RequestException) as exc:
            logger.warning("Logout request failed: %s", exc)
        finally:
            self.token_manager.clear()

    def me(self) -> dict[str, Any]:
        """Return the current user's profile."""
        return self.get(f"{self.BASE_PATH}/me")["user"]

    def restore_session(self) -> dict[str, Any] | None:
        """Resume a session from the refresh cookie at start-up.

        Returns:
            The user profile, or None when the user has to log in again.
        """
        try:
            self.token_manager.refresh()
        except RefreshFailedError:
            logger.info("No valid refresh cookie; login required")
            self.token_manager.set(None)
            return None
        return self.me()
