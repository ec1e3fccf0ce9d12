"""Base HTTP client for the Wardrobe API."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from .token_manager import RefreshFailedError, TokenManager, default_token_manager

logger = logging.getLogger(__name__)


class APIException(Exception):
    """Generic API exception wrapping HTTP errors."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class BaseClient:
    """Base HTTP client with bearer handling and refresh-on-401.

    Every request carries the access token held by the token manager. A 401
    triggers one shared refresh and a single replay of the request; when the
    refresh itself fails the token is dropped and ``on_auth_failure`` is
    called so the application can send the user back to its login page.
    """

    def __init__(
            self,
            base_url: str | None = None,
            *,
            token_manager: TokenManager | None = None,
            on_auth_failure: Callable[[], None] | None = None,
    ) -> None:
        self.token_manager = token_manager if token_manager is not None else default_token_manager
        self.base_url = (base_url or self.token_manager.base_url).rstrip("/")
        self.on_auth_failure = on_auth_failure

    # ------------------------- core http methods ------------------------ #
    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        token = self.token_manager.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if extra:
            headers.update(extra)
        return headers

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, json_data: dict[str, Any] | None = None, data: Any = None,
             params: dict[str, Any] | None = None, retry_on_401: bool = True) -> Any:
        return self._request(
            "POST", path, json_data=json_data, data=data, params=params, retry_on_401=retry_on_401
        )

    def patch(self, path: str, json_data: dict[str, Any] | None = None, params: dict[str, Any] | None = None) -> Any:
        return self._request("PATCH", path, json_data=json_data, params=params)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def _is_refresh_path(self, path: str) -> bool:
        return path.split("?", 1)[0].rstrip("/") == self.token_manager.REFRESH_PATH

    def _request(
            self,
            method: str,
            path: str,
            *,
            params: dict[str, Any] | None = None,
            json_data: dict[str, Any] | None = None,
            data: Any = None,
            retry_on_401: bool = True,
    ) -> Any:
        url = f"{self.base_url}{path}"
        resp = self.token_manager.session.request(
            method=method,
            url=url,
            headers=self._headers(),
            params=params,
            json=json_data,
            data=data,
            timeout=self.token_manager.timeout,
        )

        if resp.status_code == 401 and retry_on_401 and not self._is_refresh_path(path):
            try:
                self.token_manager.refresh()
            except RefreshFailedError as exc:
                logger.info("Session expired, refresh failed: %s", exc)
                self.token_manager.set(None)
                if self.on_auth_failure is not None:
                    self.on_auth_failure()
            else:
                # Replay once; a second 401 is reported as is
                return self._request(
                    method, path, params=params, json_data=json_data, data=data, retry_on_401=False
                )

        if 200 <= resp.status_code < 300:
            if resp.content:
                try:
                    return resp.json()
                except json.JSONDecodeError:
                    return resp.text
            return None

        # Map error to APIException
        try:
            payload = resp.json()
            message = payload.get("detail") or payload.get("error") or resp.text
        except (ValueError, AttributeError):
            message = resp.text

        raise APIException(resp.status_code, message)
