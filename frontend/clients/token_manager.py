"""In-memory access token holder with single-flight refresh.

The access token never leaves process memory. The refresh token lives in the
cookie jar of the shared ``requests.Session`` exactly like a browser would
keep the httpOnly cookie, so only the server ever reads it.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import Future

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = os.getenv("WARDROBE_API_URL", "http://localhost:8000")


class RefreshFailedError(Exception):
    """Raised when the refresh cookie could not be exchanged for a new token."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TokenManager:
    """Owner of the current access token.

    ``refresh()`` is single-flight: while one thread is talking to
    ``/auth/refresh`` every other caller waits for and receives that same
    outcome instead of issuing its own request.
    """

    REFRESH_PATH = "/auth/refresh"

    def __init__(
            self,
            base_url: str = DEFAULT_BASE_URL,
            session: requests.Session | None = None,
            timeout: float = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self._access_token: str | None = None
        self._lock = threading.Lock()
        self._inflight: Future[str] | None = None

    # ------------------------- token access ----------------------------- #
    def get(self) -> str | None:
        return self._access_token

    def set(self, token: str | None) -> None:
        self._access_token = token

    def clear(self) -> None:
        """Forget the access token and drop the session cookies."""
        self._access_token = None
        self.session.cookies.clear()

    @property
    def is_refreshing(self) -> bool:
        with self._lock:
            return self._inflight is not None

    # ------------------------- refresh ---------------------------------- #
    def refresh(self) -> str:
        """Return a fresh access token, sharing any refresh already in flight.

        Raises:
            RefreshFailedError: If the server rejected the refresh cookie or
                could not be reached. Every waiter sees the same error.
        """
        with self._lock:
            inflight = self._inflight
            owner = inflight is None
            if owner:
                inflight = Future()
                self._inflight = inflight

        if not owner:
            return inflight.result()

        try:
            token = self._perform_refresh()
        except BaseException as exc:
            self._settle()
            # Waiters must not block on a round trip that was interrupted
            inflight.set_exception(
                exc if isinstance(exc, Exception)
                else RefreshFailedError(f"Refresh interrupted: {exc!r}")
            )
            raise

        self._settle()
        inflight.set_result(token)
        return token

    def _settle(self) -> None:
        with self._lock:
            self._inflight = None

    def _perform_refresh(self) -> str:
        url = f"{self.base_url}{self.REFRESH_PATH}"
        try:
            resp = self.session.request("POST", url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RefreshFailedError(f"Refresh request failed: {exc}") from exc

        if resp.status_code != 200:
            raise RefreshFailedError("Refresh failed", status_code=resp.status_code)

        try:
            token = resp.json().get("accessToken")
        except (ValueError, AttributeError) as exc:
            raise RefreshFailedError("Refresh returned a malformed body", resp.status_code) from exc
        if not token:
            raise RefreshFailedError("Refresh response carried no access token", resp.status_code)

        # set() before the waiters are released so nobody sees an older token
        self.set(token)
        logger.debug("Access token refreshed")
        return token


# Process-wide instance shared by clients that are not handed their own
default_token_manager = TokenManager()
