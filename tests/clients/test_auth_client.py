"""Tests for the auth API client."""

import pytest

from frontend.clients.auth_client import AuthClient
from frontend.clients.base import APIException

PROFILE = {"id": "u-1", "email": "a@x.com", "name": "Ann", "createdAt": "2026-01-01T00:00:00"}


@pytest.fixture
def auth(token_manager):
    return AuthClient(token_manager=token_manager)


class TestLoginRegister:

    def test_register_keeps_access_token_in_memory(self, auth, token_manager, fake_session):
        fake_session.add("POST", "/auth/register", 201, {"accessToken": "acc", "message": "Registration successful"})

        data = auth.register("Ann", "a@x.com", "secret1")

        assert data["message"] == "Registration successful"
        assert token_manager.get() == "acc"
        assert fake_session.calls[0]["json"] == {"name": "Ann", "email": "a@x.com", "password": "secret1"}

    def test_login_keeps_access_token_in_memory(self, auth, token_manager, fake_session):
        fake_session.add("POST", "/auth/login", 200, {"accessToken": "acc", "message": "Login successful"})

        auth.login("a@x.com", "secret1")

        assert token_manager.get() == "acc"

    def test_bad_login_does_not_try_to_refresh(self, auth, token_manager, fake_session):
        fake_session.add("POST", "/auth/login", 401, {"detail": "Invalid credentials"})

        with pytest.raises(APIException) as excinfo:
            auth.login("a@x.com", "wrong-one")

        assert excinfo.value.message == "Invalid credentials"
        assert fake_session.count("POST", "/auth/refresh") == 0
        assert token_manager.get() is None


class TestSession:

    def test_me_returns_user(self, auth, token_manager, fake_session):
        token_manager.set("acc")
        fake_session.add("GET", "/auth/me", 200, {"user": PROFILE})

        assert auth.me() == PROFILE

    def test_refresh_delegates_to_token_manager(self, auth, token_manager, fake_session):
        fake_session.add("POST", "/auth/refresh", 200, {"accessToken": "new"})

        assert auth.refresh() == "new"
        assert token_manager.get() == "new"

    def test_logout_clears_local_state(self, auth, token_manager, fake_session):
        token_manager.set("acc")
        fake_session.add("POST", "/auth/logout", 200, {"message": "Logout successful"})

        auth.logout()

        assert token_manager.get() is None

    def test_logout_clears_local_state_even_if_server_fails(self, auth, token_manager, fake_session):
        token_manager.set("acc")
        fake_session.add("POST", "/auth/logout", 500, {"detail": "Internal server error"})

        auth.logout()

        assert token_manager.get() is None

    def test_restore_session_returns_profile(self, auth, token_manager, fake_session):
        fake_session.add("POST", "/auth/refresh", 200, {"accessToken": "acc"})
        fake_session.add("GET", "/auth/me", 200, {"user": PROFILE})

        assert auth.restore_session() == PROFILE
        assert fake_session.calls[-1]["headers"]["Authorization"] == "Bearer acc"

    def test_restore_session_without_cookie(self, auth, token_manager, fake_session):
        fake_session.add("POST", "/auth/refresh", 401, {"detail": "Invalid refresh token"})

        assert auth.restore_session() is None
        assert token_manager.get() is None
