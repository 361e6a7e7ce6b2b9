"""Login session kept in the local store."""

import pytest

from storefront.repos.session_repo import TOKEN_KEY, USER_KEY
from storefront.services.api_client import ApiError
from storefront.services.auth_service import NotAuthenticatedError, decode_token
from tests.conftest import ADMIN_TOKEN, USER_TOKEN, make_token


class TestDecodeToken:
    def test_reads_payload_without_verification(self):
        assert decode_token(ADMIN_TOKEN) == {"id": "u-admin", "role": "admin"}

    @pytest.mark.parametrize("token", ["garbage", "a.b", "a.!!!.c", "a.bm90IGpzb24.c"])
    def test_bad_tokens(self, token):
        assert decode_token(token) is None


class TestLogin:
    def test_login_stores_token_and_user(self, state, store):
        session = state.auth.login("jan@example.com", "secret")

        assert session["authenticated"] is True
        assert session["role"] == "user"
        assert store.get(TOKEN_KEY) == USER_TOKEN
        assert "token" not in store.get(USER_KEY)

    def test_failed_login_keeps_logged_out(self, state, store):
        with pytest.raises(ApiError):
            state.auth.login("jan@example.com", "wrong")
        assert store.get(TOKEN_KEY) is None
        assert state.auth.current_user()["authenticated"] is False

    def test_register_logs_in(self, state):
        session = state.auth.register("new@example.com", "secret", "new")
        assert session["user"]["email"] == "new@example.com"

    def test_response_without_token(self, state, fake_api):
        fake_api.users["broken@example.com"] = {"name": "broken", "email": "broken@example.com"}
        with pytest.raises(ValueError):
            state.auth.login("broken@example.com", "secret")

    def test_logout_clears_both_keys(self, state, store, login_as):
        login_as()
        state.auth.logout()
        assert store.get(TOKEN_KEY) is None
        assert store.get(USER_KEY) is None


class TestRoles:
    def test_admin_from_user_record(self, state, login_as):
        login_as("admin@example.com")
        assert state.auth.is_admin()
        assert state.auth.require_admin() == ADMIN_TOKEN

    def test_role_falls_back_to_token_payload(self, state, store):
        store.set(TOKEN_KEY, make_token({"role": "admin"}))
        store.set(USER_KEY, {"name": "legacy"})
        assert state.auth.role() == "admin"

    def test_default_role_is_user(self, state):
        assert state.auth.role() == "user"
        assert not state.auth.is_admin()

    def test_require_token_when_logged_out(self, state):
        with pytest.raises(NotAuthenticatedError):
            state.auth.require_token()

    def test_require_admin_for_regular_user(self, state, login_as):
        login_as()
        with pytest.raises(PermissionError):
            state.auth.require_admin()

    def test_corrupt_user_record_clears_session(self, state, store):
        store.set(TOKEN_KEY, USER_TOKEN)
        store.set(USER_KEY, "not-an-object")

        assert state.auth.current_user()["authenticated"] is False
        assert store.get(TOKEN_KEY) is None
