"""Tests for registration, login sessions, tokens and profile updates."""

from datetime import timedelta

import jwt
import pytest

from common.errors import AuthenticationError, ConflictError, ValidationError
from common.services.auth_service import AuthService


@pytest.fixture()
def auth(components):
    return components["auth_service"]


@pytest.fixture()
def budi(auth):
    return auth.register(username="budi", email="budi@example.com", password="rahasia1")


class TestRegister:
    def test_new_user_gets_hashed_password_and_user_role(self, auth, components, budi):
        stored = components["user_repo"].get_user(budi.id)

        assert stored.role == "user"
        assert stored.password != "rahasia1"
        assert stored.created_at

    @pytest.mark.parametrize(
        "username, email",
        [("budi", "other@example.com"), ("other", "budi@example.com"), ("other", "BUDI@example.com")],
    )
    def test_duplicate_username_or_email(self, auth, budi, username, email):
        with pytest.raises(ConflictError):
            auth.register(username=username, email=email, password="rahasia1")

    @pytest.mark.parametrize(
        "username, email, password",
        [("", "a@b.c", "rahasia1"), ("x", "", "rahasia1"), ("x", "a@b.c", ""), ("x", "a@b.c", "123")],
    )
    def test_missing_fields_or_short_password(self, auth, username, email, password):
        with pytest.raises(ValidationError):
            auth.register(username=username, email=email, password=password)


class TestLogin:
    def test_login_returns_token_for_open_session(self, auth, budi):
        token, user = auth.login(email="Budi@Example.com", password="rahasia1")

        current = auth.authenticate(token)
        assert user.id == budi.id
        assert (current.id, current.username, current.role) == (budi.id, "budi", "user")

    def test_seeded_admin_can_log_in(self, auth, config):
        token, user = auth.login(email=config.admin_email, password=config.admin_password)

        assert user.role == "admin"
        assert auth.authenticate(token).is_admin

    @pytest.mark.parametrize("email, password", [("budi@example.com", "salah123"), ("nobody@example.com", "rahasia1")])
    def test_bad_credentials(self, auth, budi, email, password):
        with pytest.raises(AuthenticationError):
            auth.login(email=email, password=password)

    def test_each_login_gets_its_own_session(self, auth, budi):
        first, _ = auth.login(email="budi@example.com", password="rahasia1")
        second, _ = auth.login(email="budi@example.com", password="rahasia1")

        assert auth.authenticate(first).sid != auth.authenticate(second).sid


class TestAuthenticate:
    def test_missing_token(self, auth):
        with pytest.raises(AuthenticationError):
            auth.authenticate(None)

    def test_garbage_token(self, auth):
        with pytest.raises(AuthenticationError):
            auth.authenticate("not-a-jwt")

    def test_token_signed_with_other_secret(self, auth, budi, components):
        sid = components["sessions"].open_session(budi.id)
        forged = jwt.encode(
            {"id": budi.id, "username": "budi", "role": "admin", "sid": sid},
            "another-secret-key-for-hs256-signing-02",
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError):
            auth.authenticate(forged)

    def test_expired_token(self, components, budi):
        expired = AuthService(
            components["user_repo"],
            components["sessions"],
            secret="test-secret-key-for-hs256-signing-0001",
            token_ttl=timedelta(seconds=-10),
        )
        token, _ = expired.login(email="budi@example.com", password="rahasia1")

        with pytest.raises(AuthenticationError):
            expired.authenticate(token)

    def test_logout_invalidates_token(self, auth, budi):
        token, _ = auth.login(email="budi@example.com", password="rahasia1")

        auth.logout(auth.authenticate(token))

        with pytest.raises(AuthenticationError):
            auth.authenticate(token)


class TestUpdateProfile:
    def _login(self, auth):
        token, _ = auth.login(email="budi@example.com", password="rahasia1")
        return auth.authenticate(token)

    def test_rename_issues_token_for_same_session(self, auth, budi):
        current = self._login(auth)

        token, user = auth.update_profile(current, username="budi2", email="budi2@example.com")

        refreshed = auth.authenticate(token)
        assert refreshed.username == "budi2"
        assert refreshed.sid == current.sid
        assert user.updated_at

    def test_password_rotation(self, auth, budi):
        current = self._login(auth)

        auth.update_profile(current, username="budi", email="budi@example.com", password="baru12345")

        with pytest.raises(AuthenticationError):
            auth.login(email="budi@example.com", password="rahasia1")
        assert auth.login(email="budi@example.com", password="baru12345")

    def test_keeping_own_name_is_not_a_conflict(self, auth, budi):
        current = self._login(auth)

        _, user = auth.update_profile(current, username="budi", email="budi@example.com")

        assert user.username == "budi"

    def test_conflict_with_other_user(self, auth, budi):
        auth.register(username="sari", email="sari@example.com", password="rahasia1")
        current = self._login(auth)

        with pytest.raises(ConflictError):
            auth.update_profile(current, username="sari", email="budi@example.com")

    @pytest.mark.parametrize("username, email, password", [("", "x@y.z", None), ("x", "", None), ("x", "x@y.z", "123")])
    def test_invalid_input(self, auth, budi, username, email, password):
        current = self._login(auth)

        with pytest.raises(ValidationError):
            auth.update_profile(current, username=username, email=email, password=password)
