from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.api.dependencies import SessionUser, verify_session_token
from app.config import AuthSettings, get_auth_settings, get_scheme_import_settings
from app.domain.import_errors import UnauthorizedError

SETTINGS = AuthSettings(jwt_secret="unit-secret")


def _encode(payload: dict, secret: str = "unit-secret") -> str:
    claims = {"exp": datetime.now(timezone.utc) + timedelta(minutes=5), **payload}
    return jwt.encode(claims, secret, algorithm="HS256")


class TestVerifySessionToken(unittest.TestCase):
    def test_admin_token_yields_session_user(self) -> None:
        token = _encode({"user": {"id": 7, "role": "ADMIN", "name": "Asha"}})

        user = verify_session_token(token, SETTINGS)

        self.assertEqual(user, SessionUser(id="7", role="ADMIN", name="Asha"))

    def test_token_signed_with_other_secret_is_rejected(self) -> None:
        token = _encode({"user": {"id": "1", "role": "ADMIN"}}, secret="other")

        with self.assertRaises(UnauthorizedError):
            verify_session_token(token, SETTINGS)

    def test_token_without_user_claim_is_rejected(self) -> None:
        with self.assertRaises(UnauthorizedError):
            verify_session_token(_encode({"sub": "1"}), SETTINGS)

    def test_unconfigured_secret_rejects_everything(self) -> None:
        token = _encode({"user": {"id": "1", "role": "ADMIN"}})

        with self.assertRaises(UnauthorizedError):
            verify_session_token(token, AuthSettings(jwt_secret=None))

    def test_admin_role_is_configurable(self) -> None:
        token = _encode({"user": {"id": "1", "role": "SUPERUSER"}})

        user = verify_session_token(token, AuthSettings(jwt_secret="unit-secret", admin_role="SUPERUSER"))

        self.assertEqual(user.role, "SUPERUSER")


@pytest.fixture()
def fresh_settings():
    get_scheme_import_settings.cache_clear()
    get_auth_settings.cache_clear()
    yield
    get_scheme_import_settings.cache_clear()
    get_auth_settings.cache_clear()


def test_import_settings_read_environment(monkeypatch: pytest.MonkeyPatch, fresh_settings) -> None:
    monkeypatch.setenv("SCHEME_IMPORT_MAX_REPORTED_ERRORS", "10")
    monkeypatch.setenv("SCHEME_IMPORT_LOG_ROW_ERRORS", "off")
    monkeypatch.setenv("SCHEME_IMPORT_REJECT_NEGATIVE_AMOUNTS", "true")

    settings = get_scheme_import_settings()

    assert settings.max_reported_errors == 10
    assert settings.log_row_errors is False
    assert settings.reject_negative_amounts is True


def test_invalid_error_cap_falls_back_to_default(monkeypatch: pytest.MonkeyPatch, fresh_settings) -> None:
    monkeypatch.setenv("SCHEME_IMPORT_MAX_REPORTED_ERRORS", "many")

    assert get_scheme_import_settings().max_reported_errors == 5


def test_auth_settings_read_environment(monkeypatch: pytest.MonkeyPatch, fresh_settings) -> None:
    monkeypatch.setenv("JWT_SECRET", "  from-env  ")
    monkeypatch.setenv("SESSION_COOKIE_NAME", "sid")

    settings = get_auth_settings()

    assert settings.jwt_secret == "from-env"
    assert settings.session_cookie_name == "sid"
    assert settings.jwt_algorithm == "HS256"
