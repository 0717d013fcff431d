"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class SchemeImportSettings:
    """
    Runtime settings for the scheme bulk import pipeline.
    """

    max_reported_errors: int = 5
    log_row_errors: bool = True
    reject_negative_amounts: bool = False


@dataclass(frozen=True)
class AuthSettings:
    """
    Session verification settings.
    """

    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    session_cookie_name: str = "session"
    admin_role: str = "ADMIN"


@lru_cache(maxsize=1)
def get_scheme_import_settings() -> SchemeImportSettings:
    """
    Return cached scheme import settings from environment variables.
    """

    return SchemeImportSettings(
        max_reported_errors=max(1, _get_int_env("SCHEME_IMPORT_MAX_REPORTED_ERRORS", 5)),
        log_row_errors=_get_bool_env("SCHEME_IMPORT_LOG_ROW_ERRORS", True),
        reject_negative_amounts=_get_bool_env("SCHEME_IMPORT_REJECT_NEGATIVE_AMOUNTS", False),
    )


@lru_cache(maxsize=1)
def get_auth_settings() -> AuthSettings:
    """
    Return cached session verification settings.

    JWT_SECRET has no default; startup validation in app.main refuses to
    boot without it.
    """

    return AuthSettings(
        jwt_secret=_get_optional_str_env("JWT_SECRET"),
        jwt_algorithm=_get_str_env("JWT_ALGORITHM", "HS256"),
        session_cookie_name=_get_str_env("SESSION_COOKIE_NAME", "session"),
        admin_role=_get_str_env("ADMIN_ROLE", "ADMIN"),
    )
