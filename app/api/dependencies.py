"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and session checks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import jwt
from fastapi import Depends, File, HTTPException, Request, UploadFile, status

from app.config import AuthSettings, get_auth_settings
from app.domain.import_errors import UnauthorizedError

logger = logging.getLogger(__name__)

IMPORT_EXTENSIONS = (".csv", ".txt", ".xlsx", ".xlsm")

IMPORT_CONTENT_TYPES = {
    "text/csv",
    "text/plain",
    "application/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel.sheet.macroenabled.12",
}


@dataclass(frozen=True)
class SessionUser:
    """
    Identity carried by a verified session token.
    """

    id: str
    role: str
    name: str | None = None


def verify_session_token(token: str | None, settings: AuthSettings) -> SessionUser:
    """
    Decode a session JWT and return its user if it holds the admin role.

    Raises UnauthorizedError for a missing, invalid, or expired token, a
    token without a ``user`` claim, or a non-admin user.
    """

    if not token:
        raise UnauthorizedError("Session cookie is missing.")
    if not settings.jwt_secret:
        raise UnauthorizedError("Session verification is not configured.")

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Session has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Session token is invalid.") from exc

    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise UnauthorizedError("Session token carries no user.")

    role = str(user.get("role") or "")
    if role != settings.admin_role:
        raise UnauthorizedError("Administrator role required.")

    name = user.get("name")
    return SessionUser(id=str(user["id"]), role=role, name=str(name) if name else None)


def get_current_admin(
    request: Request,
    settings: AuthSettings = Depends(get_auth_settings),
) -> SessionUser:
    """
    Require a verified administrator session cookie.
    """

    token = request.cookies.get(settings.session_cookie_name)
    try:
        return verify_session_token(token, settings)
    except UnauthorizedError as exc:
        logger.info("Rejected session path=%s reason=%s", request.url.path, exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        ) from exc


def get_import_upload(file: UploadFile | None = File(default=None)) -> UploadFile:
    """
    Validate that the upload is a CSV or Excel workbook by extension or MIME type.
    """

    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    if not filename.endswith(IMPORT_EXTENSIONS) and content_type not in IMPORT_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV or Excel files are allowed.",
        )

    return file
