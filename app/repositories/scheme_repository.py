"""
app/repositories/scheme_repository.py

Persistence layer for scheme records, looked up by scheme code.

Each write commits on its own. The import pipeline relies on this: a row
that fails rolls back only its own change and earlier rows stay committed.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.import_errors import StoreWriteError
from db.models.scheme import Scheme


class SchemeRepository:
    """
    SQLAlchemy-backed record store for the scheme import pipeline.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_key(self, code: str) -> Scheme | None:
        stmt = select(Scheme).where(Scheme.scheme_code == code)
        try:
            return self._session.scalars(stmt).one_or_none()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreWriteError(f"Failed to look up scheme {code}: {_describe(exc)}") from exc

    def create(self, fields: Mapping[str, Any], grouping_key_id: str) -> Scheme:
        department_id = _parse_department_id(grouping_key_id)
        scheme = Scheme(**dict(fields), department_id=department_id)
        self._session.add(scheme)
        self._commit(f"Failed to create scheme {fields.get('scheme_code')}")
        return scheme

    def update(self, record_id: uuid.UUID, fields: Mapping[str, Any]) -> Scheme:
        scheme = self._session.get(Scheme, record_id)
        if scheme is None:
            raise StoreWriteError(f"Scheme {record_id} no longer exists.")

        for name, value in fields.items():
            setattr(scheme, name, value)
        self._commit(f"Failed to update scheme {scheme.scheme_code}")
        return scheme

    def _commit(self, context: str) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreWriteError(f"{context}: {_describe(exc)}") from exc


def _parse_department_id(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise StoreWriteError(f"Invalid department id {value!r}.") from exc


def _describe(exc: SQLAlchemyError) -> str:
    # DBAPI errors carry the driver message on .orig; keep only its first line.
    cause = getattr(exc, "orig", None) or exc
    lines = str(cause).strip().splitlines()
    return lines[0] if lines else exc.__class__.__name__
