"""
app/repositories/audit_log_repository.py

Audit sink writing one audit_logs row per recorded action.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from db.models.audit_log import AuditLog, AuditModule


class AuditLogRepository:
    def __init__(self, session: Session, *, module: str = AuditModule.SCHEMES) -> None:
        self._session = session
        self._module = module

    def record(self, actor_id: str, action: str, payload: Mapping[str, Any]) -> None:
        entry = AuditLog(
            user_id=str(actor_id),
            action=action,
            module=self._module,
            details=dict(payload),
        )
        self._session.add(entry)
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
