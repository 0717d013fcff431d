"""
app/repositories package marker.
"""

from app.repositories.audit_log_repository import AuditLogRepository
from app.repositories.scheme_repository import SchemeRepository

__all__ = [
    "AuditLogRepository",
    "SchemeRepository",
]
