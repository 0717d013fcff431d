"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.audit_log import AuditLog, AuditModule
from db.models.department import Department
from db.models.scheme import Scheme

__all__ = [
    "AuditLog",
    "AuditModule",
    "Department",
    "Scheme",
]
