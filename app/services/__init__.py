"""
app/services package marker.
"""

from app.services.batch_reporter import AuditSink, BatchReporter
from app.services.reconciliation_engine import ReconciliationEngine, RecordStore
from app.services.scheme_import_service import SchemeImportService, get_scheme_import_service

__all__ = [
    "AuditSink",
    "BatchReporter",
    "ReconciliationEngine",
    "RecordStore",
    "SchemeImportService",
    "get_scheme_import_service",
]
