"""
app/services/scheme_import_service.py

Entry point of the scheme bulk import pipeline.

    1. SpreadsheetDecoder  : bytes to header-keyed rows; batch-level failures
                              (empty file, missing column, unreadable bytes)
                              are raised here before any row is touched.
    2. SchemeRowValidator  : per-row coercion into a typed record or RowError.
    3. ReconciliationEngine: sequential upsert by scheme code.
    4. BatchReporter       : counts, capped error list, one audit entry.

The record store and audit sink are passed in per call; the service itself
only holds settings, so concurrent imports share no mutable state.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.config import get_scheme_import_settings
from app.decoders.spreadsheet_decoder import SpreadsheetDecoder
from app.domain.scheme_import import ImportSummary
from app.services.batch_reporter import AuditSink, BatchReporter
from app.services.reconciliation_engine import ReconciliationEngine, RecordStore
from app.validators.scheme_validator import SchemeRowValidator

logger = logging.getLogger(__name__)


class SchemeImportService:
    """
    Coordinates decoding, validation, reconciliation, and reporting.
    """

    def __init__(
        self,
        *,
        max_reported_errors: int = 5,
        log_row_errors: bool = True,
        reject_negative_amounts: bool = False,
        decoder: SpreadsheetDecoder | None = None,
        validator: SchemeRowValidator | None = None,
    ) -> None:
        self._max_reported_errors = max(1, max_reported_errors)
        self._log_row_errors = log_row_errors
        self._decoder = decoder or SpreadsheetDecoder()
        self._validator = validator or SchemeRowValidator(reject_negative_amounts=reject_negative_amounts)

    def import_file(
        self,
        *,
        content: bytes,
        filename: str | None,
        actor_id: str,
        store: RecordStore,
        audit_sink: AuditSink,
        grouping_key_id: str | None = None,
    ) -> ImportSummary:
        """
        Import one uploaded file and return its summary.

        Args:
            content:          Raw uploaded bytes.
            filename:         Original filename; its extension selects CSV or
                              workbook decoding.
            actor_id:         Verified administrator id, recorded in the audit log.
            store:            Record store used for lookups and writes.
            audit_sink:       Receives the single audit entry for the batch.
            grouping_key_id:  Department attached to newly created schemes.

        Raises:
            SchemeImportError: the file was rejected before any row ran.
        """

        rows = self._decoder.decode(content=content, filename=filename)
        grouping_key_id = (grouping_key_id or "").strip() or None

        logger.info(
            "Scheme import started actor=%s filename=%r rows=%d grouping_key=%s",
            actor_id,
            filename,
            len(rows),
            grouping_key_id,
        )

        engine = ReconciliationEngine(store, log_row_errors=self._log_row_errors)
        reporter = BatchReporter(
            audit_sink=audit_sink,
            max_reported_errors=self._max_reported_errors,
        )

        results = (self._validator.validate(row) for row in rows)
        for outcome in engine.reconcile(results, grouping_key_id=grouping_key_id):
            reporter.add(outcome)

        return reporter.finish(actor_id=actor_id, grouping_key_id=grouping_key_id)


@lru_cache(maxsize=1)
def get_scheme_import_service() -> SchemeImportService:
    """
    Build and cache the import service with env-driven settings.
    """
    settings = get_scheme_import_settings()
    return SchemeImportService(
        max_reported_errors=settings.max_reported_errors,
        log_row_errors=settings.log_row_errors,
        reject_negative_amounts=settings.reject_negative_amounts,
    )
