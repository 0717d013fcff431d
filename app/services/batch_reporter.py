"""
app/services/batch_reporter.py

Accumulates reconciliation outcomes into one import summary.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from app.domain.scheme_import import Failed, ImportSummary, ReconciliationOutcome
from app.logging_utils import log_event

logger = logging.getLogger(__name__)

BULK_IMPORT_ACTION = "BULK_IMPORT_SCHEMES"

# Spreadsheet line numbers count the header row.
HEADER_ROW_OFFSET = 1


class AuditSink(Protocol):
    def record(self, actor_id: str, action: str, payload: Mapping[str, Any]) -> None:
        ...


class BatchReporter:
    """
    Single-pass summary builder for one import batch.

    Feed every outcome through ``add`` then call ``finish`` once; ``finish``
    writes the batch's only audit entry.
    """

    def __init__(
        self,
        *,
        audit_sink: AuditSink,
        max_reported_errors: int = 5,
        header_offset: int = HEADER_ROW_OFFSET,
    ) -> None:
        self._audit_sink = audit_sink
        self._max_reported_errors = max(1, max_reported_errors)
        self._header_offset = header_offset
        self._success_count = 0
        self._error_count = 0
        self._errors: list[str] = []
        self._finished = False

    def add(self, outcome: ReconciliationOutcome) -> None:
        if self._finished:
            raise RuntimeError("Batch report already finished.")

        if not isinstance(outcome, Failed):
            self._success_count += 1
            return

        self._error_count += 1
        if len(self._errors) < self._max_reported_errors:
            self._errors.append(f"Row {outcome.row_index + self._header_offset}: {outcome.reason}")

    def finish(self, *, actor_id: str, grouping_key_id: str | None) -> ImportSummary:
        """
        Freeze the summary and emit one audit event for the whole batch.

        An audit write failure is logged; the rows are already committed, so
        the summary is still returned.
        """

        if self._finished:
            raise RuntimeError("Batch report already finished.")
        self._finished = True

        errors = list(self._errors)
        hidden = self._error_count - len(errors)
        if hidden > 0:
            errors.append(f"...and {hidden} more")

        summary = ImportSummary(
            success_count=self._success_count,
            error_count=self._error_count,
            errors=tuple(errors),
            truncated=hidden > 0,
        )

        payload = {
            "success_count": summary.success_count,
            "error_count": summary.error_count,
            "grouping_key_id": grouping_key_id,
        }
        try:
            self._audit_sink.record(actor_id, BULK_IMPORT_ACTION, payload)
        except Exception:  # noqa: BLE001
            logger.exception("Audit entry for scheme import could not be written actor=%s", actor_id)

        log_event(logger, logging.INFO, "scheme_import_completed", actor_id=actor_id, **payload)
        return summary
