"""
app/services/reconciliation_engine.py

Create-or-update reconciliation of validated scheme rows against the store.

Rows are processed strictly in order, one at a time. A later row sharing a
scheme code with an earlier one sees the earlier row's write and becomes an
update. Each row's store access is isolated: a failure is turned into a
``Failed`` outcome and the loop moves on. No transaction spans the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Protocol

from app.domain.import_errors import MissingGroupForNewRecordError
from app.domain.scheme_import import (
    Created,
    Failed,
    ReconciliationOutcome,
    RowError,
    Updated,
    ValidatedSchemeRecord,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    """
    Natural-key store the engine reconciles against.

    Returned records expose an ``id`` attribute.
    """

    def find_by_key(self, code: str) -> Any | None:
        ...

    def create(self, fields: Mapping[str, Any], grouping_key_id: str) -> Any:
        ...

    def update(self, record_id: Any, fields: Mapping[str, Any]) -> Any:
        ...


class ReconciliationEngine:
    """
    Upserts validated rows by scheme code, one outcome per row.
    """

    def __init__(self, store: RecordStore, *, log_row_errors: bool = True) -> None:
        self._store = store
        self._log_row_errors = log_row_errors

    def reconcile(
        self,
        results: Iterable[ValidationResult],
        *,
        grouping_key_id: str | None = None,
    ) -> Iterator[ReconciliationOutcome]:
        """
        Yield one outcome per validator result, in input order.

        ``grouping_key_id`` is only consulted for codes not yet in the store.
        """

        for result in results:
            if isinstance(result, RowError):
                outcome: ReconciliationOutcome = Failed(row_index=result.row_index, reason=result.message)
            else:
                outcome = self._reconcile_record(result, grouping_key_id=grouping_key_id)

            if isinstance(outcome, Failed) and self._log_row_errors:
                logger.warning(
                    "Scheme import row failed row=%s reason=%s",
                    outcome.row_index,
                    outcome.reason,
                )
            yield outcome

    def _reconcile_record(
        self,
        record: ValidatedSchemeRecord,
        *,
        grouping_key_id: str | None,
    ) -> ReconciliationOutcome:
        try:
            existing = self._store.find_by_key(record.code)
            if existing is not None:
                updated = self._store.update(existing.id, record.mutable_fields())
                return Updated(row_index=record.row_index, record_id=updated.id)

            if not grouping_key_id:
                raise MissingGroupForNewRecordError(record.code)

            created = self._store.create(record.create_fields(), grouping_key_id)
            return Created(row_index=record.row_index, record_id=created.id)
        except Exception as exc:  # noqa: BLE001
            return Failed(row_index=record.row_index, reason=_describe(exc))


def _describe(exc: Exception) -> str:
    message = str(exc).strip()
    return message or exc.__class__.__name__
