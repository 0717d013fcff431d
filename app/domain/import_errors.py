"""
app/domain/import_errors.py

Exceptions raised by the scheme bulk import flow.

Batch-level errors abort the import before any row is processed. Row-level
errors are raised inside the reconciliation loop and converted to failed
outcomes there; they never reach the caller.
"""

from __future__ import annotations


class SchemeImportError(ValueError):
    """Base class for batch-level import failures."""


class UnauthorizedError(SchemeImportError):
    """Raised when the caller has no verified administrator session."""


class EmptyFileError(SchemeImportError):
    """Raised when the uploaded file has no header or no data rows."""


class MissingColumnError(SchemeImportError):
    """Raised when a required header column is absent."""

    def __init__(self, column: str) -> None:
        super().__init__(f"Missing required column: {column}")
        self.column = column


class UnreadableFileError(SchemeImportError):
    """Raised when the uploaded bytes cannot be decoded as CSV or a workbook."""


class RowImportError(Exception):
    """Base class for failures scoped to a single row."""


class MissingGroupForNewRecordError(RowImportError):
    """Raised when a new scheme code arrives without a batch grouping key."""

    def __init__(self, code: str) -> None:
        super().__init__(f"no grouping key for new record (scheme code {code} not found)")
        self.code = code


class StoreWriteError(RowImportError):
    """Raised by the record store when a read or write fails."""
