"""
app/domain package marker.
"""

from app.domain.import_errors import (
    EmptyFileError,
    MissingColumnError,
    MissingGroupForNewRecordError,
    RowImportError,
    SchemeImportError,
    StoreWriteError,
    UnauthorizedError,
    UnreadableFileError,
)
from app.domain.scheme_import import (
    REQUIRED_COLUMNS,
    Created,
    Failed,
    FieldViolation,
    ImportSummary,
    RawRow,
    RowError,
    Updated,
    ValidatedSchemeRecord,
)

__all__ = [
    "REQUIRED_COLUMNS",
    "Created",
    "EmptyFileError",
    "Failed",
    "FieldViolation",
    "ImportSummary",
    "MissingColumnError",
    "MissingGroupForNewRecordError",
    "RawRow",
    "RowError",
    "RowImportError",
    "SchemeImportError",
    "StoreWriteError",
    "UnauthorizedError",
    "UnreadableFileError",
    "Updated",
    "ValidatedSchemeRecord",
]
