"""
app/schemas package marker.
"""

from app.schemas.scheme_import import SchemeImportSummaryResponse

__all__ = [
    "SchemeImportSummaryResponse",
]
