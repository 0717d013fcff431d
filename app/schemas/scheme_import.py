"""
app/schemas/scheme_import.py

Response schemas for the scheme bulk import endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.scheme_import import ImportSummary


class SchemeImportSummaryResponse(BaseModel):
    """
    API response model for one completed import batch.

    ``success`` is true whenever the file got past decoding, even if every
    row failed; row problems are reported through the counts and ``errors``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    success_count: int = Field(..., ge=0)
    error_count: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list)
    truncated: bool = False

    @classmethod
    def from_summary(cls, summary: ImportSummary) -> "SchemeImportSummaryResponse":
        return cls(
            success_count=summary.success_count,
            error_count=summary.error_count,
            errors=list(summary.errors),
            truncated=summary.truncated,
        )
