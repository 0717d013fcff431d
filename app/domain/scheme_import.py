"""
app/domain/scheme_import.py

Domain models used by the scheme bulk import flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Union

REQUIRED_COLUMNS: tuple[str, ...] = (
    "scheme_code",
    "scheme_name",
    "total_budget_provision",
    "progressive_allotment",
    "actual_progressive_expenditure_upto_dec",
    "percent_budget_expenditure",
    "percent_actual_expenditure",
    "provisional_expenditure_current_month",
)

SCHEME_CODE_LENGTH = 13


@dataclass(frozen=True)
class RawRow:
    """
    One decoded data row keyed by trimmed header name.

    ``row_index`` is the 1-based position of the row below the header.
    """

    row_index: int
    values: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidatedSchemeRecord:
    """
    Typed scheme record produced by the row validator.
    """

    row_index: int
    code: str
    name: str
    total_budget: Decimal
    allotment: Decimal
    actual_expenditure: Decimal
    pct_budget: Decimal
    pct_actual: Decimal
    provisional_current_month: Decimal

    def mutable_fields(self) -> dict[str, Any]:
        """
        Store fields overwritten on update; the natural key is excluded.
        """

        return {
            "scheme_name": self.name,
            "total_budget_provision": self.total_budget,
            "progressive_allotment": self.allotment,
            "actual_progressive_expenditure": self.actual_expenditure,
            "pct_budget_expenditure": self.pct_budget,
            "pct_actual_expenditure": self.pct_actual,
            "provisional_expenditure_current_month": self.provisional_current_month,
        }

    def create_fields(self) -> dict[str, Any]:
        return {"scheme_code": self.code, **self.mutable_fields()}


@dataclass(frozen=True)
class FieldViolation:
    """
    One field-qualified validation failure.
    """

    field: str
    message: str

    def render(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class RowError:
    """
    All violations collected for one row.
    """

    row_index: int
    violations: tuple[FieldViolation, ...]

    @property
    def message(self) -> str:
        return ", ".join(violation.render() for violation in self.violations)


ValidationResult = Union[ValidatedSchemeRecord, RowError]


@dataclass(frozen=True)
class Created:
    row_index: int
    record_id: Any


@dataclass(frozen=True)
class Updated:
    row_index: int
    record_id: Any


@dataclass(frozen=True)
class Failed:
    row_index: int
    reason: str


ReconciliationOutcome = Union[Created, Updated, Failed]


@dataclass(frozen=True)
class ImportSummary:
    """
    End-of-run import summary returned to the caller.
    """

    success_count: int
    error_count: int
    errors: tuple[str, ...] = ()
    truncated: bool = False
