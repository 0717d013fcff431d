"""
app/validators/scheme_validator.py

Row-level validation and type coercion for scheme imports.

Numbers are coerced leniently and never fail a row on their own. The scheme
name is strict: a row without one is rejected rather than stored unnamed.
"""

from __future__ import annotations

from app.domain.scheme_import import RawRow, RowError, ValidatedSchemeRecord, ValidationResult
from app.validators.coercion import (
    FieldRule,
    apply_rules,
    chain,
    clamp_non_negative,
    reject_negative,
    require_non_empty,
    scheme_code,
    to_amount,
    to_text,
)

AMOUNT_COLUMNS: tuple[tuple[str, str], ...] = (
    ("total_budget_provision", "total_budget"),
    ("progressive_allotment", "allotment"),
    ("actual_progressive_expenditure_upto_dec", "actual_expenditure"),
    ("percent_budget_expenditure", "pct_budget"),
    ("percent_actual_expenditure", "pct_actual"),
    ("provisional_expenditure_current_month", "provisional_current_month"),
)


class SchemeRowValidator:
    """
    Validates and parses one decoded scheme row.
    """

    def __init__(self, *, reject_negative_amounts: bool = False) -> None:
        sign_rule = reject_negative if reject_negative_amounts else clamp_non_negative
        amount = chain(to_amount, sign_rule)
        self._rules: tuple[FieldRule, ...] = (
            FieldRule(column="scheme_code", target="code", coercer=scheme_code),
            FieldRule(
                column="scheme_name",
                target="name",
                coercer=chain(to_text, require_non_empty("Name is required")),
            ),
            *(FieldRule(column=column, target=target, coercer=amount) for column, target in AMOUNT_COLUMNS),
        )

    def validate(self, row: RawRow) -> ValidationResult:
        """
        Return a typed record, or a RowError carrying every violation found.
        """

        parsed, violations = apply_rules(row.values, self._rules)
        if violations:
            return RowError(row_index=row.row_index, violations=tuple(violations))
        return ValidatedSchemeRecord(row_index=row.row_index, **parsed)
