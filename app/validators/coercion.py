"""
app/validators/coercion.py

Typed coercion functions and the combinator that applies them to a row.

Every coercer takes one raw cell value and returns either ``Coerced`` or
``Rejected``. ``chain`` pipes coercers left to right and stops at the first
rejection; ``apply_rules`` runs one chain per column and collects every
rejection instead of stopping at the first failing column.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from app.domain.scheme_import import SCHEME_CODE_LENGTH, FieldViolation

ZERO = Decimal("0")

_DIGITS = re.compile(r"[0-9]+")
# Plain decimal notation only: no digit-group underscores, no non-ASCII digits.
_NUMBER = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_PLACEHOLDERS = {"", "-"}


@dataclass(frozen=True)
class Coerced:
    value: Any


@dataclass(frozen=True)
class Rejected:
    message: str


CoercionResult = Union[Coerced, Rejected]
Coercer = Callable[[Any], CoercionResult]


@dataclass(frozen=True)
class FieldRule:
    """
    Binds a source column to the record attribute it fills.
    """

    column: str
    target: str
    coercer: Coercer


def chain(*coercers: Coercer) -> Coercer:
    def _run(value: Any) -> CoercionResult:
        result: CoercionResult = Coerced(value)
        for coercer in coercers:
            if isinstance(result, Rejected):
                return result
            result = coercer(result.value)
        return result

    return _run


def apply_rules(
    values: Mapping[str, Any],
    rules: Sequence[FieldRule],
) -> tuple[dict[str, Any], list[FieldViolation]]:
    """
    Run every rule against ``values``; return parsed attributes and violations.
    """

    parsed: dict[str, Any] = {}
    violations: list[FieldViolation] = []
    for rule in rules:
        result = rule.coercer(values.get(rule.column))
        if isinstance(result, Rejected):
            violations.append(FieldViolation(field=rule.column, message=result.message))
        else:
            parsed[rule.target] = result.value
    return parsed, violations


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def to_text(value: Any) -> CoercionResult:
    if value is None:
        return Coerced("")
    return Coerced(str(value).strip())


def require_non_empty(message: str) -> Coercer:
    def _check(value: str) -> CoercionResult:
        if not value:
            return Rejected(message)
        return Coerced(value)

    return _check


# ---------------------------------------------------------------------------
# Scheme code
# ---------------------------------------------------------------------------


def to_code_text(value: Any) -> CoercionResult:
    """
    Render a code cell as text; integral numbers lose their decimal part.
    """

    if isinstance(value, bool) or value is None:
        return Coerced("")
    if isinstance(value, float) and value.is_integer():
        return Coerced(str(int(value)))
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return Coerced(str(int(value)))
    return Coerced(str(value).strip())


def replace_malformed_code(value: str) -> CoercionResult:
    # Every malformed code collapses to the same sentinel "0".
    if value in _PLACEHOLDERS or not _DIGITS.fullmatch(value):
        return Coerced("0")
    return Coerced(value)


def pad_code(value: str) -> CoercionResult:
    """
    Left-pad a digit string to the fixed code length.

    Malformed codes never fail a row; they collapse to the zero sentinel
    upstream. A digit string longer than the code column is the one case
    where the code rejects the row, since it cannot be stored.
    """

    if len(value) > SCHEME_CODE_LENGTH:
        return Rejected(f"Scheme code must not exceed {SCHEME_CODE_LENGTH} digits")
    return Coerced(value.rjust(SCHEME_CODE_LENGTH, "0"))


scheme_code = chain(to_code_text, replace_malformed_code, pad_code)


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------


def to_amount(value: Any) -> CoercionResult:
    """
    Lenient numeric coercion; anything unusable becomes zero.
    """

    if value is None or isinstance(value, bool):
        return Coerced(ZERO)
    if isinstance(value, int):
        return Coerced(Decimal(value))
    if isinstance(value, float):
        return Coerced(Decimal(str(value)) if math.isfinite(value) else ZERO)
    if isinstance(value, Decimal):
        return Coerced(value if value.is_finite() else ZERO)
    if not isinstance(value, str):
        return Coerced(ZERO)

    text = value.strip()
    if text in _PLACEHOLDERS:
        return Coerced(ZERO)
    text = text.replace(",", "").strip()
    if not _NUMBER.fullmatch(text):
        return Coerced(ZERO)
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return Coerced(ZERO)
    return Coerced(parsed if parsed.is_finite() else ZERO)


def clamp_non_negative(value: Decimal) -> CoercionResult:
    return Coerced(value if value > ZERO else ZERO)


def reject_negative(value: Decimal) -> CoercionResult:
    if value < ZERO:
        return Rejected("Value must be greater than or equal to 0")
    return Coerced(value if value > ZERO else ZERO)
