"""
Input Normalizer

Turns the free-form text of a form field into a bounded, non-negative number.
Sanitization runs on every keystroke; validation runs only when a field is
committed. A failed validation never blocks the projection: the best-effort
value is always returned alongside the verdict.
"""

import math
import re
from decimal import Decimal

from .models import (
    ANNUAL_RETURN_PERCENT,
    CURRENT_SAVINGS,
    GOAL_AMOUNT,
    TIME_HORIZON_YEARS,
    FieldResult,
    FieldSpec,
)

_DISALLOWED = re.compile(r"[^0-9.]")

DEFAULT_FIELD_SPECS = {
    GOAL_AMOUNT: FieldSpec(name=GOAL_AMOUNT),
    TIME_HORIZON_YEARS: FieldSpec(name=TIME_HORIZON_YEARS),
    ANNUAL_RETURN_PERCENT: FieldSpec(name=ANNUAL_RETURN_PERCENT, max_decimals=2),
    CURRENT_SAVINGS: FieldSpec(name=CURRENT_SAVINGS, allow_empty=True, empty_default="0"),
}


def _fmt_bound(value: float) -> str:
    """Format a bound the way a user typed it (50, not 50.0 or 5e+01)."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return format(Decimal(repr(value)), "f")


class InputNormalizer:
    """Sanitizes, parses and validates raw field text."""

    def __init__(self, field_specs: dict[str, FieldSpec] | None = None):
        self.field_specs = dict(field_specs or DEFAULT_FIELD_SPECS)

    def spec_for(self, field: str) -> FieldSpec:
        try:
            return self.field_specs[field]
        except KeyError:
            raise ValueError(f"Unknown field: {field}") from None

    def sanitize(self, raw: str, field: str) -> str:
        """
        Strip everything but digits and decimal points.

        Multiple points collapse into the first one, with the remaining digit
        groups concatenated after it ("12.34.56" -> "12.3456"). Fields with
        max_decimals have their fractional part truncated, never rounded.
        """
        spec = self.spec_for(field)
        value = _DISALLOWED.sub("", raw or "")

        parts = value.split(".")
        if len(parts) > 2:
            value = parts[0] + "." + "".join(parts[1:])
            parts = [parts[0], "".join(parts[1:])]

        if spec.max_decimals is not None and len(parts) == 2:
            value = parts[0] + "." + parts[1][: spec.max_decimals]

        return value

    @staticmethod
    def parse(text: str) -> float:
        """Best-effort parse: anything unusable becomes 0."""
        try:
            value = float(text)
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(value) or value < 0:
            return 0.0
        return value

    def validate(self, text: str, field: str) -> FieldResult:
        """Commit-time validation of already sanitized text."""
        spec = self.spec_for(field)

        if text is None or text == "":
            if spec.allow_empty and spec.empty_default is not None:
                return FieldResult(
                    field=field, text=spec.empty_default, value=self.parse(spec.empty_default)
                )
            return self._invalid(field, "", "Please enter a value")

        try:
            value = float(text)
        except ValueError:
            return self._invalid(field, text, "Please enter a valid number")

        if not math.isfinite(value):
            return self._invalid(field, text, "Please enter a valid number")
        if value < spec.minimum:
            return self._invalid(field, text, f"Value must be at least {_fmt_bound(spec.minimum)}")
        if spec.maximum is not None and value > spec.maximum:
            return self._invalid(field, text, f"Value must be no more than {_fmt_bound(spec.maximum)}")

        return FieldResult(field=field, text=text, value=self.parse(text))

    def normalize(self, raw: str, field: str, commit: bool = False) -> FieldResult:
        """
        Sanitize and parse raw text, validating it when the field is committed.

        Returns:
            FieldResult with the sanitized text, the best-effort value and,
            on commit, the validation verdict
        """
        text = self.sanitize(raw, field)
        if commit:
            return self.validate(text, field)
        return FieldResult(field=field, text=text, value=self.parse(text))

    def _invalid(self, field: str, text: str, message: str) -> FieldResult:
        return FieldResult(
            field=field, text=text, value=self.parse(text), valid=False, message=message
        )
