"""
Request Validation for the Savings Goal API

Checks the shape of a calculation payload before any normalization happens.
Raises ValueError with clear messages for any structural violation; bad
field *values* are not errors here, the normalizer reports those per field.
"""

from .models import FIELD_NAMES

OPTION_NAMES = ("commit",)


class RequestValidator:
    """Validates calculation request payloads."""

    def validate(self, payload) -> None:
        """
        Run all validations. Raises ValueError if any check fails.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Request body must be a JSON object, got: {type(payload).__name__}")

        self._validate_keys(payload)
        self._validate_field_values(payload)
        self._validate_options(payload)

    def _validate_keys(self, payload: dict) -> None:
        unknown = sorted(set(payload) - set(FIELD_NAMES) - set(OPTION_NAMES))
        if unknown:
            raise ValueError(
                f"Unknown fields: {', '.join(unknown)}. "
                f"Expected any of: {', '.join(FIELD_NAMES)}"
            )

    def _validate_field_values(self, payload: dict) -> None:
        for name in FIELD_NAMES:
            if name not in payload or payload[name] is None:
                continue
            value = payload[name]
            # bool is an int subclass but never a meaningful amount
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise ValueError(
                    f"{name} must be a string or number, got: {type(value).__name__}"
                )

    def _validate_options(self, payload: dict) -> None:
        commit = payload.get("commit", True)
        if not isinstance(commit, bool):
            raise ValueError(f"commit must be a boolean, got: {commit!r}")
