"""
Domain Models for the Savings Goal Engine

These dataclasses describe the inputs, intermediate state and results of a
savings projection. Projection math runs on floats; money is quantized only
when it is formatted for display.
"""

from dataclasses import dataclass

# =============================================================================
# FIELD NAMES
# =============================================================================

GOAL_AMOUNT = "goal_amount"
TIME_HORIZON_YEARS = "time_horizon_years"
ANNUAL_RETURN_PERCENT = "annual_return_percent"
CURRENT_SAVINGS = "current_savings"

FIELD_NAMES = (GOAL_AMOUNT, TIME_HORIZON_YEARS, ANNUAL_RETURN_PERCENT, CURRENT_SAVINGS)


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class FieldSpec:
    """Normalization rules for a single form field."""

    name: str
    minimum: float = 0.0
    maximum: float | None = None  # None = unbounded
    allow_empty: bool = False
    empty_default: str | None = None
    max_decimals: int | None = None  # None = no truncation


@dataclass(frozen=True)
class FieldResult:
    """Outcome of normalizing one field's raw text."""

    field: str
    text: str
    value: float
    valid: bool = True
    message: str | None = None


@dataclass(frozen=True)
class InputDomain:
    """Validated numeric inputs for a projection."""

    goal_amount: float
    time_horizon_years: float
    annual_return_percent: float
    current_savings: float = 0.0

    @classmethod
    def from_fields(cls, fields: dict[str, FieldResult]) -> "InputDomain":
        """Build the domain from normalized fields, valid or not."""
        return cls(
            goal_amount=fields[GOAL_AMOUNT].value,
            time_horizon_years=fields[TIME_HORIZON_YEARS].value,
            annual_return_percent=fields[ANNUAL_RETURN_PERCENT].value,
            current_savings=fields[CURRENT_SAVINGS].value,
        )


@dataclass(frozen=True)
class Example:
    """A named preset scenario."""

    key: str
    name: str
    goal: str
    time: str
    return_rate: str

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "goal": self.goal,
            "time": self.time,
            "return_rate": self.return_rate,
        }


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class ProjectionResult:
    """Aggregate figures of a projection.

    Note: final_amount echoes the goal amount, not principal + interest.
    The projected total only feeds progress_percentage.
    """

    monthly_payment: float = 0.0
    total_principal: float = 0.0
    interest_earned: float = 0.0
    final_amount: float = 0.0
    progress_percentage: float = 0.0


@dataclass
class ProjectionContext:
    """
    Holds all intermediate state during a projection.
    This is the "bag" that flows through the calculator pipeline.
    """

    inputs: InputDomain
    effective_savings: float = 0.0
    monthly_rate: float = 0.0
    total_months: float = 0.0

    # Populated by calculators
    future_value_of_savings: float = 0.0
    required_from_payments: float = 0.0
    monthly_payment: float = 0.0
    total_principal: float = 0.0
    interest_earned: float = 0.0

    @property
    def has_return(self) -> bool:
        return self.inputs.annual_return_percent > 0
