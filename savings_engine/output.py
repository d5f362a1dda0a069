"""
Output Builder

Formats projection results for display and constructs the API response.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .calculators import compound_factor
from .models import FIELD_NAMES, FieldResult, InputDomain, ProjectionResult


def to_money(value: float) -> float:
    """Round to 2 decimal places (half-up) for the JSON response."""
    if not math.isfinite(value):
        return 0.0
    try:
        return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # Beyond 28 significant digits cents are meaningless
        return value


def format_currency(amount: float) -> str:
    """
    Format an amount as whole dollars with thousands separators.

    Negative amounts are shown as their absolute value; non-finite amounts
    render as "$0".
    """
    if amount is None or not math.isfinite(amount):
        return "$0"
    whole = int(Decimal(str(abs(amount))).to_integral_value(rounding=ROUND_HALF_UP))
    return f"${whole:,}"


def progress_bar_width(result: ProjectionResult) -> float:
    """
    Width of the progress indicator, in percent.

    This is total_principal / final_amount, unclamped, so it can exceed 100
    when contributed principal passes the goal figure. It deliberately does
    not use result.progress_percentage.
    """
    if result.final_amount <= 0:
        return 0.0
    width = result.total_principal * 100 / result.final_amount
    return width if math.isfinite(width) else 0.0


def savings_cover_goal(inputs: InputDomain) -> bool:
    """True when current savings, grown over the horizon, reach the goal."""
    if inputs.goal_amount <= 0:
        return False
    savings = min(inputs.current_savings, inputs.goal_amount)
    if savings <= 0:
        return False
    if inputs.annual_return_percent <= 0:
        return savings >= inputs.goal_amount
    months = inputs.time_horizon_years * 12
    return savings * compound_factor(inputs.annual_return_percent / 100 / 12, months) >= inputs.goal_amount


def _pct(value: float) -> str:
    return f"{value:g}%"


class OutputBuilder:
    """Builds the final output response."""

    def build(
        self,
        inputs: InputDomain,
        fields: dict[str, FieldResult],
        result: ProjectionResult,
    ) -> dict:
        """Construct the complete response from normalized fields and the result."""
        return {
            "inputs": self._build_inputs(fields),
            "errors": self._build_errors(fields),
            "valid": all(fields[name].valid for name in FIELD_NAMES),
            "results": self._build_results(inputs, result),
            "display": self.build_display(result),
            "progress": self._build_progress(result),
        }

    def build_display(self, result: ProjectionResult) -> dict:
        """The four formatted figures shown to the user."""
        return {
            "monthly_payment": format_currency(result.monthly_payment),
            "total_principal": format_currency(result.total_principal),
            "interest_earned": format_currency(result.interest_earned),
            "final_amount": format_currency(result.final_amount),
        }

    def _build_inputs(self, fields: dict[str, FieldResult]) -> dict:
        return {
            name: {"text": fields[name].text, "value": fields[name].value}
            for name in FIELD_NAMES
        }

    def _build_errors(self, fields: dict[str, FieldResult]) -> dict:
        return {
            name: fields[name].message
            for name in FIELD_NAMES
            if not fields[name].valid
        }

    def _build_results(self, inputs: InputDomain, result: ProjectionResult) -> dict:
        """Build results section with value and description for each figure."""
        months = inputs.time_horizon_years * 12
        goal = format_currency(inputs.goal_amount)

        if inputs.goal_amount <= 0 or inputs.time_horizon_years <= 0:
            payment_desc = "No goal or time horizon set - no monthly payment required"
        elif savings_cover_goal(inputs):
            payment_desc = f"Current savings already reach {goal} - no monthly payment required"
        elif not math.isfinite(months) or result.monthly_payment == 0:
            payment_desc = "Time horizon too long to compute a monthly payment"
        elif inputs.annual_return_percent > 0:
            payment_desc = (
                f"Monthly deposit over {months:g} months at {_pct(inputs.annual_return_percent)} "
                f"annual return to reach {goal}"
            )
        else:
            payment_desc = f"Remaining gap to {goal} split evenly over {months:g} months"

        return {
            "monthly_payment": {
                "value": to_money(result.monthly_payment),
                "description": payment_desc,
            },
            "total_principal": {
                "value": to_money(result.total_principal),
                "description": (
                    f"Current savings + {months:g} monthly payments of "
                    f"{format_currency(result.monthly_payment)}"
                    if math.isfinite(months)
                    else "Current savings only"
                ),
            },
            "interest_earned": {
                "value": to_money(result.interest_earned),
                "description": (
                    f"Growth at {_pct(inputs.annual_return_percent)} compounded monthly"
                    if inputs.annual_return_percent > 0
                    else "No expected return - no interest earned"
                ),
            },
            "final_amount": {
                "value": to_money(result.final_amount),
                "description": f"Savings goal of {goal}",
            },
            "progress_percentage": {
                "value": round(result.progress_percentage, 2),
                "description": "Projected total (principal + interest) as a share of the goal, capped at 100%",
            },
        }

    def _build_progress(self, result: ProjectionResult) -> dict:
        return {
            "bar_width": round(progress_bar_width(result), 2),
            "projected_percentage": round(result.progress_percentage, 2),
        }
