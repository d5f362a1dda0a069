"""
Payment Calculator

Solves for the monthly contribution that closes the gap to the goal.
"""

import math

from ..models import ProjectionContext
from .growth import compound_factor


class PaymentCalculator:
    """Calculates the required monthly payment."""

    def required_from_payments(self, ctx: ProjectionContext) -> float:
        """Portion of the goal the existing savings will not cover."""
        return max(0.0, ctx.inputs.goal_amount - ctx.future_value_of_savings)

    def calculate(self, ctx: ProjectionContext) -> float:
        """
        Invert the future value of an ordinary annuity.

            FV  = PMT * (((1 + r)^n - 1) / r)
            PMT = FV / (((1 + r)^n - 1) / r)

        Without an expected return the gap is simply spread evenly over the
        horizon. Any non-finite or negative payment is forced to 0.
        """
        required = ctx.required_from_payments
        payment = 0.0

        if required > 0:
            if ctx.has_return and ctx.monthly_rate > 0:
                payment = self._annuity_payment(required, ctx.monthly_rate, ctx.total_months)
            else:
                payment = self._flat_payment(required, ctx.total_months)

        if not math.isfinite(payment) or payment < 0:
            return 0.0
        return payment

    def _annuity_payment(self, required: float, monthly_rate: float, total_months: float) -> float:
        future_value_factor = (compound_factor(monthly_rate, total_months) - 1) / monthly_rate
        if future_value_factor == 0:
            return math.nan
        return required / future_value_factor

    def _flat_payment(self, required: float, total_months: float) -> float:
        if total_months == 0:
            return math.nan
        return required / total_months
