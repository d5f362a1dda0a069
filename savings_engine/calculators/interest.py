"""
Interest Calculator

Derives the interest earned over the horizon from the projected balances.
"""

import math

from ..models import ProjectionContext
from .growth import compound_factor


class InterestCalculator:
    """Calculates total interest earned."""

    def calculate(self, ctx: ProjectionContext) -> float:
        """
        Interest = FV(current savings) + FV(payment stream) - principal.

        Floored at 0 to absorb floating-point cancellation. No expected
        return means no interest.
        """
        if not ctx.has_return:
            return 0.0

        future_value_of_payments = 0.0
        if ctx.monthly_payment > 0 and ctx.monthly_rate > 0:
            factor = (compound_factor(ctx.monthly_rate, ctx.total_months) - 1) / ctx.monthly_rate
            future_value_of_payments = ctx.monthly_payment * factor

        total_future_value = ctx.future_value_of_savings + future_value_of_payments
        interest = max(0.0, total_future_value - ctx.total_principal)

        if not math.isfinite(interest):
            return 0.0
        return interest
