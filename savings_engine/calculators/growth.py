"""
Savings Growth Calculator

Projects the existing balance forward with monthly compounding.
"""

import math

from ..models import ProjectionContext


def compound_factor(monthly_rate: float, total_months: float) -> float:
    """Growth factor (1 + r)^n, infinite when the power overflows."""
    try:
        return (1 + monthly_rate) ** total_months
    except OverflowError:
        return math.inf


class SavingsGrowthCalculator:
    """Calculates the future value of current savings."""

    def calculate(self, ctx: ProjectionContext) -> float:
        """
        Future value of the (goal-capped) current savings.

        With no expected return the balance is carried forward unchanged,
        skipping the exponentiation entirely.
        """
        savings = ctx.effective_savings
        if savings <= 0:
            return 0.0

        if not ctx.has_return:
            return savings

        return savings * compound_factor(ctx.monthly_rate, ctx.total_months)
