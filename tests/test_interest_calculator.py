"""
Unit Tests for the Interest Calculator
"""

import pytest

from savings_engine.calculators.interest import InterestCalculator
from savings_engine.models import InputDomain, ProjectionContext


def make_context(rate=7.0, years=5, payment=0.0, savings=0.0, fv_savings=0.0):
    inputs = InputDomain(
        goal_amount=50000,
        time_horizon_years=years,
        annual_return_percent=rate,
        current_savings=savings,
    )
    ctx = ProjectionContext(
        inputs=inputs,
        effective_savings=savings,
        monthly_rate=rate / 100 / 12,
        total_months=years * 12,
    )
    ctx.monthly_payment = payment
    ctx.future_value_of_savings = fv_savings
    ctx.total_principal = savings + payment * years * 12
    return ctx


class TestInterestEarned:
    """Test interest = FV(savings) + FV(payments) - principal."""

    @pytest.fixture
    def calculator(self):
        return InterestCalculator()

    def test_payment_stream_interest(self, calculator):
        """60 payments of $698.39 at 7% grow to ~$50,000."""
        ctx = make_context(payment=698.39326)
        assert calculator.calculate(ctx) == pytest.approx(8096.40, abs=0.01)

    def test_savings_only_interest(self, calculator):
        ctx = make_context(savings=50000, fv_savings=70881.262981)
        assert calculator.calculate(ctx) == pytest.approx(20881.26, abs=0.01)

    def test_zero_rate_earns_nothing(self, calculator):
        ctx = make_context(rate=0.0, payment=500.0, savings=1000, fv_savings=1000)
        assert calculator.calculate(ctx) == 0.0

    def test_floored_at_zero(self, calculator):
        """Cancellation noise never produces negative interest."""
        ctx = make_context(savings=1000, fv_savings=999.9999999)
        assert calculator.calculate(ctx) == 0.0

    def test_non_finite_becomes_zero(self, calculator):
        ctx = make_context(savings=1000, fv_savings=float("inf"))
        assert calculator.calculate(ctx) == 0.0
