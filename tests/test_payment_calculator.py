"""
Unit Tests for the Payment Calculator
"""

import pytest

from savings_engine.calculators.growth import SavingsGrowthCalculator
from savings_engine.calculators.payment import PaymentCalculator
from savings_engine.models import InputDomain, ProjectionContext


def make_context(goal=50000, years=5, rate=7.0, savings=0):
    inputs = InputDomain(
        goal_amount=goal,
        time_horizon_years=years,
        annual_return_percent=rate,
        current_savings=savings,
    )
    ctx = ProjectionContext(
        inputs=inputs,
        effective_savings=min(savings, goal),
        monthly_rate=rate / 100 / 12,
        total_months=years * 12,
    )
    ctx.future_value_of_savings = SavingsGrowthCalculator().calculate(ctx)
    ctx.required_from_payments = PaymentCalculator().required_from_payments(ctx)
    return ctx


class TestRequiredFromPayments:
    """Test the gap left after existing savings grow."""

    @pytest.fixture
    def calculator(self):
        return PaymentCalculator()

    def test_no_savings_needs_full_goal(self, calculator):
        assert calculator.required_from_payments(make_context()) == 50000

    def test_savings_reduce_gap(self, calculator):
        """$10,000 grows to $14,176.25 over 5 years at 7%."""
        ctx = make_context(savings=10000)
        assert calculator.required_from_payments(ctx) == pytest.approx(35823.75, abs=0.01)

    def test_gap_never_negative(self, calculator):
        ctx = make_context(goal=10000, savings=10000)
        assert calculator.required_from_payments(ctx) == 0.0


class TestMonthlyPayment:
    """Test the annuity inversion and its guards."""

    @pytest.fixture
    def calculator(self):
        return PaymentCalculator()

    def test_annuity_payment(self, calculator):
        """$50,000 in 5 years at 7% = $698.39/month"""
        assert calculator.calculate(make_context()) == pytest.approx(698.39, abs=0.01)

    def test_annuity_payment_with_savings(self, calculator):
        ctx = make_context(savings=10000)
        assert calculator.calculate(ctx) == pytest.approx(500.38, abs=0.01)

    def test_zero_rate_splits_evenly(self, calculator):
        """($10,000 - $2,000) / 24 months = $333.33"""
        ctx = make_context(goal=10000, years=2, rate=0.0, savings=2000)
        assert calculator.calculate(ctx) == pytest.approx(333.3333, abs=1e-4)

    def test_no_gap_no_payment(self, calculator):
        ctx = make_context(goal=10000, savings=20000)
        assert calculator.calculate(ctx) == 0.0

    def test_zero_months_forces_zero(self, calculator):
        """A zero horizon slipping through yields 0, not a division error."""
        ctx = make_context(years=0, rate=0.0)
        assert calculator.calculate(ctx) == 0.0

    def test_overflowing_growth_forces_zero(self, calculator):
        ctx = make_context(goal=1000, years=100000, rate=100.0)
        assert calculator.calculate(ctx) == 0.0
