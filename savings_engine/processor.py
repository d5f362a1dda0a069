"""
Projection Engine - Main Orchestrator

Coordinates the savings projection through discrete, testable steps.
"""

import logging
import math
from decimal import Decimal
from typing import Any, Dict

from .calculators import InterestCalculator, PaymentCalculator, SavingsGrowthCalculator
from .models import (
    FIELD_NAMES,
    FieldResult,
    InputDomain,
    ProjectionContext,
    ProjectionResult,
)
from .normalizer import InputNormalizer
from .output import OutputBuilder
from .validators import RequestValidator

logger = logging.getLogger(__name__)


def _as_text(raw: Any) -> str:
    """Raw field text; numbers are written out without exponent notation."""
    if raw is None:
        return ""
    if isinstance(raw, float) and math.isfinite(raw):
        return format(Decimal(repr(raw)), "f")
    return str(raw)


def _non_negative(value: float) -> float:
    """Coerce NaN, infinities and negatives to 0."""
    if value is None or not math.isfinite(value) or value < 0:
        return 0.0
    return float(value)


class ProjectionEngine:
    """
    Main orchestrator for savings projections.

    Implements a clear pipeline pattern:
    1. Coerce Input
    2. Short-circuit degenerate goals
    3. Build Context
    4. Grow Current Savings
    5. Solve Monthly Payment
    6. Total Principal
    7. Calculate Interest
    8. Build Result

    The engine never raises on numeric input: degenerate and unstable
    values are absorbed into a well-formed (possibly all-zero) result.
    """

    def __init__(self, normalizer: InputNormalizer | None = None):
        self.normalizer = normalizer or InputNormalizer()
        self.request_validator = RequestValidator()
        self.growth_calculator = SavingsGrowthCalculator()
        self.payment_calculator = PaymentCalculator()
        self.interest_calculator = InterestCalculator()
        self.output_builder = OutputBuilder()

    def project(self, inputs: InputDomain) -> ProjectionResult:
        """
        Project a savings plan.

        Args:
            inputs: Goal, horizon, expected return and current savings

        Returns:
            ProjectionResult with the required payment and aggregate totals
        """
        # Step 1: Coerce
        inputs = InputDomain(
            goal_amount=_non_negative(inputs.goal_amount),
            time_horizon_years=_non_negative(inputs.time_horizon_years),
            annual_return_percent=_non_negative(inputs.annual_return_percent),
            current_savings=_non_negative(inputs.current_savings),
        )

        # Step 2: Nothing to save for (not an error)
        if inputs.goal_amount <= 0 or inputs.time_horizon_years <= 0:
            return ProjectionResult(
                monthly_payment=0.0,
                total_principal=inputs.current_savings,
                interest_earned=0.0,
                final_amount=inputs.goal_amount,
                progress_percentage=0.0,
            )

        # Step 3: Build context
        ctx = self._build_context(inputs)

        # Step 4: Future value of existing savings
        ctx.future_value_of_savings = self.growth_calculator.calculate(ctx)

        # Step 5: Required monthly payment
        ctx.required_from_payments = self.payment_calculator.required_from_payments(ctx)
        ctx.monthly_payment = self.payment_calculator.calculate(ctx)

        # Step 6: Principal contributed (a zero payment contributes nothing,
        # even over an unbounded number of months)
        contributed = ctx.monthly_payment * ctx.total_months if ctx.monthly_payment > 0 else 0.0
        ctx.total_principal = _non_negative(ctx.effective_savings + contributed)

        # Step 7: Interest earned
        ctx.interest_earned = self.interest_calculator.calculate(ctx)

        # Step 8: Build result
        return self._build_result(ctx)

    def project_values(
        self,
        goal_amount: float,
        time_horizon_years: float,
        annual_return_percent: float,
        current_savings: float = 0.0,
    ) -> ProjectionResult:
        """Convenience wrapper taking the four inputs positionally."""
        return self.project(
            InputDomain(
                goal_amount=goal_amount,
                time_horizon_years=time_horizon_years,
                annual_return_percent=annual_return_percent,
                current_savings=current_savings,
            )
        )

    def normalize_fields(self, raw_values: Dict[str, Any], commit: bool = True) -> Dict[str, FieldResult]:
        """Normalize every form field; missing fields count as empty text."""
        fields = {}
        for name in FIELD_NAMES:
            fields[name] = self.normalizer.normalize(
                _as_text(raw_values.get(name)), name, commit=commit
            )
        return fields

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Normalize raw field values, project, and build the API response.

        Convenience method for API usage. Raises ValueError for malformed
        payloads; invalid field values are reported in the "errors" section
        and the projection still runs on best-effort values.
        """
        self.request_validator.validate(data)

        fields = self.normalize_fields(data, commit=data.get("commit", True))
        inputs = InputDomain.from_fields(fields)
        result = self.project(inputs)

        invalid = [name for name, f in fields.items() if not f.valid]
        if invalid:
            logger.info(f"Projection ran with invalid fields: {', '.join(invalid)}")

        return self.output_builder.build(inputs, fields, result)

    def _build_context(self, inputs: InputDomain) -> ProjectionContext:
        """Build the initial projection context."""
        return ProjectionContext(
            inputs=inputs,
            # Savings above the goal count only up to the goal
            effective_savings=min(inputs.current_savings, inputs.goal_amount),
            monthly_rate=inputs.annual_return_percent / 100 / 12,
            total_months=inputs.time_horizon_years * 12,
        )

    def _build_result(self, ctx: ProjectionContext) -> ProjectionResult:
        goal = ctx.inputs.goal_amount
        projected_total = ctx.total_principal + ctx.interest_earned
        progress = min(100.0, projected_total / goal * 100)
        if not math.isfinite(progress):
            progress = 0.0

        return ProjectionResult(
            monthly_payment=ctx.monthly_payment,
            total_principal=ctx.total_principal,
            interest_earned=ctx.interest_earned,
            final_amount=goal,
            progress_percentage=progress,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_default_engine = ProjectionEngine()


def project(
    goal_amount: float,
    time_horizon_years: float,
    annual_return_percent: float,
    current_savings: float = 0.0,
) -> ProjectionResult:
    """Project a savings plan with the default engine."""
    return _default_engine.project_values(
        goal_amount, time_horizon_years, annual_return_percent, current_savings
    )

