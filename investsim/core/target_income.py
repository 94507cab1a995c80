"""Capital needed to live off interest alone (perpetuity inversion)."""

from __future__ import annotations

import math

from investsim.core.errors import ProjectionInputError
from investsim.core.rates import effective_monthly_rate
from investsim.schemas.investment import TargetIncomeResult

# Returned instead of an infinite capital when the rate is zero.
NOT_COMPUTABLE = 0.0


def required_capital_for_monthly_income(annual_rate: float, target_monthly_income: float) -> float:
    """
    capital = target_monthly_income / monthly_rate

    Returns NOT_COMPUTABLE (0.0) when the monthly rate is not positive.
    """
    if not math.isfinite(target_monthly_income) or target_monthly_income < 0:
        raise ProjectionInputError(["target_monthly_income must be a non-negative number"])

    monthly_rate = effective_monthly_rate(annual_rate)
    if monthly_rate <= 0:
        return NOT_COMPUTABLE
    return target_monthly_income / monthly_rate


def monthly_income_from_capital(capital: float, annual_rate: float) -> float:
    """Interest one month of the given capital pays at the EA."""
    if not math.isfinite(capital) or capital < 0:
        raise ProjectionInputError(["capital must be a non-negative number"])
    return capital * effective_monthly_rate(annual_rate)


def solve_target_income(annual_rate: float, target_monthly_income: float) -> TargetIncomeResult:
    monthly_rate = effective_monthly_rate(annual_rate)
    capital = required_capital_for_monthly_income(annual_rate, target_monthly_income)

    return TargetIncomeResult(
        required_capital=capital,
        monthly_rate=monthly_rate,
        annual_rate=annual_rate,
        target_monthly_income=target_monthly_income,
        annual_income=target_monthly_income * 12,
        computable=monthly_rate > 0,
    )
