"""Inverse questions on a scenario: how long, and how much per month."""

from __future__ import annotations

import logging
from typing import Optional

from investsim.core.errors import ProjectionInputError
from investsim.core.rates import effective_monthly_rate
from investsim.core.summary import final_balance
from investsim.schemas.investment import MAX_TERM_MONTHS, CompoundingFrequency, ScenarioInput

logger = logging.getLogger(__name__)

# 100 years
MAX_SEARCH_MONTHS = 1200
CONTRIBUTION_TOLERANCE = 0.01


def _balance_after(
    months: int,
    initial_amount: float,
    monthly_contribution: float,
    annual_rate: float,
    compounding_frequency: CompoundingFrequency,
) -> float:
    # model_construct: terms beyond MAX_TERM_MONTHS are valid search points here
    scenario = ScenarioInput.model_construct(
        initial_amount=initial_amount,
        monthly_contribution=monthly_contribution,
        term_months=months,
        annual_rate=annual_rate,
        compounding_frequency=CompoundingFrequency(compounding_frequency),
    )
    return final_balance(scenario)


def months_to_target(
    target_amount: float,
    initial_amount: float,
    monthly_contribution: float,
    annual_rate: float,
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY,
) -> Optional[int]:
    """
    Smallest term in months whose final balance reaches target_amount.

    Returns 0 when the initial amount already covers the target and None
    when the target is out of reach within MAX_SEARCH_MONTHS.
    """
    # validates the amounts and the rate the same way a scenario does
    ScenarioInput(
        initial_amount=initial_amount,
        monthly_contribution=monthly_contribution,
        term_months=0,
        annual_rate=annual_rate,
        compounding_frequency=compounding_frequency,
    )
    if target_amount <= initial_amount:
        return 0
    if monthly_contribution == 0 and (annual_rate == 0 or initial_amount == 0):
        return None

    def reached(months: int) -> bool:
        balance = _balance_after(
            months, initial_amount, monthly_contribution, annual_rate, compounding_frequency
        )
        return balance >= target_amount

    low, high = 1, MAX_SEARCH_MONTHS
    while low < high:
        mid = (low + high) // 2
        if reached(mid):
            high = mid
        else:
            low = mid + 1

    return low if reached(low) else None


def required_monthly_contribution(
    target_amount: float,
    initial_amount: float,
    term_months: int,
    annual_rate: float,
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY,
) -> float:
    """
    Monthly deposit that brings initial_amount to target_amount in term_months.

    Monthly compounding inverts the annuity formula:
        PMT = (FV - P * (1 + r)^n) * r / ((1 + r)^n - 1)
    Daily compounding has no closed form here and is solved by bisection to
    CONTRIBUTION_TOLERANCE. The result is never negative.
    """
    if term_months < 1 or term_months > MAX_TERM_MONTHS:
        raise ProjectionInputError([f"term_months must be between 1 and {MAX_TERM_MONTHS}"])
    if target_amount < 0:
        raise ProjectionInputError(["target_amount must not be negative"])
    ScenarioInput(
        initial_amount=initial_amount,
        term_months=term_months,
        annual_rate=annual_rate,
        compounding_frequency=compounding_frequency,
    )

    if CompoundingFrequency(compounding_frequency) == CompoundingFrequency.MONTHLY:
        rate = effective_monthly_rate(annual_rate)
        if rate == 0:
            required = (target_amount - initial_amount) / term_months
        else:
            growth = (1 + rate) ** term_months
            required = (target_amount - initial_amount * growth) * rate / (growth - 1)
        return max(0.0, round(required, 2))

    if _balance_after(term_months, initial_amount, 0.0, annual_rate, compounding_frequency) >= target_amount:
        return 0.0

    low, high = 0.0, float(target_amount)
    iterations = 0
    while high - low > CONTRIBUTION_TOLERANCE:
        mid = (low + high) / 2
        balance = _balance_after(
            term_months, initial_amount, mid, annual_rate, compounding_frequency
        )
        if balance >= target_amount:
            high = mid
        else:
            low = mid
        iterations += 1

    logger.debug("daily contribution bisection converged in %d steps", iterations)
    return round(high, 2)
