"""Scenario totals: final balance, contributions and interest."""

from __future__ import annotations

from investsim.core.rates import effective_daily_rate, effective_monthly_rate
from investsim.core.schedule import walk_daily
from investsim.schemas.investment import CompoundingFrequency, InvestmentSummary, ScenarioInput


def future_value(
    principal: float,
    periodic_rate: float,
    periods: int,
    periodic_contribution: float = 0.0,
) -> float:
    """
    Principal plus an ordinary annuity (contribution at the end of each period):
        FV = P * (1 + r)^n + PMT * ((1 + r)^n - 1) / r
    """
    if periodic_rate == 0:
        return principal + periodic_contribution * periods

    growth = (1 + periodic_rate) ** periods
    return principal * growth + periodic_contribution * (growth - 1) / periodic_rate


def final_balance(scenario: ScenarioInput) -> float:
    if scenario.compounding_frequency == CompoundingFrequency.MONTHLY:
        return future_value(
            scenario.initial_amount,
            effective_monthly_rate(scenario.annual_rate),
            scenario.term_months,
            scenario.monthly_contribution,
        )

    balance = float(scenario.initial_amount)
    for _, _, _, _, closing in walk_daily(scenario):
        balance = closing
    return balance


def calculate_summary(scenario: ScenarioInput) -> InvestmentSummary:
    """Totals for a scenario; both periodic rates are reported as fractions."""
    balance = final_balance(scenario)
    total_contributions = scenario.monthly_contribution * scenario.term_months

    return InvestmentSummary(
        final_balance=balance,
        total_contributions=total_contributions,
        total_monthly_contributions=total_contributions,
        total_interest_earned=balance - scenario.initial_amount - total_contributions,
        initial_amount=scenario.initial_amount,
        annual_rate=scenario.annual_rate,
        effective_monthly_rate=effective_monthly_rate(scenario.annual_rate),
        effective_daily_rate=effective_daily_rate(scenario.annual_rate),
        term_months=scenario.term_months,
        compounding_frequency=scenario.compounding_frequency,
    )
