"""Period-by-period projection ledgers."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterator, List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from investsim.core.rates import effective_daily_rate, effective_monthly_rate
from investsim.schemas.investment import CompoundingFrequency, PeriodDetail, ScenarioInput

logger = logging.getLogger(__name__)

# Daily schedules approximate every month as 30 days.
DAYS_PER_MONTH = 30

# (period_number, opening, contribution, interest, closing)
Step = Tuple[int, float, float, float, float]


def walk_monthly(scenario: ScenarioInput) -> Iterator[Step]:
    """
    One step per month.

    Order of operations (per month):
      1) Interest accrues on the opening balance.
      2) The monthly contribution is deposited at the close (earns nothing this month).
    """
    rate = effective_monthly_rate(scenario.annual_rate)
    balance = float(scenario.initial_amount)

    for month in range(1, scenario.term_months + 1):
        opening = balance
        interest = opening * rate
        contribution = scenario.monthly_contribution
        balance = opening + contribution + interest
        yield month, opening, contribution, interest, balance


def walk_daily(scenario: ScenarioInput) -> Iterator[Step]:
    """
    One step per day over term_months * DAYS_PER_MONTH days.

    Interest accrues daily on the opening balance; the monthly contribution
    lands at the close of the first day of each 30-day month.
    """
    rate = effective_daily_rate(scenario.annual_rate)
    balance = float(scenario.initial_amount)

    for day in range(1, scenario.term_months * DAYS_PER_MONTH + 1):
        opening = balance
        interest = opening * rate
        contribution = scenario.monthly_contribution if (day - 1) % DAYS_PER_MONTH == 0 else 0.0
        balance = opening + contribution + interest
        yield day, opening, contribution, interest, balance


def _period_date(start: date, frequency: CompoundingFrequency, period: int) -> date:
    if frequency == CompoundingFrequency.DAILY:
        return start + timedelta(days=period)
    return start + relativedelta(months=period)


def generate_schedule(
    scenario: ScenarioInput,
    start_date: Optional[date] = None,
) -> List[PeriodDetail]:
    """Full ledger: one row per compounding period (days for daily compounding).

    start_date only labels the rows; it defaults to today.
    """
    start = start_date or date.today()
    frequency = scenario.compounding_frequency
    steps = walk_daily(scenario) if frequency == CompoundingFrequency.DAILY else walk_monthly(scenario)

    cumulative_contributions = 0.0
    cumulative_interest = 0.0
    rows: List[PeriodDetail] = []

    for period, opening, contribution, interest, closing in steps:
        cumulative_contributions += contribution
        cumulative_interest += interest
        rows.append(
            PeriodDetail(
                period_number=period,
                date=_period_date(start, frequency, period),
                opening_balance=opening,
                contribution=contribution,
                interest_earned=interest,
                closing_balance=closing,
                cumulative_contributions=cumulative_contributions,
                cumulative_interest=cumulative_interest,
            )
        )

    logger.debug("generated %d %s periods", len(rows), frequency.value)
    return rows


def compact_to_monthly(
    rows: Sequence[PeriodDetail],
    days_per_month: int = DAYS_PER_MONTH,
) -> List[PeriodDetail]:
    """
    Fold a daily ledger into one row per month.

    Each month keeps its first opening and last closing balance, sums the
    contributions and interest of its days, and takes the cumulative values
    and date of its last day, so the ledger identities still hold per month.
    """
    months: List[PeriodDetail] = []

    for offset in range(0, len(rows), days_per_month):
        days = rows[offset:offset + days_per_month]
        first, last = days[0], days[-1]
        months.append(
            PeriodDetail(
                period_number=offset // days_per_month + 1,
                date=last.date,
                opening_balance=first.opening_balance,
                contribution=sum(day.contribution for day in days),
                interest_earned=sum(day.interest_earned for day in days),
                closing_balance=last.closing_balance,
                cumulative_contributions=last.cumulative_contributions,
                cumulative_interest=last.cumulative_interest,
            )
        )

    logger.debug("compacted %d daily rows into %d months", len(rows), len(months))
    return months


def generate_monthly_schedule(
    scenario: ScenarioInput,
    start_date: Optional[date] = None,
) -> List[PeriodDetail]:
    """Ledger with at most term_months rows, whatever the compounding frequency."""
    rows = generate_schedule(scenario, start_date=start_date)
    if scenario.compounding_frequency == CompoundingFrequency.DAILY:
        return compact_to_monthly(rows)
    return rows
