from __future__ import annotations

from datetime import date
from math import isclose

import pytest
from pydantic import ValidationError

from investsim.core.schedule import (
    DAYS_PER_MONTH,
    compact_to_monthly,
    generate_monthly_schedule,
    generate_schedule,
)
from investsim.schemas.investment import CompoundingFrequency, ScenarioInput


def make_scenario(**overrides) -> ScenarioInput:
    values = {
        "initial_amount": 500000.0,
        "monthly_contribution": 100000.0,
        "term_months": 12,
        "annual_rate": 8.25,
        "compounding_frequency": CompoundingFrequency.MONTHLY,
    }
    values.update(overrides)
    return ScenarioInput(**values)


def assert_ledger_consistent(rows):
    for row in rows:
        expected_close = row.opening_balance + row.contribution + row.interest_earned
        assert isclose(row.closing_balance, expected_close, rel_tol=1e-9, abs_tol=1e-6)
    for previous, current in zip(rows, rows[1:]):
        assert isclose(previous.closing_balance, current.opening_balance, rel_tol=1e-12, abs_tol=1e-9)
        assert current.period_number == previous.period_number + 1


@pytest.mark.parametrize("frequency", list(CompoundingFrequency))
def test_ledger_rows_balance_and_chain(frequency):
    rows = generate_schedule(make_scenario(compounding_frequency=frequency, term_months=24))
    assert rows[0].opening_balance == 500000.0
    assert_ledger_consistent(rows)


def test_monthly_schedule_has_one_row_per_month():
    rows = generate_schedule(make_scenario())

    assert len(rows) == 12
    first = rows[0]
    # interest accrues on the opening balance only; the deposit lands at the close
    assert isclose(first.interest_earned, 500000.0 * ((1.0825) ** (1 / 12) - 1), rel_tol=1e-12)
    assert first.contribution == 100000.0
    assert isclose(rows[-1].cumulative_contributions, 1200000.0)
    assert isclose(
        rows[-1].cumulative_interest,
        sum(row.interest_earned for row in rows),
        rel_tol=1e-12,
    )


def test_daily_schedule_deposits_once_per_thirty_days():
    rows = generate_schedule(make_scenario(compounding_frequency="daily", term_months=3))

    assert len(rows) == 3 * DAYS_PER_MONTH
    deposit_days = [row.period_number for row in rows if row.contribution > 0]
    assert deposit_days == [1, 31, 61]
    assert isclose(rows[-1].cumulative_contributions, 300000.0)


def test_zero_term_gives_empty_schedule():
    assert generate_schedule(make_scenario(term_months=0)) == []
    assert generate_monthly_schedule(make_scenario(term_months=0, compounding_frequency="daily")) == []


@pytest.mark.parametrize("frequency", list(CompoundingFrequency))
def test_zero_rate_earns_no_interest(frequency):
    rows = generate_schedule(make_scenario(annual_rate=0.0, compounding_frequency=frequency))

    assert all(row.interest_earned == 0.0 for row in rows)
    assert isclose(rows[-1].closing_balance, 500000.0 + 100000.0 * 12)


def test_compaction_preserves_month_boundaries():
    scenario = make_scenario(compounding_frequency="daily", term_months=6, annual_rate=10.0)
    daily = generate_schedule(scenario, start_date=date(2024, 1, 1))
    monthly = compact_to_monthly(daily)

    assert len(monthly) == 6
    assert_ledger_consistent(monthly)
    for index, month in enumerate(monthly):
        last_day = daily[(index + 1) * DAYS_PER_MONTH - 1]
        assert month.period_number == index + 1
        assert month.closing_balance == last_day.closing_balance
        assert month.date == last_day.date
        assert month.contribution == 100000.0
        assert isclose(month.cumulative_interest, last_day.cumulative_interest)


def test_monthly_view_matches_detailed_view_for_monthly_compounding():
    scenario = make_scenario()
    start = date(2024, 5, 1)
    assert generate_monthly_schedule(scenario, start) == generate_schedule(scenario, start)


def test_dates_label_rows_from_the_start_date():
    monthly = generate_schedule(make_scenario(term_months=2), start_date=date(2024, 1, 31))
    assert [row.date for row in monthly] == [date(2024, 2, 29), date(2024, 3, 31)]

    daily = generate_schedule(
        make_scenario(term_months=1, compounding_frequency="daily"),
        start_date=date(2024, 12, 31),
    )
    assert daily[0].date == date(2025, 1, 1)
    assert daily[-1].date == date(2025, 1, 30)


def test_schedule_is_deterministic():
    scenario = make_scenario(compounding_frequency="daily")
    start = date(2025, 1, 1)
    assert generate_schedule(scenario, start) == generate_schedule(scenario, start)


@pytest.mark.parametrize(
    "field, value",
    [
        ("initial_amount", -1.0),
        ("monthly_contribution", -0.01),
        ("term_months", -1),
        ("annual_rate", -0.5),
        ("annual_rate", 100.5),
    ],
)
def test_negative_or_out_of_range_input_fails_fast(field, value):
    with pytest.raises(ValidationError):
        make_scenario(**{field: value})


def test_scenario_is_immutable():
    scenario = make_scenario()
    with pytest.raises(ValidationError):
        scenario.annual_rate = 10.0


@pytest.mark.parametrize("field", ["initial_amount", "monthly_contribution", "annual_rate"])
@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_non_finite_amounts_fail_fast(field, value):
    with pytest.raises(ValidationError):
        make_scenario(**{field: value})
