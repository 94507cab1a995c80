from __future__ import annotations

from math import isclose

import pytest

from investsim.core.errors import ProjectionInputError
from investsim.core.rates import (
    annual_rate_from_periodic,
    effective_daily_rate,
    effective_monthly_rate,
    effective_periodic_rate,
)
from investsim.schemas.investment import CompoundingFrequency


def test_zero_rate_stays_zero():
    assert effective_monthly_rate(0) == 0.0
    assert effective_daily_rate(0) == 0.0


@pytest.mark.parametrize("annual_rate", [0.5, 4.0, 8.25, 12.0, 35.0, 100.0])
def test_compounding_a_year_reproduces_the_annual_rate(annual_rate):
    monthly = effective_monthly_rate(annual_rate)
    daily = effective_daily_rate(annual_rate)

    assert isclose((1 + monthly) ** 12 - 1, annual_rate / 100, rel_tol=1e-9)
    assert isclose((1 + daily) ** 365 - 1, annual_rate / 100, rel_tol=1e-9)


def test_known_monthly_rate():
    # 12% EA is a little under 0.95% a month, not 1%
    assert isclose(effective_monthly_rate(12), 0.0094888, rel_tol=1e-4)
    assert isclose(effective_monthly_rate(8.25), 0.006628, rel_tol=1e-3)


def test_frequency_accepts_plain_strings():
    assert effective_periodic_rate(8.25, "daily") == effective_daily_rate(8.25)


def test_periodic_back_to_annual():
    monthly = effective_monthly_rate(8.25)
    assert isclose(annual_rate_from_periodic(monthly, CompoundingFrequency.MONTHLY), 8.25, rel_tol=1e-9)

    daily = effective_daily_rate(8.25)
    assert isclose(annual_rate_from_periodic(daily, CompoundingFrequency.DAILY), 8.25, rel_tol=1e-9)


@pytest.mark.parametrize("bad_rate", [-100.0, -150.0, float("nan"), float("inf")])
def test_impossible_rates_are_rejected(bad_rate):
    with pytest.raises(ProjectionInputError):
        effective_monthly_rate(bad_rate)
