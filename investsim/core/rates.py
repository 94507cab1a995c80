"""Conversions between an effective annual rate (EA) and periodic rates."""

from __future__ import annotations

import math

from investsim.core.errors import ProjectionInputError
from investsim.schemas.investment import CompoundingFrequency

PERIODS_PER_YEAR = {
    CompoundingFrequency.MONTHLY: 12,
    CompoundingFrequency.DAILY: 365,
}


def _check_rate(value: float, name: str) -> None:
    if not math.isfinite(value):
        raise ProjectionInputError([f"{name} must be a finite number"])


def effective_periodic_rate(annual_rate: float, frequency: CompoundingFrequency) -> float:
    """
    Periodic rate whose compounding over a year reproduces the EA.

    annual_rate is a percentage (8.25 means 8.25%); the result is a fraction:
        periodic = (1 + annual_rate / 100) ** (1 / periods_per_year) - 1
    """
    _check_rate(annual_rate, "annual_rate")
    if annual_rate <= -100:
        raise ProjectionInputError(["annual_rate must be greater than -100"])
    periods = PERIODS_PER_YEAR[CompoundingFrequency(frequency)]
    return (1 + annual_rate / 100) ** (1 / periods) - 1


def effective_monthly_rate(annual_rate: float) -> float:
    return effective_periodic_rate(annual_rate, CompoundingFrequency.MONTHLY)


def effective_daily_rate(annual_rate: float) -> float:
    return effective_periodic_rate(annual_rate, CompoundingFrequency.DAILY)


def annual_rate_from_periodic(periodic_rate: float, frequency: CompoundingFrequency) -> float:
    """Inverse of effective_periodic_rate, returned as a percentage."""
    _check_rate(periodic_rate, "periodic_rate")
    if periodic_rate <= -1:
        raise ProjectionInputError(["periodic_rate must be greater than -1"])
    periods = PERIODS_PER_YEAR[CompoundingFrequency(frequency)]
    return ((1 + periodic_rate) ** periods - 1) * 100
