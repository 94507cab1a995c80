"""Run one scenario under several annual rates and diff the outcomes."""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from investsim.core.errors import ProjectionInputError
from investsim.core.summary import calculate_summary
from investsim.schemas.investment import (
    MIN_RATE_STEP,
    RateCandidate,
    RateComparisonResult,
    ScenarioInput,
)

BASE_RATE_LABEL = "Base rate"
DEFAULT_RATE_TOLERANCE = 1e-4
# each rate in a range comparison costs a full summary
MAX_RANGE_RATES = 1000


def compare_rates(
    scenario: ScenarioInput,
    candidates: Sequence[RateCandidate],
) -> List[RateComparisonResult]:
    """
    Base scenario first, then one entry per candidate in the order given.

    Candidates are neither sorted nor deduplicated; a candidate equal to the
    base rate yields a second, non-base entry with a zero difference.
    """
    base = calculate_summary(scenario)
    results: List[RateComparisonResult] = [
        RateComparisonResult(
            rate=scenario.annual_rate,
            label=BASE_RATE_LABEL,
            is_base_rate=True,
            final_balance=base.final_balance,
            total_interest_earned=base.total_interest_earned,
            difference_from_base=0.0,
        )
    ]

    for candidate in candidates:
        # scenario is frozen; model_copy builds the variant without touching it
        summary = calculate_summary(scenario.model_copy(update={"annual_rate": candidate.rate}))
        results.append(
            RateComparisonResult(
                rate=candidate.rate,
                label=candidate.label,
                is_base_rate=False,
                final_balance=summary.final_balance,
                total_interest_earned=summary.total_interest_earned,
                difference_from_base=summary.final_balance - base.final_balance,
            )
        )

    return results


def dedupe_rate_candidates(
    base_rate: float,
    candidates: Iterable[RateCandidate],
    tolerance: float = DEFAULT_RATE_TOLERANCE,
) -> List[RateCandidate]:
    """Drop candidates equal (within tolerance) to the base rate or to an earlier candidate."""
    kept: List[RateCandidate] = []
    for candidate in candidates:
        if abs(candidate.rate - base_rate) < tolerance:
            continue
        if any(abs(candidate.rate - other.rate) < tolerance for other in kept):
            continue
        kept.append(candidate)
    return kept


def rate_range(min_rate: float, max_rate: float, step: float = 0.5) -> List[float]:
    """Rates from min_rate to max_rate inclusive, rounded to 2 decimals."""
    if not all(math.isfinite(value) for value in (min_rate, max_rate, step)):
        raise ProjectionInputError(["min_rate, max_rate and step must be finite numbers"])
    if step < MIN_RATE_STEP:
        raise ProjectionInputError([f"step must be at least {MIN_RATE_STEP}"])
    if max_rate < min_rate:
        raise ProjectionInputError(["max_rate must not be lower than min_rate"])

    # index-based so float steps do not drift past max_rate
    count = int(math.floor((max_rate - min_rate) / step + 1e-9)) + 1
    if count > MAX_RANGE_RATES:
        raise ProjectionInputError([f"a rate range may hold at most {MAX_RANGE_RATES} rates, got {count}"])
    return [round(min_rate + index * step, 2) for index in range(count)]


def compare_rate_range(
    scenario: ScenarioInput,
    min_rate: float,
    max_rate: float,
    step: float = 0.5,
    tolerance: float = DEFAULT_RATE_TOLERANCE,
) -> List[RateComparisonResult]:
    """compare_rates over an evenly spaced range, skipping the base rate and repeats."""
    candidates = dedupe_rate_candidates(
        scenario.annual_rate,
        (RateCandidate(rate=rate) for rate in rate_range(min_rate, max_rate, step)),
        tolerance,
    )
    return compare_rates(scenario, candidates)
