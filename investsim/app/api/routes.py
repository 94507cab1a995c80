"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from investsim.config import get_settings
from investsim.core.comparison import compare_rate_range, compare_rates, dedupe_rate_candidates
from investsim.core.errors import ProjectionInputError
from investsim.core.goals import months_to_target, required_monthly_contribution
from investsim.core.health import get_health
from investsim.core.schedule import generate_monthly_schedule, generate_schedule
from investsim.core.summary import calculate_summary
from investsim.core.target_income import solve_target_income
from investsim.schemas.investment import (
    ProjectionRequest,
    ProjectionResponse,
    RateComparisonRequest,
    RateRangeRequest,
    RequiredContributionRequest,
    RequiredContributionResponse,
    ScenarioRequest,
    TargetIncomeRequest,
    TimeToTargetRequest,
    TimeToTargetResponse,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected %s: %d validation error(s)", request.path, exc.error_count())
    detail = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(ProjectionInputError)
def _handle_projection_error(exc: ProjectionInputError):
    logger.warning("rejected %s: %s", request.path, exc)
    return jsonify({"detail": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    return jsonify(get_health().model_dump())


@api_bp.post("/invest/projection")
def projection() -> Any:
    """Summary, ledger and (optionally) rate comparisons for one scenario.

    view "monthly" (default) folds daily compounding into one row per month;
    "detailed" returns every compounding period.
    """
    settings = get_settings()
    payload = ProjectionRequest.model_validate(_payload())
    scenario = payload.scenario
    view = payload.view or settings.default_view

    if view == "detailed":
        schedule = generate_schedule(scenario, start_date=payload.start_date)
    else:
        schedule = generate_monthly_schedule(scenario, start_date=payload.start_date)

    response = ProjectionResponse(summary=calculate_summary(scenario), schedule=schedule)
    if payload.rate_candidates:
        candidates = dedupe_rate_candidates(
            scenario.annual_rate, payload.rate_candidates, settings.rate_tolerance
        )
        response.rate_comparisons = compare_rates(scenario, candidates)

    logger.info("projection: %d %s rows", len(schedule), view)
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/invest/summary")
def summary() -> Any:
    payload = ScenarioRequest.model_validate(_payload())
    return jsonify(calculate_summary(payload.scenario).model_dump(mode="json"))


@api_bp.post("/invest/rate-comparisons")
def rate_comparisons() -> Any:
    payload = RateComparisonRequest.model_validate(_payload())
    candidates = dedupe_rate_candidates(
        payload.scenario.annual_rate, payload.candidates, get_settings().rate_tolerance
    )
    results = compare_rates(payload.scenario, candidates)
    return jsonify([result.model_dump(mode="json") for result in results])


@api_bp.post("/invest/rate-range")
def rate_range() -> Any:
    payload = RateRangeRequest.model_validate(_payload())
    results = compare_rate_range(
        payload.scenario,
        payload.min_rate,
        payload.max_rate,
        payload.step,
        tolerance=get_settings().rate_tolerance,
    )
    return jsonify([result.model_dump(mode="json") for result in results])


@api_bp.post("/invest/target-income")
def target_income() -> Any:
    payload = TargetIncomeRequest.model_validate(_payload())
    result = solve_target_income(payload.annual_rate, payload.target_monthly_income)
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/invest/time-to-target")
def time_to_target() -> Any:
    payload = TimeToTargetRequest.model_validate(_payload())
    months = months_to_target(
        payload.target_amount,
        payload.initial_amount,
        payload.monthly_contribution,
        payload.annual_rate,
        payload.compounding_frequency,
    )
    response = TimeToTargetResponse(months=months, reachable=months is not None)
    return jsonify(response.model_dump())


@api_bp.post("/invest/required-contribution")
def required_contribution() -> Any:
    payload = RequiredContributionRequest.model_validate(_payload())
    amount = required_monthly_contribution(
        payload.target_amount,
        payload.initial_amount,
        payload.term_months,
        payload.annual_rate,
        payload.compounding_frequency,
    )
    return jsonify(RequiredContributionResponse(monthly_contribution=amount).model_dump())
