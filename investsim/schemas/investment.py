"""Data contracts for investment projections."""

from __future__ import annotations

from datetime import date as Date
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


MAX_TERM_MONTHS = 600
# range comparisons round rates to 2 decimals
MIN_RATE_STEP = 0.01


class CompoundingFrequency(str, Enum):
    MONTHLY = "monthly"
    DAILY = "daily"


def _money(value: float) -> float:
    return round(value, 2)


class ScenarioInput(BaseModel):
    """Inputs for one investment scenario. Immutable once built."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    initial_amount: float = Field(..., ge=0, description="Starting principal.")
    monthly_contribution: float = Field(
        0.0,
        ge=0,
        description="Amount deposited once per month, whatever the compounding frequency.",
    )
    term_months: int = Field(..., ge=0, le=MAX_TERM_MONTHS, description="Duration in months.")
    annual_rate: float = Field(
        ...,
        ge=0,
        le=100,
        description="Effective annual rate (EA) as a percentage, e.g. 8.25 for 8.25%.",
    )
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY


class PeriodDetail(BaseModel):
    """One row of a projection ledger (a day or a month)."""

    model_config = ConfigDict(extra="forbid")

    period_number: int = Field(..., ge=1)
    date: Date
    opening_balance: float
    contribution: float
    interest_earned: float
    closing_balance: float
    cumulative_contributions: float
    cumulative_interest: float

    @field_serializer(
        "opening_balance",
        "contribution",
        "interest_earned",
        "closing_balance",
        "cumulative_contributions",
        "cumulative_interest",
        when_used="json",
    )
    def serialize_money(self, value: float) -> float:
        return _money(value)


class InvestmentSummary(BaseModel):
    """Totals for a scenario. Interest is always the residual of the balance."""

    model_config = ConfigDict(extra="forbid")

    final_balance: float
    total_contributions: float
    total_monthly_contributions: float
    total_interest_earned: float
    initial_amount: float
    annual_rate: float
    effective_monthly_rate: float
    effective_daily_rate: float
    term_months: int
    compounding_frequency: CompoundingFrequency

    @field_serializer(
        "final_balance",
        "total_contributions",
        "total_monthly_contributions",
        "total_interest_earned",
        "initial_amount",
        when_used="json",
    )
    def serialize_money(self, value: float) -> float:
        return _money(value)

    @field_serializer("effective_monthly_rate", "effective_daily_rate", when_used="json")
    def serialize_rate(self, value: float) -> float:
        return round(value, 8)


class RateCandidate(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    rate: float = Field(..., ge=0, le=100)
    label: Optional[str] = Field(default=None, max_length=100)


class RateComparisonResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rate: float
    label: Optional[str] = None
    is_base_rate: bool
    final_balance: float
    total_interest_earned: float
    difference_from_base: float

    @field_serializer(
        "final_balance", "total_interest_earned", "difference_from_base", when_used="json"
    )
    def serialize_money(self, value: float) -> float:
        return _money(value)


class TargetIncomeResult(BaseModel):
    """Capital whose monthly interest alone pays the target income.

    When the rate is zero the capital is not computable: ``computable`` is
    False and ``required_capital`` holds the sentinel 0.0.
    """

    model_config = ConfigDict(extra="forbid")

    required_capital: float
    monthly_rate: float
    annual_rate: float
    target_monthly_income: float
    annual_income: float
    computable: bool

    @field_serializer("required_capital", "target_monthly_income", "annual_income", when_used="json")
    def serialize_money(self, value: float) -> float:
        return _money(value)


# -----------------------------
# HTTP request / response bodies
# -----------------------------


class ScenarioRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    scenario: ScenarioInput


class ProjectionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    scenario: ScenarioInput
    view: Optional[Literal["monthly", "detailed"]] = None
    start_date: Optional[Date] = None
    rate_candidates: List[RateCandidate] = Field(default_factory=list)


class ProjectionResponse(BaseModel):
    summary: InvestmentSummary
    schedule: List[PeriodDetail]
    rate_comparisons: Optional[List[RateComparisonResult]] = None


class RateComparisonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    scenario: ScenarioInput
    candidates: List[RateCandidate] = Field(default_factory=list)


class RateRangeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    scenario: ScenarioInput
    min_rate: float = Field(..., ge=0, le=100)
    max_rate: float = Field(..., ge=0, le=100)
    step: float = Field(0.5, ge=MIN_RATE_STEP, le=100)

    @model_validator(mode="after")
    def ensure_ordered(self) -> "RateRangeRequest":
        if self.max_rate < self.min_rate:
            raise ValueError("max_rate must not be lower than min_rate")
        return self


class TargetIncomeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    annual_rate: float = Field(..., ge=0, le=100)
    target_monthly_income: float = Field(..., ge=0)


class TimeToTargetRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    target_amount: float = Field(..., ge=0)
    initial_amount: float = Field(..., ge=0)
    monthly_contribution: float = Field(0.0, ge=0)
    annual_rate: float = Field(..., ge=0, le=100)
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY


class TimeToTargetResponse(BaseModel):
    months: Optional[int] = None
    reachable: bool


class RequiredContributionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    target_amount: float = Field(..., ge=0)
    initial_amount: float = Field(..., ge=0)
    term_months: int = Field(..., ge=1, le=MAX_TERM_MONTHS)
    annual_rate: float = Field(..., ge=0, le=100)
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY


class RequiredContributionResponse(BaseModel):
    monthly_contribution: float
