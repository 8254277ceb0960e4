"""Data contracts for compound-interest simulations."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.config import DEFAULT_TARGET, MAX_HORIZON_MONTHS


class RateUnit(str, Enum):
    YEARLY = "yearly"
    MONTHLY = "monthly"


class DurationUnit(str, Enum):
    YEARS = "years"
    MONTHS = "months"


class CalculationMode(str, Enum):
    FORWARD = "FORWARD"  # project the final balance
    SOLVE_DURATION = "SOLVE_DURATION"  # months needed to reach the target
    SOLVE_CONTRIBUTION = "SOLVE_CONTRIBUTION"  # monthly deposit needed to reach the target


class RateSpec(BaseModel):
    """Interest rate as typed by the user, in percent."""

    model_config = ConfigDict(extra="forbid")

    value: float = Field(..., ge=0, description="Rate in percent (e.g. 12 for 12%).")
    unit: RateUnit = RateUnit.YEARLY


class DurationSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: float = Field(..., ge=0)
    unit: DurationUnit = DurationUnit.YEARS

    @property
    def months(self) -> float:
        if self.unit == DurationUnit.YEARS:
            return self.value * 12
        return self.value

    @model_validator(mode="after")
    def ensure_bounded(self) -> "DurationSpec":
        if self.months > MAX_HORIZON_MONTHS:
            raise ValueError(f"duration must not exceed {MAX_HORIZON_MONTHS} months")
        return self


class SimulationRequest(BaseModel):
    """Inputs collected by the calculator form."""

    model_config = ConfigDict(extra="forbid")

    initialCapital: float = Field(..., ge=0)
    monthlyContribution: float = Field(
        0.0,
        ge=0,
        description="Deposit made at the end of every month. Derived in SOLVE_CONTRIBUTION mode.",
    )
    rate: RateSpec
    duration: DurationSpec = Field(default_factory=lambda: DurationSpec(value=0))
    mode: CalculationMode = CalculationMode.FORWARD
    target: float = Field(DEFAULT_TARGET, gt=0)

    @model_validator(mode="after")
    def ensure_solvable(self) -> "SimulationRequest":
        if self.mode == CalculationMode.SOLVE_CONTRIBUTION and self.duration.value <= 0:
            raise ValueError("duration must be greater than zero to solve for the monthly contribution")
        return self


class MonthlySample(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthIndex: int = Field(..., ge=1)
    yearIndex: int = Field(..., ge=1)
    cumulativeInvested: float
    interestThisMonth: float
    cumulativeInterest: float
    balance: float


class YearlySample(BaseModel):
    """Year close-out. The last entry may cover a partial year."""

    model_config = ConfigDict(frozen=True)

    yearIndex: int = Field(..., ge=1)
    cumulativeInvested: float
    cumulativeInterest: float
    balance: float
    investedThisYear: float
    interestThisYear: float


class SimulationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    totalInvested: float
    totalInterest: float
    totalAmount: float
    horizonMonths: int = Field(..., ge=0)
    monthly: List[MonthlySample] = Field(default_factory=list)
    yearly: List[YearlySample] = Field(default_factory=list)


class HorizonBreakdown(BaseModel):
    """Figures the results banner shows next to the totals."""

    model_config = ConfigDict(frozen=True)

    years: int
    months: int
    returnOnInvestedPct: float


class CalculationOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: CalculationMode
    monthlyRate: float
    horizonMonths: int
    monthlyContribution: float
    target: float
    targetReached: bool
    summary: HorizonBreakdown
    result: SimulationResult


class MonthlyRateResponse(BaseModel):
    monthlyRate: float
