"""Mode dispatch: pick a solver, then run the forward simulation."""

from __future__ import annotations

import logging
from math import isclose
from typing import List, Optional

from backend.config import SAFETY_HORIZON_MONTHS
from backend.core.compound import simulate, solve_contribution, solve_duration
from backend.core.rates import to_monthly_rate, to_months
from backend.schemas.simulation import (
    CalculationMode,
    CalculationOutcome,
    HorizonBreakdown,
    SimulationRequest,
    SimulationResult,
)

logger = logging.getLogger(__name__)


class CalculationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def _reached(amount: float, target: float) -> bool:
    # a solved contribution can land a few ulps under the target
    return amount >= target or isclose(amount, target, rel_tol=1e-9)


def summarize(result: SimulationResult) -> HorizonBreakdown:
    if result.totalInvested > 0:
        return_pct = result.totalInterest / result.totalInvested * 100
    else:
        return_pct = 0.0
    return HorizonBreakdown(
        years=result.horizonMonths // 12,
        months=result.horizonMonths % 12,
        returnOnInvestedPct=return_pct,
    )


def run_calculation(
    request: SimulationRequest,
    safety_horizon: Optional[int] = None,
) -> CalculationOutcome:
    """
    Resolve the request into (contribution, months) for its mode and simulate.

      FORWARD            -> months from the duration, contribution as given
      SOLVE_DURATION     -> months solved, duration ignored
      SOLVE_CONTRIBUTION -> contribution solved, request contribution ignored
    """
    if safety_horizon is None:
        safety_horizon = SAFETY_HORIZON_MONTHS

    monthly_rate = to_monthly_rate(request.rate)
    contribution = request.monthlyContribution
    logger.debug("dispatching %s calculation at monthly rate %.8f", request.mode.value, monthly_rate)

    if request.mode == CalculationMode.SOLVE_DURATION:
        months = solve_duration(
            request.initialCapital,
            contribution,
            monthly_rate,
            request.target,
            max_months=safety_horizon,
        )
        if months == 0 and request.initialCapital < request.target:
            logger.warning("target %.2f is unreachable without growth or contributions", request.target)
        elif months >= safety_horizon:
            logger.warning("duration solver stopped at the %d-month safety horizon", safety_horizon)
    elif request.mode == CalculationMode.SOLVE_CONTRIBUTION:
        months = to_months(request.duration)
        if months <= 0:
            raise CalculationError(["duration must cover at least one month to solve for the monthly contribution"])
        contribution = solve_contribution(
            request.initialCapital,
            monthly_rate,
            months,
            request.target,
        )
    else:
        months = to_months(request.duration)

    result = simulate(request.initialCapital, contribution, monthly_rate, months)

    return CalculationOutcome(
        mode=request.mode,
        monthlyRate=monthly_rate,
        horizonMonths=months,
        monthlyContribution=contribution,
        target=request.target,
        targetReached=_reached(result.totalAmount, request.target),
        summary=summarize(result),
        result=result,
    )
