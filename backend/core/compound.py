"""Compound-interest engine: forward simulation and the two target solvers."""

from __future__ import annotations

from typing import List, Optional, Tuple

from backend.config import SAFETY_HORIZON_MONTHS
from backend.schemas.simulation import MonthlySample, SimulationResult, YearlySample

# Solvers aim for one million unless told otherwise.
MILLION = 1_000_000.0


def _accrue(balance: float, monthly_rate: float, contribution: float) -> Tuple[float, float]:
    """Advance one month: interest on the opening balance, then the deposit.

    The deposit is made at month end and earns nothing that month. Both the
    simulator and the duration solver step through here so they compound
    identically.
    """
    interest = balance * monthly_rate
    return interest, balance + interest + contribution


def simulate(
    initial_capital: float,
    monthly_contribution: float,
    monthly_rate: float,
    horizon_months: int,
) -> SimulationResult:
    """
    Build the month-by-month and year-by-year trajectory in a single pass.

    Order of operations (per month):
      1) Interest on the balance carried in from last month.
      2) Add interest and the month-end contribution.
      3) Record a MonthlySample.
      4) On month 12, 24, ... or the final month, close out a YearlySample.

    Year 1's investedThisYear includes the initial capital.
    """
    balance = float(initial_capital)
    total_invested = float(initial_capital)

    monthly: List[MonthlySample] = []
    yearly: List[YearlySample] = []

    year_invested = 0.0
    year_interest = 0.0

    for month in range(1, horizon_months + 1):
        interest, balance = _accrue(balance, monthly_rate, monthly_contribution)
        total_invested += monthly_contribution

        year_invested += monthly_contribution
        year_interest += interest

        year_index = (month + 11) // 12
        monthly.append(
            MonthlySample(
                monthIndex=month,
                yearIndex=year_index,
                cumulativeInvested=total_invested,
                interestThisMonth=interest,
                cumulativeInterest=balance - total_invested,
                balance=balance,
            )
        )

        if month % 12 == 0 or month == horizon_months:
            if year_index == 1:
                invested_this_year = year_invested + initial_capital
            else:
                invested_this_year = year_invested

            yearly.append(
                YearlySample(
                    yearIndex=year_index,
                    cumulativeInvested=total_invested,
                    cumulativeInterest=balance - total_invested,
                    balance=balance,
                    investedThisYear=invested_this_year,
                    interestThisYear=year_interest,
                )
            )
            year_invested = 0.0
            year_interest = 0.0

    return SimulationResult(
        totalInvested=total_invested,
        totalInterest=balance - total_invested,
        totalAmount=balance,
        horizonMonths=horizon_months,
        monthly=monthly,
        yearly=yearly,
    )


def solve_duration(
    initial_capital: float,
    monthly_contribution: float,
    monthly_rate: float,
    target: float = MILLION,
    max_months: Optional[int] = None,
) -> int:
    """Smallest month count whose balance reaches ``target``.

    Returns 0 when the target can never be reached (no deposits, no growth,
    capital below target) and ``max_months`` when the cap is hit first.
    """
    if max_months is None:
        max_months = SAFETY_HORIZON_MONTHS

    if monthly_contribution <= 0 and initial_capital < target and monthly_rate <= 0:
        return 0

    current = float(initial_capital)
    months = 0
    while current < target and months < max_months:
        _, current = _accrue(current, monthly_rate, monthly_contribution)
        months += 1
    return months


def solve_contribution(
    initial_capital: float,
    monthly_rate: float,
    horizon_months: int,
    target: float = MILLION,
) -> float:
    """
    Constant month-end deposit that grows to ``target`` over ``horizon_months``.

    FV = P*(1+r)^n + PMT * ((1+r)^n - 1) / r, solved for PMT. The caller
    must not pass a zero-month horizon. When the growth factor overflows a
    float, both the lump sum and the annuity factor are unbounded and no
    deposit is needed.
    """
    try:
        growth = (1 + monthly_rate) ** horizon_months
    except OverflowError:
        return 0.0
    remainder = target - initial_capital * growth

    if remainder <= 0:
        return 0.0

    if monthly_rate == 0:
        return remainder / horizon_months

    annuity_factor = (growth - 1) / monthly_rate
    return remainder / annuity_factor


__all__ = [
    "simulate",
    "solve_duration",
    "solve_contribution",
]
