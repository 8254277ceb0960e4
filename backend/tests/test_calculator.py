from __future__ import annotations

import logging
from math import isclose

import pytest

from backend.core.calculator import CalculationError, run_calculation
from backend.schemas.simulation import (
    CalculationMode,
    DurationSpec,
    DurationUnit,
    RateSpec,
    RateUnit,
    SimulationRequest,
)


def make_request(**overrides) -> SimulationRequest:
    payload = {
        "initialCapital": 1000.0,
        "monthlyContribution": 500.0,
        "rate": RateSpec(value=10, unit=RateUnit.YEARLY),
        "duration": DurationSpec(value=10, unit=DurationUnit.YEARS),
    }
    payload.update(overrides)
    return SimulationRequest(**payload)


def test_forward_mode_uses_duration_and_contribution():
    outcome = run_calculation(make_request())

    assert outcome.mode == CalculationMode.FORWARD
    assert outcome.horizonMonths == 120
    assert outcome.monthlyContribution == 500.0
    assert outcome.result.totalInvested == 1000.0 + 500.0 * 120
    assert len(outcome.result.yearly) == 10
    assert outcome.summary.years == 10
    assert outcome.summary.months == 0
    assert outcome.summary.returnOnInvestedPct > 0
    assert outcome.targetReached is False


def test_forward_mode_with_zero_growth_has_no_return():
    outcome = run_calculation(
        make_request(
            rate=RateSpec(value=0),
            duration=DurationSpec(value=12, unit=DurationUnit.MONTHS),
        )
    )

    assert outcome.result.totalAmount == 7000.0
    assert outcome.summary.returnOnInvestedPct == 0.0


def test_solve_duration_ignores_requested_duration():
    outcome = run_calculation(
        make_request(
            initialCapital=0.0,
            monthlyContribution=1000.0,
            rate=RateSpec(value=0),
            mode=CalculationMode.SOLVE_DURATION,
        )
    )

    assert outcome.horizonMonths == 1000
    assert outcome.summary.years == 83
    assert outcome.summary.months == 4
    assert outcome.result.totalAmount == 1_000_000.0
    assert outcome.targetReached is True


def test_solve_duration_unreachable_target_yields_empty_projection():
    outcome = run_calculation(
        make_request(
            initialCapital=0.0,
            monthlyContribution=0.0,
            rate=RateSpec(value=0),
            mode=CalculationMode.SOLVE_DURATION,
        )
    )

    assert outcome.horizonMonths == 0
    assert outcome.result.monthly == []
    assert outcome.targetReached is False


def test_solve_duration_respects_safety_horizon():
    outcome = run_calculation(
        make_request(
            initialCapital=0.0,
            monthlyContribution=1.0,
            rate=RateSpec(value=0),
            mode=CalculationMode.SOLVE_DURATION,
        ),
        safety_horizon=36,
    )

    assert outcome.horizonMonths == 36
    assert outcome.targetReached is False


def test_solve_contribution_reaches_target():
    outcome = run_calculation(
        make_request(
            monthlyContribution=0.0,
            mode=CalculationMode.SOLVE_CONTRIBUTION,
            duration=DurationSpec(value=20, unit=DurationUnit.YEARS),
            target=250_000.0,
        )
    )

    assert outcome.horizonMonths == 240
    assert outcome.monthlyContribution > 0
    assert outcome.result.monthly[0].cumulativeInvested == 1000.0 + outcome.monthlyContribution
    assert isclose(outcome.result.totalAmount, 250_000.0, rel_tol=1e-9)
    assert outcome.targetReached is True


def test_solve_contribution_is_zero_when_capital_suffices():
    outcome = run_calculation(
        make_request(
            initialCapital=1_000_000.0,
            rate=RateSpec(value=1, unit=RateUnit.MONTHLY),
            duration=DurationSpec(value=12, unit=DurationUnit.MONTHS),
            mode=CalculationMode.SOLVE_CONTRIBUTION,
        )
    )

    assert outcome.monthlyContribution == 0.0
    assert outcome.result.totalInvested == 1_000_000.0
    assert outcome.targetReached is True


def test_solve_contribution_rejects_sub_month_horizon():
    request = make_request(
        mode=CalculationMode.SOLVE_CONTRIBUTION,
        duration=DurationSpec(value=0.2, unit=DurationUnit.MONTHS),
    )

    with pytest.raises(CalculationError) as excinfo:
        run_calculation(request)

    assert excinfo.value.errors


def test_request_rejects_zero_duration_when_solving_contribution():
    with pytest.raises(ValueError):
        make_request(
            mode=CalculationMode.SOLVE_CONTRIBUTION,
            duration=DurationSpec(value=0),
        )


def test_request_rejects_negative_inputs():
    with pytest.raises(ValueError):
        make_request(initialCapital=-1.0)
    with pytest.raises(ValueError):
        RateSpec(value=-0.5)


def test_unreachable_target_logs_warning(caplog):
    request = make_request(
        initialCapital=0.0,
        monthlyContribution=0.0,
        rate=RateSpec(value=0),
        mode=CalculationMode.SOLVE_DURATION,
    )

    with caplog.at_level(logging.WARNING, logger="backend.core.calculator"):
        run_calculation(request)

    assert any("unreachable" in record.getMessage() for record in caplog.records)


def test_safety_horizon_logs_warning(caplog):
    request = make_request(
        initialCapital=0.0,
        monthlyContribution=1.0,
        rate=RateSpec(value=0),
        mode=CalculationMode.SOLVE_DURATION,
    )

    with caplog.at_level(logging.WARNING, logger="backend.core.calculator"):
        run_calculation(request, safety_horizon=12)

    assert any("12-month safety horizon" in record.getMessage() for record in caplog.records)


def test_reachable_target_logs_no_warning(caplog):
    request = make_request(
        initialCapital=0.0,
        monthlyContribution=1000.0,
        rate=RateSpec(value=0),
        mode=CalculationMode.SOLVE_DURATION,
    )

    with caplog.at_level(logging.WARNING, logger="backend.core.calculator"):
        run_calculation(request)

    assert not caplog.records


def test_solve_contribution_survives_overflowing_growth():
    outcome = run_calculation(
        make_request(
            initialCapital=0.0,
            rate=RateSpec(value=10000, unit=RateUnit.MONTHLY),
            duration=DurationSpec(value=100, unit=DurationUnit.YEARS),
            mode=CalculationMode.SOLVE_CONTRIBUTION,
        )
    )

    assert outcome.monthlyContribution == 0.0
    assert outcome.horizonMonths == 1200
