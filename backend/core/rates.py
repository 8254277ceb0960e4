"""Rate and duration normalization."""

import math

from backend.schemas.simulation import DurationSpec, RateSpec, RateUnit


def to_monthly_rate(rate: RateSpec) -> float:
    """Return the effective monthly rate as a decimal.

    Yearly rates use the twelfth-root transform, (1 + r)^12 = 1 + yearly,
    so 12% a year becomes ~0.9489% a month rather than 1%.
    """
    decimal_rate = rate.value / 100
    if rate.unit == RateUnit.MONTHLY:
        return decimal_rate
    return (1 + decimal_rate) ** (1 / 12) - 1


def to_months(duration: DurationSpec) -> int:
    # only whole months are simulated; a trailing fraction is dropped
    return math.floor(duration.months)
