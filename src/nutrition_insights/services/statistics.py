"""Statistics helpers used by the weekly analyzers."""

import math
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Regression:
    """Least-squares fit of ``y = slope * index + intercept``."""

    slope: float
    intercept: float
    r_squared: float


def mean(values: Sequence[float]) -> float:
    """Return the arithmetic mean, or 0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def standard_deviation(values: Sequence[float]) -> float:
    """Return the sample standard deviation (n - 1), or 0 below two values."""
    count = len(values)
    if count < 2:
        return 0.0
    avg = mean(values)
    variance = sum((value - avg) ** 2 for value in values) / (count - 1)
    return math.sqrt(variance)


def coefficient_of_variation(values: Sequence[float]) -> float:
    """Return the standard deviation as a percentage of the mean.

    A zero mean yields 0 rather than an undefined value.
    """
    avg = mean(values)
    if avg == 0:
        return 0.0
    return standard_deviation(values) / avg * 100


def linear_regression(values: Sequence[float]) -> Regression:
    """Fit a line over ``values`` using their positions 0..n-1 as x.

    Order matters: the index encodes time.
    """
    count = len(values)
    if count < 2:
        intercept = float(values[0]) if values else 0.0
        return Regression(slope=0.0, intercept=intercept, r_squared=0.0)

    x_mean = (count - 1) / 2
    y_mean = mean(values)
    ss_xy = 0.0
    ss_xx = 0.0
    for index, value in enumerate(values):
        ss_xy += (index - x_mean) * (value - y_mean)
        ss_xx += (index - x_mean) ** 2
    if ss_xx == 0:
        return Regression(slope=0.0, intercept=y_mean, r_squared=0.0)

    slope = ss_xy / ss_xx
    intercept = y_mean - slope * x_mean
    ss_total = sum((value - y_mean) ** 2 for value in values)
    if ss_total == 0:
        return Regression(slope=slope, intercept=intercept, r_squared=0.0)
    ss_residual = sum(
        (value - (slope * index + intercept)) ** 2 for index, value in enumerate(values)
    )
    return Regression(
        slope=slope,
        intercept=intercept,
        r_squared=1 - ss_residual / ss_total,
    )


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to the inclusive range [low, high]."""
    return max(low, min(high, value))
