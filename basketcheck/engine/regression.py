# basketcheck/engine/regression.py

"""Ordinary least-squares line fitting."""

from collections.abc import Sequence

from basketcheck.models.analytics import RegressionResult


def linear_regression(
    points: Sequence[tuple[float, float]],
) -> RegressionResult:
    """Fit ``y = slope * x + intercept`` to *points*.

    A single point (or none) yields a flat line through that point
    (or through zero). When every ``x`` is equal the slope is zero and
    the intercept is the mean of ``y``.
    """
    n = len(points)
    if n <= 1:
        return RegressionResult(0.0, points[0][1] if points else 0.0)

    sum_x = sum(x for x, _ in points)
    sum_y = sum(y for _, y in points)
    sum_xy = sum(x * y for x, y in points)
    sum_x2 = sum(x * x for x, _ in points)

    denom = n * sum_x2 - sum_x * sum_x
    if denom == 0:
        return RegressionResult(0.0, sum_y / n)

    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    return RegressionResult(slope, intercept)
