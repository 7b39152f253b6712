from __future__ import annotations

from collections.abc import Iterator

from .grid import AxisRange, grid_points
from .types import Metric, Point


def circle_residual(d: Metric, x: Point, center: Point, radius: float) -> float:
    return abs(d(x, center) - radius)


def ellipse_residual(
    d: Metric, x: Point, f1: Point, f2: Point, target_sum: float
) -> float:
    return abs(d(x, f1) + d(x, f2) - target_sum)


def on_circle(d: Metric, eps: float, x: Point, center: Point, radius: float) -> bool:
    """
    |d(x, center) - radius| < eps.
    The candidate goes first: several catalog metrics are not symmetric.
    A NaN residual compares False and simply rejects the point.
    """
    return circle_residual(d, x, center, radius) < eps


def on_ellipse(
    d: Metric, eps: float, x: Point, f1: Point, f2: Point, target_sum: float
) -> bool:
    """|d(x, f1) + d(x, f2) - target_sum| < eps."""
    return ellipse_residual(d, x, f1, f2, target_sum) < eps


def circle_points_on_grid(
    d: Metric,
    eps: float,
    xs: AxisRange,
    ys: AxisRange,
    center: Point,
    radius: float,
) -> Iterator[Point]:
    for p in grid_points(xs, ys):
        if on_circle(d, eps, p, center, radius):
            yield p
