from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from jaxtyping import jaxtyped

from .cancel import CancelToken
from .grid import AxisRange
from .predicates import circle_points_on_grid
from .types import Line, Metric, Point, typechecker

Outcome = Literal["found", "ceiling", "overshoot", "exhausted"]

# Radii grow ten times coarser than the acceptance tolerance.
RADIUS_STEP_FACTOR = 10.0


@dataclass(frozen=True)
class LineDistance:
    distance: float | None
    distance_to_focus: float
    iterations: int
    outcome: Outcome

    @property
    def found(self) -> bool:
        return self.distance is not None


def touches_line(p: Point, line: Line, tolerance: float) -> bool:
    return abs(p[1] - line.y_at(p[0])) <= tolerance


@jaxtyped(typechecker=typechecker)
def estimate_line_distance(
    d: Metric,
    eps: float,
    point: Point,
    focus: Point,
    line: Line,
    *,
    line_tolerance: float | None = None,
    cancel: CancelToken | None = None,
) -> LineDistance:
    """
    Distance from `point` to `line` under an arbitrary metric, found by growing
    circles around `point` until one of their grid points lands on the line.

    The search ceiling is d(point, (0, intercept)): a point of the line, not
    necessarily the nearest one under d. Radii step by 10*eps; each circle is
    sampled on the square sub-grid [x-r, x+r] x [y-r, y+r] at step eps. The
    focus distance bounds the search from both sides, since a parabola point
    needs the two distances within eps of each other.

    Cost per candidate is O(r/(10 eps)) circles of O((2r/eps)^2) metric calls
    each, which dominates parabola rendering.

    line_tolerance: how far (in y) a circle point may sit from the line and still
    count as on it. Defaults to eps/2; 0.0 demands exact equality.
    """
    tol = eps / 2.0 if line_tolerance is None else line_tolerance
    distance_to_focus = d(focus, point)
    max_radius = d(point, (0.0, float(line.intercept)))

    if max_radius - distance_to_focus + eps < 0:
        return LineDistance(None, distance_to_focus, 0, "ceiling")

    iterations = 0
    for r in AxisRange(0.0, eps * RADIUS_STEP_FACTOR, max_radius).values():
        r = float(r)
        if cancel is not None:
            cancel.raise_if_cancelled()
        if r - distance_to_focus - eps > 0:
            return LineDistance(None, distance_to_focus, iterations, "overshoot")

        iterations += 1
        xs = AxisRange(point[0] - r, eps, point[0] + r)
        ys = AxisRange(point[1] - r, eps, point[1] + r)
        for p in circle_points_on_grid(d, eps, xs, ys, point, r):
            if touches_line(p, line, tol):
                return LineDistance(r, distance_to_focus, iterations, "found")

    return LineDistance(None, distance_to_focus, iterations, "exhausted")


def on_parabola(
    d: Metric,
    eps: float,
    x: Point,
    focus: Point,
    line: Line,
    *,
    line_tolerance: float | None = None,
    cancel: CancelToken | None = None,
) -> bool:
    """|d(focus, x) - distance(x, line)| < eps; rejected when no line point is found."""
    est = estimate_line_distance(
        d, eps, x, focus, line, line_tolerance=line_tolerance, cancel=cancel
    )
    if est.distance is None:
        return False
    return abs(est.distance_to_focus - est.distance) < eps
