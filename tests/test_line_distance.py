import pytest

from src.metricloci.cancel import CancelToken
from src.metricloci.errors import LocusCancelled
from src.metricloci.line_distance import estimate_line_distance, on_parabola
from src.metricloci.metrics import euclidean, taxicab
from src.metricloci.types import Line

X_AXIS = Line(0.0, 0.0)
FOCUS = (0.0, 1.0)


class CountingMetric:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, a: tuple[float, float], b: tuple[float, float]) -> float:
        self.calls += 1
        return euclidean(a, b)


def test_estimate_finds_distance_to_x_axis() -> None:
    est = estimate_line_distance(euclidean, 0.1, (1.0, 1.0), FOCUS, X_AXIS)
    assert est.outcome == "found"
    assert est.found
    assert est.distance == pytest.approx(1.0)
    # r = 0 and r = 1.0
    assert est.iterations == 2


def test_estimate_exact_line_membership() -> None:
    est = estimate_line_distance(
        euclidean, 0.1, (1.0, 1.0), FOCUS, X_AXIS, line_tolerance=0.0
    )
    assert est.outcome == "found"
    assert est.distance == pytest.approx(1.0)


def test_estimate_uses_line_intercept() -> None:
    # Directrix y = 1; a check against y = slope*x + slope would look at y = 0.
    line = Line(0.0, 1.0)
    est = estimate_line_distance(euclidean, 0.1, (1.0, 2.0), (0.0, 2.0), line)
    assert est.outcome == "found"
    assert est.distance == pytest.approx(1.0)
    assert on_parabola(euclidean, 0.1, (1.0, 2.0), (0.0, 2.0), line)


def test_estimate_ceiling_rejects_without_growing_circles() -> None:
    metric = CountingMetric()
    # max radius 0.5 is far below the focus distance 4.5
    est = estimate_line_distance(metric, 0.1, (0.0, 0.5), (0.0, 5.0), X_AXIS)
    assert est.outcome == "ceiling"
    assert est.distance is None
    assert est.iterations == 0
    assert metric.calls == 2


def test_estimate_overshoot_stops_growth() -> None:
    est = estimate_line_distance(euclidean, 0.1, (0.0, 3.0), (0.0, 3.0), X_AXIS)
    assert est.outcome == "overshoot"
    assert est.iterations == 1


def test_no_line_point_found_is_rejected() -> None:
    # Focus distance 0.02 < eps, but no circle ever reaches the line.
    point = (0.0, 0.5)
    focus = (0.0, 0.52)
    est = estimate_line_distance(euclidean, 0.1, point, focus, X_AXIS)
    assert est.outcome == "exhausted"
    assert est.distance is None
    assert not on_parabola(euclidean, 0.1, point, focus, X_AXIS)


def test_on_parabola_euclidean() -> None:
    assert on_parabola(euclidean, 0.1, (1.0, 1.0), FOCUS, X_AXIS)
    assert on_parabola(euclidean, 0.1, (-1.0, 1.0), FOCUS, X_AXIS)
    assert not on_parabola(euclidean, 0.1, (0.0, 1.0), FOCUS, X_AXIS)


def test_estimate_honours_cancel_token() -> None:
    token = CancelToken()
    token.cancel()
    with pytest.raises(LocusCancelled):
        estimate_line_distance(euclidean, 0.1, (1.0, 1.0), FOCUS, X_AXIS, cancel=token)


def test_estimate_sloped_directrix() -> None:
    # y = x + 1; nearest taxicab point from (1, 0) is 2 away, e.g. (0, 1).
    est = estimate_line_distance(taxicab, 0.1, (1.0, 0.0), (1.0, 2.0), Line(1.0, 1.0))
    assert est.outcome == "found"
    assert est.distance == pytest.approx(2.0)
    assert est.iterations == 3


def test_estimate_slope_term_is_applied() -> None:
    # y = x touches the unit taxicab circle around (1, 0) at the origin. A line
    # without its slope (y = 0) would pass through (1, 0) itself, and
    # y = slope*x + slope (y = x + 1) lies 2 away, beyond the search ceiling.
    line = Line(1.0, 0.0)
    est = estimate_line_distance(taxicab, 0.1, (1.0, 0.0), (1.0, 1.0), line)
    assert est.outcome == "found"
    assert est.distance == pytest.approx(1.0)
    assert est.iterations == 2
    assert on_parabola(taxicab, 0.1, (1.0, 0.0), (1.0, 1.0), line)
