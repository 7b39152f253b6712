from __future__ import annotations

import math

import numpy as np

from .errors import MetricConfigError
from .types import Metric, Point

__all__ = [
    "euclidean",
    "taxicab",
    "pnorm",
    "post_office",
    "los_angeles",
    "british_rail",
    "radial_arc",
    "hamming",
    "METRICS",
    "get_metric",
]


def _norm(p: Point) -> float:
    return math.hypot(p[0], p[1])


def euclidean(x: Point, y: Point) -> float:
    return math.hypot(x[0] - y[0], x[1] - y[1])


def taxicab(x: Point, y: Point) -> float:
    return abs(x[0] - y[0]) + abs(x[1] - y[1])


def pnorm(p: float) -> Metric:
    """(|x1 - y1|^p + |x2 - y2|^p)^(1/p)."""
    if not math.isfinite(p) or p < 1:
        raise MetricConfigError(f"p must be finite and >= 1, got {p}")
    p = float(p)

    def metric(x: Point, y: Point) -> float:
        return (abs(x[0] - y[0]) ** p + abs(x[1] - y[1]) ** p) ** (1.0 / p)

    metric.__name__ = f"pnorm_{p:g}"
    return metric


def post_office(x: Point, y: Point) -> float:
    """Every trip goes through the origin: max(|x|, |y|), zero only for x == y."""
    if x[0] == y[0] and x[1] == y[1]:
        return 0.0
    return max(_norm(x), _norm(y))


def los_angeles(x: Point, y: Point) -> float:
    """Vertical streets only on the x axis unless both points share a column."""
    if x[0] - y[0] == 0:
        return abs(x[1] - y[1])
    return abs(x[1]) + abs(x[0] - y[0]) + abs(y[1])


def british_rail(x: Point, y: Point) -> float:
    # |x| + |y| even for x == y, so d(x, x) != 0 away from the origin.
    return _norm(x) + _norm(y)


def radial_arc(x: Point, y: Point) -> float:
    """
    Shortest path moving only radially or along circles centred on the origin:
    either straight through the origin, or along the radius to the smaller
    circle and then around it.
    """
    nx = _norm(x)
    ny = _norm(y)
    if nx == 0 and ny == 0:
        return 0.0
    if nx == 0:
        return ny
    if ny == 0:
        return nx

    through_center = nx + ny
    cos_th = (x[0] * y[0] + x[1] * y[1]) / (nx * ny)
    cos_th = min(1.0, max(-1.0, cos_th))
    theta = math.acos(cos_th)
    arc_and_radial = abs(nx - ny) + theta * min(nx, ny)
    return min(through_center, arc_and_radial)


def _float_bits(v: float) -> int:
    return int(np.float64(v).view(np.uint64))


def _hamming_scalar(a: float, b: float) -> int:
    return bin(_float_bits(a) ^ _float_bits(b)).count("1")


def hamming(x: Point, y: Point) -> float:
    """Differing bits of the float64 encodings, summed over both coordinates."""
    return float(_hamming_scalar(x[0], y[0]) + _hamming_scalar(x[1], y[1]))


METRICS: dict[str, Metric] = {
    "euclidean": euclidean,
    "taxicab": taxicab,
    "post_office": post_office,
    "los_angeles": los_angeles,
    "british_rail": british_rail,
    "radial_arc": radial_arc,
    "hamming": hamming,
}


def get_metric(name: str, p: float | None = None) -> Metric:
    if name == "pnorm":
        if p is None:
            raise MetricConfigError("pnorm needs an exponent p")
        return pnorm(p)
    if p is not None:
        raise MetricConfigError(f"p is only used by pnorm, not {name!r}")
    try:
        return METRICS[name]
    except KeyError:
        known = ", ".join(sorted([*METRICS, "pnorm"]))
        raise MetricConfigError(f"unknown metric {name!r}; known: {known}") from None
