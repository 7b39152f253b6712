from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from jaxtyping import jaxtyped

from ..utils import debug_helpers
from .errors import DomainError
from .types import Metric, NpAxisValues, NpField, Point, as_point, typechecker


@dataclass(frozen=True)
class ContourField:
    """values[i, j] = metric(reference, (xs[j], ys[i])); rows follow y."""

    xs: NpAxisValues
    ys: NpAxisValues
    values: NpField
    reference: Point


@jaxtyped(typechecker=typechecker)
def evaluate_field(
    metric: Metric,
    reference: Point,
    *,
    lo: float = -5.0,
    hi: float = 5.0,
    n: int = 100,
) -> ContourField:
    """
    Distance from `reference` to every node of an n x n grid over [lo, hi]^2.
    Whatever the metric returns is stored as is, NaN and jumps included.
    """
    if not (math.isfinite(lo) and math.isfinite(hi)) or lo >= hi:
        raise DomainError(f"need finite lo < hi, got lo={lo} hi={hi}")
    if n < 2:
        raise DomainError(f"n must be >= 2, got {n}")

    ref = as_point(reference)
    xs = np.linspace(float(lo), float(hi), n, dtype=np.float64)
    ys = xs.copy()
    Z = np.empty((n, n), dtype=np.float64)
    for i, y in enumerate(ys):
        for j, x in enumerate(xs):
            Z[i, j] = metric(ref, (float(x), float(y)))

    if not np.isfinite(Z).all():
        debug_helpers.warn_once(
            f"contour_non_finite:{getattr(metric, '__name__', repr(metric))}",
            "metric returned non-finite values; contour will show gaps",
        )
    debug_helpers.log_field("contour", Z)
    return ContourField(xs=xs, ys=ys, values=Z, reference=ref)
