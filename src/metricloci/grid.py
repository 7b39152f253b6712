from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
from jaxtyping import jaxtyped

from .errors import DomainError
from .types import NpAxisValues, Point, typechecker

# Fraction of one step by which `stop` may fall short of an exact multiple
# and still be sampled.
ENDPOINT_SLACK = 1e-9


@dataclass(frozen=True)
class AxisRange:
    """Samples start, start + step, ... up to stop (inclusive when reachable)."""

    start: float
    step: float
    stop: float

    def validate(self, name: str = "axis") -> None:
        for field_name in ("start", "step", "stop"):
            value = getattr(self, field_name)
            if not math.isfinite(value):
                raise DomainError(f"{name}.{field_name} must be finite, got {value}")
        if self.step <= 0:
            raise DomainError(f"{name}.step must be positive, got {self.step}")
        if self.start > self.stop:
            raise DomainError(
                f"{name}.start must be <= {name}.stop, got {self.start} > {self.stop}"
            )

    def __len__(self) -> int:
        bounds = (self.start, self.step, self.stop)
        if not all(math.isfinite(v) for v in bounds):
            return 0
        if self.step <= 0 or self.start > self.stop:
            return 0
        return math.floor((self.stop - self.start) / self.step + ENDPOINT_SLACK) + 1

    def values(self) -> NpAxisValues:
        return axis_values(self.start, self.step, self.stop)


@jaxtyped(typechecker=typechecker)
def axis_values(start: float, step: float, stop: float) -> NpAxisValues:
    """
    start + k*step for k = 0..n, n = floor((stop - start)/step + slack).
    Computed from the index rather than accumulated, so long ranges do not drift.
    """
    n = len(AxisRange(start, step, stop))
    return float(start) + np.arange(n, dtype=np.float64) * float(step)


def grid_points(x: AxisRange, y: AxisRange) -> Iterator[Point]:
    """Lazily yield (x, y) for every combination, x outer and y inner."""
    ys = y.values()
    for xv in x.values():
        for yv in ys:
            yield (float(xv), float(yv))


@dataclass(frozen=True)
class Domain:
    x: AxisRange
    y: AxisRange

    @classmethod
    def square(cls, lo: float, step: float, hi: float) -> Domain:
        axis = AxisRange(float(lo), float(step), float(hi))
        return cls(x=axis, y=axis)

    def validate(self) -> None:
        self.x.validate("x")
        self.y.validate("y")

    @property
    def size(self) -> int:
        return len(self.x) * len(self.y)

    @property
    def limits(self) -> tuple[float, float, float, float]:
        """(xmin, xmax, ymin, ymax) for renderers."""
        return (self.x.start, self.x.stop, self.y.start, self.y.stop)

    def points(self) -> Iterator[Point]:
        return grid_points(self.x, self.y)
