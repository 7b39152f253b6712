from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

import numpy as np
from beartype import BeartypeConf, beartype
from beartype.typing import Callable
from jaxtyping import Float

Point: TypeAlias = tuple[float, float]
Metric: TypeAlias = Callable[[Point, Point], float]

NpAxisValues: TypeAlias = Float[np.ndarray, "n"]
NpPointSet: TypeAlias = Float[np.ndarray, "N 2"]
NpField: TypeAlias = Float[np.ndarray, "H W"]

# Slider values arrive as ints as often as floats.
typechecker = beartype(conf=BeartypeConf(is_pep484_tower=True))


def as_point(p: Point) -> Point:
    return (float(p[0]), float(p[1]))


class LocusKind(str, Enum):
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    PARABOLA = "parabola"


@dataclass(frozen=True)
class Line:
    """y = slope * x + intercept"""

    slope: float
    intercept: float

    def y_at(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class CircleParams:
    center: Point
    radius: float


@dataclass(frozen=True)
class EllipseParams:
    focus1: Point
    focus2: Point
    target_sum: float


@dataclass(frozen=True)
class ParabolaParams:
    focus: Point
    line: Line


LocusParams: TypeAlias = CircleParams | EllipseParams | ParabolaParams

PARAMS_BY_KIND: dict[LocusKind, type] = {
    LocusKind.CIRCLE: CircleParams,
    LocusKind.ELLIPSE: EllipseParams,
    LocusKind.PARABOLA: ParabolaParams,
}
