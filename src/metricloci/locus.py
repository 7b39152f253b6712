from __future__ import annotations

import math

import numpy as np
from beartype.typing import Callable
from jaxtyping import jaxtyped
from tqdm import tqdm  # type: ignore[reportMissingModuleSource]

from ..utils import debug, debug_helpers
from .cancel import CancelToken
from .errors import DomainError
from .grid import Domain
from .line_distance import on_parabola
from .predicates import on_circle, on_ellipse
from .types import (
    PARAMS_BY_KIND,
    CircleParams,
    EllipseParams,
    Line,
    LocusKind,
    LocusParams,
    Metric,
    NpPointSet,
    ParabolaParams,
    Point,
    as_point,
    typechecker,
)

__all__ = [
    "validate_config",
    "locus",
    "circle_points",
    "ellipse_points",
    "parabola_points",
]


def validate_config(
    kind: LocusKind,
    domain: Domain,
    params: LocusParams,
    eps: float,
    line_tolerance: float | None = None,
) -> None:
    domain.validate()
    if not math.isfinite(eps) or eps <= 0:
        raise DomainError(f"eps must be a finite positive number, got {eps}")
    expected = PARAMS_BY_KIND[kind]
    if not isinstance(params, expected):
        raise DomainError(
            f"{kind.value} locus needs {expected.__name__}, "
            f"got {type(params).__name__}"
        )
    if line_tolerance is not None and (
        not math.isfinite(line_tolerance) or line_tolerance < 0
    ):
        raise DomainError(
            f"line_tolerance must be finite and >= 0, got {line_tolerance}"
        )


def _make_predicate(
    metric: Metric,
    params: LocusParams,
    eps: float,
    line_tolerance: float | None,
    cancel: CancelToken | None,
) -> Callable[[Point], bool]:
    if isinstance(params, CircleParams):
        center = as_point(params.center)
        radius = float(params.radius)
        return lambda x: on_circle(metric, eps, x, center, radius)
    if isinstance(params, EllipseParams):
        f1 = as_point(params.focus1)
        f2 = as_point(params.focus2)
        target = float(params.target_sum)
        return lambda x: on_ellipse(metric, eps, x, f1, f2, target)
    if not isinstance(params, ParabolaParams):
        raise DomainError(f"no predicate for {type(params).__name__}")
    focus = as_point(params.focus)
    line = params.line
    return lambda x: on_parabola(
        metric,
        eps,
        x,
        focus,
        line,
        line_tolerance=line_tolerance,
        cancel=cancel,
    )


@jaxtyped(typechecker=typechecker)
def locus(
    kind: LocusKind | str,
    metric: Metric,
    domain: Domain,
    params: LocusParams,
    eps: float,
    *,
    cancel: CancelToken | None = None,
    progress: bool = False,
    line_tolerance: float | None = None,
) -> NpPointSet:
    """
    Brute-force locus search: every grid point of `domain` (x outer, y inner)
    that satisfies the `kind` predicate under `metric` within `eps`.

    Returns an (N,2) float64 array in scan order; (0,2) when nothing is
    accepted. Raises DomainError before sampling on a bad configuration and
    LocusCancelled when `cancel` fires.
    """
    try:
        kind = LocusKind(kind)
    except ValueError as exc:
        raise DomainError(f"unknown locus kind: {kind!r}") from exc
    validate_config(kind, domain, params, float(eps), line_tolerance)
    eps = float(eps)

    accept = _make_predicate(metric, params, eps, line_tolerance, cancel)
    total = domain.size
    debug.log(
        f"locus: kind={kind.value} candidates={total} eps={eps:.6g} "
        f"x=[{domain.x.start:.6g},{domain.x.stop:.6g}]/{domain.x.step:.6g} "
        f"y=[{domain.y.start:.6g},{domain.y.stop:.6g}]/{domain.y.step:.6g}"
    )
    if kind is LocusKind.PARABOLA:
        debug_helpers.log_once(
            "parabola_cost",
            "parabola: each candidate grows metric circles until one meets "
            "the directrix; fine grids are slow",
        )

    pts: list[Point] = []
    candidates = tqdm(
        domain.points(),
        total=total,
        desc=f"{kind.value} locus",
        unit="pt",
        disable=not progress,
    )
    for x in candidates:
        if cancel is not None:
            cancel.raise_if_cancelled()
        if accept(x):
            pts.append(x)

    if not pts:
        debug.log(f"locus: kind={kind.value} accepted=0")
        return np.zeros((0, 2), dtype=np.float64)
    P = np.asarray(pts, dtype=np.float64)
    debug_helpers.log_points(f"{kind.value} locus", P)
    return P


def circle_points(
    metric: Metric,
    domain: Domain,
    center: Point,
    radius: float,
    eps: float,
    **kwargs: object,
) -> NpPointSet:
    return locus(
        LocusKind.CIRCLE, metric, domain, CircleParams(center, radius), eps, **kwargs
    )


def ellipse_points(
    metric: Metric,
    domain: Domain,
    focus1: Point,
    focus2: Point,
    target_sum: float,
    eps: float,
    **kwargs: object,
) -> NpPointSet:
    return locus(
        LocusKind.ELLIPSE,
        metric,
        domain,
        EllipseParams(focus1, focus2, target_sum),
        eps,
        **kwargs,
    )


def parabola_points(
    metric: Metric,
    domain: Domain,
    focus: Point,
    line: Line,
    eps: float,
    **kwargs: object,
) -> NpPointSet:
    return locus(
        LocusKind.PARABOLA, metric, domain, ParabolaParams(focus, line), eps, **kwargs
    )
