from __future__ import annotations

import argparse
import json
import time
from pathlib import Path
from typing import Protocol, TypedDict, cast

import matplotlib

from .metricloci.cancel import CancelToken
from .metricloci.contour import evaluate_field
from .metricloci.errors import LocusCancelled
from .metricloci.export_svg import export_locus_svg
from .metricloci.grid import Domain
from .metricloci.locus import locus
from .metricloci.metrics import METRICS, get_metric
from .metricloci.types import (
    CircleParams,
    EllipseParams,
    Line,
    LocusKind,
    LocusParams,
    ParabolaParams,
    Point,
)
from .utils import debug
from .utils.plots import plot_contour_field, plot_locus

FIGURES = ["contour", "circle", "ellipse", "parabola"]


class CliArgs(Protocol):
    figure: str
    metric: str
    p: float | None
    output: str
    min: float
    step: float
    max: float
    eps: float | None
    center: list[float]
    radius: float
    focus1: list[float]
    focus2: list[float]
    sum: float
    focus: list[float]
    slope: float
    intercept: float
    line_tol: float | None
    reference: list[float]
    lo: float
    hi: float
    n: int
    timeout: float | None
    progress: bool
    metadata: bool
    verbose: bool


class DomainDict(TypedDict):
    min: float
    step: float
    max: float
    eps: float


class RunMetadata(TypedDict):
    figure: str
    metric: str
    p: float | None
    params: dict[str, object]
    domain: DomainDict | None
    accepted: int | None
    elapsed_s: float
    output: str
    created_at: str


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Draw contour plots and metric loci for a chosen 2-D metric"
    )
    ap.add_argument("--figure", required=True, choices=FIGURES)
    ap.add_argument(
        "--metric",
        default="euclidean",
        choices=sorted([*METRICS, "pnorm"]),
        help="Distance function (default: euclidean)",
    )
    ap.add_argument("--p", type=float, default=None, help="Exponent for pnorm")
    ap.add_argument(
        "--output",
        required=True,
        help="Figure path; .svg locus figures are written with svgwrite",
    )

    # Sampling domain, shared by both axes
    ap.add_argument("--min", type=float, default=-5.0)
    ap.add_argument("--step", type=float, default=0.01)
    ap.add_argument("--max", type=float, default=5.0)
    ap.add_argument(
        "--eps",
        type=float,
        default=None,
        help="Acceptance tolerance (default: same as --step)",
    )

    # Locus parameters
    ap.add_argument("--center", type=float, nargs=2, default=[1.0, 0.5])
    ap.add_argument("--radius", type=float, default=2.0)
    ap.add_argument("--focus1", type=float, nargs=2, default=[1.0, 3.0])
    ap.add_argument("--focus2", type=float, nargs=2, default=[-1.0, 0.0])
    ap.add_argument("--sum", type=float, default=6.0, help="Ellipse distance sum")
    ap.add_argument("--focus", type=float, nargs=2, default=[0.0, 1.0])
    ap.add_argument("--slope", type=float, default=0.0, help="Directrix slope")
    ap.add_argument("--intercept", type=float, default=0.0, help="Directrix intercept")
    ap.add_argument(
        "--line_tol",
        type=float,
        default=None,
        help="How far a circle point may sit from the directrix (default: eps/2)",
    )

    # Contour parameters
    ap.add_argument("--reference", type=float, nargs=2, default=[0.0, 0.0])
    ap.add_argument("--lo", type=float, default=-5.0)
    ap.add_argument("--hi", type=float, default=5.0)
    ap.add_argument("--n", type=int, default=100, help="Contour samples per axis")

    ap.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort the locus search after this many seconds",
    )
    ap.add_argument("--progress", action="store_true", help="Show a progress bar")
    ap.add_argument(
        "--metadata",
        action="store_true",
        help="Write run parameters to a .json file next to the figure",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logs")
    return ap


def _point(values: list[float]) -> Point:
    return (float(values[0]), float(values[1]))


def locus_params(args: CliArgs) -> tuple[LocusParams, list[tuple[str, Point]]]:
    """Locus parameters plus the labelled reference points to draw with them."""
    if args.figure == "circle":
        center = _point(args.center)
        return CircleParams(center, args.radius), [("center", center)]
    if args.figure == "ellipse":
        f1 = _point(args.focus1)
        f2 = _point(args.focus2)
        return EllipseParams(f1, f2, args.sum), [("focus 1", f1), ("focus 2", f2)]
    if args.figure == "parabola":
        focus = _point(args.focus)
        line = Line(args.slope, args.intercept)
        return ParabolaParams(focus, line), [("focus", focus)]
    raise ValueError(f"not a locus figure: {args.figure}")


def _write_metadata(out_path: Path, metadata: RunMetadata) -> Path:
    metadata_path = out_path.with_suffix(".json")
    metadata_path.write_text(
        json.dumps(metadata, indent=2, sort_keys=True), encoding="utf-8"
    )
    return metadata_path


def main(argv: list[str] | None = None) -> None:
    args = cast(CliArgs, build_parser().parse_args(argv))
    debug.set_verbose(args.verbose)
    matplotlib.use("Agg")

    if args.timeout is not None and args.timeout <= 0:
        raise ValueError("timeout must be positive")
    if args.n < 2:
        raise ValueError("n must be >= 2")

    metric = get_metric(args.metric, p=args.p)
    title = args.metric if args.p is None else f"{args.metric} p={args.p:g}"
    out_path = Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    start = time.perf_counter()
    accepted: int | None = None
    domain_meta: DomainDict | None = None
    params_meta: dict[str, object]

    if args.figure == "contour":
        reference = _point(args.reference)
        field = evaluate_field(metric, reference, lo=args.lo, hi=args.hi, n=args.n)
        plot_contour_field(out_path, field, title=title)
        params_meta = {
            "reference": list(reference),
            "lo": args.lo,
            "hi": args.hi,
            "n": args.n,
        }
    else:
        eps = args.step if args.eps is None else args.eps
        domain = Domain.square(args.min, args.step, args.max)
        params, markers = locus_params(args)
        cancel = (
            None if args.timeout is None else CancelToken.with_timeout(args.timeout)
        )
        try:
            P = locus(
                LocusKind(args.figure),
                metric,
                domain,
                params,
                eps,
                cancel=cancel,
                progress=args.progress,
                line_tolerance=args.line_tol,
            )
        except LocusCancelled:
            print(f"{args.figure} locus cancelled after {args.timeout:g}s; not saved")
            return
        accepted = int(P.shape[0])
        if accepted == 0:
            debug.warn(f"{args.figure} locus is empty; drawing markers only")

        line = params.line if isinstance(params, ParabolaParams) else None
        if out_path.suffix.lower() == ".svg":
            export_locus_svg(
                str(out_path), P, markers=markers, line=line, limits=domain.limits
            )
        else:
            plot_locus(
                out_path,
                P,
                markers=markers,
                line=line,
                limits=domain.limits,
                title=f"{args.figure}, {title}",
            )
        domain_meta = {
            "min": args.min,
            "step": args.step,
            "max": args.max,
            "eps": float(eps),
        }
        params_meta = {
            name: list(value) if isinstance(value, tuple) else value
            for name, value in vars(params).items()
            if name != "line"
        }
        if line is not None:
            params_meta["line"] = {"slope": line.slope, "intercept": line.intercept}

    elapsed = time.perf_counter() - start
    if args.metadata:
        metadata: RunMetadata = {
            "figure": args.figure,
            "metric": args.metric,
            "p": args.p,
            "params": params_meta,
            "domain": domain_meta,
            "accepted": accepted,
            "elapsed_s": round(elapsed, 3),
            "output": str(out_path),
            "created_at": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime()),
        }
        metadata_path = _write_metadata(out_path, metadata)
        debug.log(f"metadata: {metadata_path}")

    suffix = "" if accepted is None else f"  points={accepted}"
    print(f"Saved: {out_path}{suffix}  time={elapsed:.3f}s")


if __name__ == "__main__":
    main()
