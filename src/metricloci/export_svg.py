from __future__ import annotations

import numpy as np
import svgwrite  # type: ignore[reportMissingTypeStubs]
from jaxtyping import jaxtyped

from .types import Line, NpPointSet, Point, typechecker

Marker = tuple[str, Point]


@jaxtyped(typechecker=typechecker)
def export_locus_svg(
    out_path: str,
    points: NpPointSet,
    *,
    markers: list[Marker] | None = None,
    line: Line | None = None,
    limits: tuple[float, float, float, float] | None = None,
    canvas_size: tuple[float, float] | tuple[str, str] | None = None,
    point_radius: float | None = None,
    point_fill: str = "#1f77b4",
    marker_fill: str = "#d11",
    line_stroke: str = "#d11",
    line_stroke_width: float | str = "1pt",
) -> None:
    """
    points: (N,2) accepted locus points in world coords; may be empty.
    markers: (label, point) reference points (center, foci) drawn larger in red.
    line: optional directrix drawn across the full x range.
    limits: (xmin, xmax, ymin, ymax); defaults to the data bounds plus padding.

    World y points up, so content sits in a group mirrored about the x axis.
    """
    markers = markers or []

    if limits is None:
        allp = points
        if markers:
            allp = np.vstack([allp, np.array([m[1] for m in markers], dtype=float)])
        if allp.shape[0] == 0:
            limits = (-1.0, 1.0, -1.0, 1.0)
        else:
            minx, miny = allp.min(axis=0)
            maxx, maxy = allp.max(axis=0)
            pad = 0.05 * max(float(maxx - minx), float(maxy - miny), 1.0)
            limits = (
                float(minx - pad),
                float(maxx + pad),
                float(miny - pad),
                float(maxy + pad),
            )
    xmin, xmax, ymin, ymax = limits
    width = xmax - xmin
    height = ymax - ymin
    if point_radius is None:
        point_radius = 0.002 * max(width, height)

    if canvas_size is None:
        dwg = svgwrite.Drawing(out_path, profile="tiny")
    else:
        dwg = svgwrite.Drawing(out_path, profile="tiny", size=canvas_size)
    dwg.attribs["viewBox"] = f"{xmin} {-ymax} {width} {height}"

    world = dwg.g(id="world", transform="scale(1,-1)")

    if line is not None:
        world.add(
            dwg.line(
                start=(float(xmin), float(line.y_at(xmin))),
                end=(float(xmax), float(line.y_at(xmax))),
                stroke=line_stroke,
                stroke_width=line_stroke_width,
            )
        )

    g = dwg.g(id="locus_points", fill=point_fill, stroke="none")
    for x, y in points:
        g.add(dwg.circle(center=(float(x), float(y)), r=float(point_radius)))
    world.add(g)

    mg = dwg.g(id="markers", fill=marker_fill, stroke="none")
    # Tiny profile has no per-element titles; labels only reach the png legend.
    for _label, (mx, my) in markers:
        mg.add(dwg.circle(center=(float(mx), float(my)), r=float(4.0 * point_radius)))
    world.add(mg)

    dwg.add(world)
    dwg.save()
