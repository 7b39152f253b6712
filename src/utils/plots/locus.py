from __future__ import annotations

from pathlib import Path

import numpy as np

from ...metricloci.types import Line, Point


def plot_locus(
    out_path: Path,
    points: np.ndarray,
    *,
    markers: list[tuple[str, Point]] | None = None,
    line: Line | None = None,
    limits: tuple[float, float, float, float] | None = None,
    title: str | None = None,
) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(6.0, 6.0), dpi=120)
    if points.shape[0] > 0:
        # Small, outline-free dots read as a curve at fine grid steps.
        ax.scatter(
            points[:, 0],
            points[:, 1],
            s=0.7,
            linewidths=0,
            color="#1f77b4",
        )
    for label, (mx, my) in markers or []:
        ax.scatter([mx], [my], s=30.0, color="red", label=label, zorder=3)
    if line is not None:
        xmin, xmax = limits[:2] if limits is not None else ax.get_xlim()
        xs = np.array([xmin, xmax], dtype=np.float64)
        ax.plot(xs, line.slope * xs + line.intercept, color="red", linewidth=1.0)
    if limits is not None:
        ax.set_xlim(limits[0], limits[1])
        ax.set_ylim(limits[2], limits[3])
    ax.set_aspect("equal")
    if title:
        ax.set_title(title)
    if markers:
        ax.legend(loc="best")
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
    plt.close(fig)
