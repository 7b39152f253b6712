from __future__ import annotations

from pathlib import Path

from ...metricloci.contour import ContourField


def plot_contour_field(
    out_path: Path,
    field: ContourField,
    *,
    title: str | None = None,
    levels: int = 20,
) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(6.5, 5.5), dpi=120)
    cs = ax.contourf(field.xs, field.ys, field.values, levels=levels)
    fig.colorbar(cs, ax=ax)
    ax.scatter(
        [field.reference[0]], [field.reference[1]], s=20.0, color="red", zorder=3
    )
    ax.set_aspect("equal")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    fig.savefig(out_path, dpi=160)
    plt.close(fig)
