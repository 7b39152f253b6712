from __future__ import annotations

import numpy as np

from . import debug

_seen: set[str] = set()


def log_once(key: str, message: str) -> None:
    if debug.is_verbose() and key not in _seen:
        _seen.add(key)
        debug.log(message)


def warn_once(key: str, message: str) -> None:
    if key not in _seen:
        _seen.add(key)
        debug.warn(message)


def log_points(name: str, P: np.ndarray) -> None:
    """Count and bounding box of an (N,2) point set."""
    if not debug.is_verbose():
        return
    if P.shape[0] == 0:
        debug.log(f"{name}: accepted=0")
        return
    minx, miny = P.min(axis=0)
    maxx, maxy = P.max(axis=0)
    debug.log(
        f"{name}: accepted={P.shape[0]} "
        f"bbox=({minx:.6g},{miny:.6g})..({maxx:.6g},{maxy:.6g})"
    )


def log_field(name: str, Z: np.ndarray) -> None:
    if not debug.is_verbose():
        return
    finite_mask = np.isfinite(Z)
    n_bad = int(Z.size - finite_mask.sum())
    if finite_mask.any():
        min_val = float(np.min(Z[finite_mask]))
        max_val = float(np.max(Z[finite_mask]))
    else:
        min_val = float("nan")
        max_val = float("nan")
    debug.log(
        f"{name}: shape={Z.shape} non_finite={n_bad} "
        f"min={min_val:.6g} max={max_val:.6g}"
    )
