from . import contour, export_svg, grid, line_distance, locus, metrics, predicates

__all__ = [
    "grid",
    "predicates",
    "line_distance",
    "locus",
    "contour",
    "metrics",
    "export_svg",
]
