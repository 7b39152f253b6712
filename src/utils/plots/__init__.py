from .contour import plot_contour_field
from .locus import plot_locus

__all__ = [
    "plot_contour_field",
    "plot_locus",
]
