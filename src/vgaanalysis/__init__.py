"""Global visibility graph analysis over a grid of precomputed isovists.

For every analysable cell a breadth-first traversal of the visibility graph
yields its node count, mean depth, integration and entropy measures, written
into the grid's attribute table.
"""

from .config import RADIUS_UNLIMITED, VisualGlobalConfig
from .grid.pointmap import PointMap
from .pipeline import VisualGlobalResult, run_visual_global

__all__ = [
    "RADIUS_UNLIMITED",
    "PointMap",
    "VisualGlobalConfig",
    "VisualGlobalResult",
    "run_visual_global",
]
