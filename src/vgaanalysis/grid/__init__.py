"""Grid data model: cell references, adjacency bins, points and attributes."""

from .adjacency import BIN_COUNT, AdjacencyNode, Bin, PixelRun, bin_direction  # noqa: F401
from .attributes import AttributeTable  # noqa: F401
from .pixel import (  # noqa: F401
    DIAGONAL,
    HORIZONTAL,
    NEGDIAGONAL,
    POSDIAGONAL,
    VERTICAL,
    PixelRef,
)
from .pointmap import Point, PointMap  # noqa: F401
