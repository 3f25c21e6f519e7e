"""Grid of analysable points together with their visibility adjacency."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from vgaanalysis.traversal.workspace import VisitedMarker

from .adjacency import AdjacencyNode
from .attributes import AttributeTable
from .pixel import PixelRef


@dataclass
class Point:
    """A single grid cell.

    ``misc`` and ``extent`` are persistent copies of the scratch state left by
    the last traversal episode of a run; other tools read them afterwards.
    """

    filled: bool = False
    context_filled: bool = False
    merge_pixel: Optional[PixelRef] = None
    node: AdjacencyNode = field(default_factory=AdjacencyNode.empty)
    misc: VisitedMarker = field(default_factory=VisitedMarker)
    extent: Optional[PixelRef] = None


class PointMap:
    """Rectangular grid of :class:`Point` cells with an attribute table.

    Cells are addressed by :class:`PixelRef` (column, row).  Filling a cell
    registers a row for it in :attr:`attributes`.
    """

    def __init__(self, cols: int, rows: int) -> None:
        if cols <= 0 or rows <= 0:
            raise ValueError(f"PointMap dimensions must be positive, got {cols}x{rows}")
        self.cols = cols
        self.rows = rows
        self._points: List[List[Point]] = [
            [Point() for _ in range(rows)] for _ in range(cols)
        ]
        self.attributes = AttributeTable()

    def __contains__(self, ref: object) -> bool:
        try:
            x, y = ref  # type: ignore[misc]
        except (TypeError, ValueError):
            return False
        return 0 <= x < self.cols and 0 <= y < self.rows

    def point(self, ref: PixelRef) -> Point:
        self._check(ref)
        return self._points[ref[0]][ref[1]]

    def iter_refs(self) -> Iterator[PixelRef]:
        """Yield every cell, column by column."""

        for i in range(self.cols):
            for j in range(self.rows):
                yield PixelRef(i, j)

    def filled_point_count(self) -> int:
        return sum(1 for ref in self.iter_refs() if self.point(ref).filled)

    def fill(
        self,
        ref: PixelRef,
        *,
        context_filled: bool = False,
        visible: Optional[Iterable[PixelRef]] = None,
    ) -> Point:
        """Mark ``ref`` as filled, optionally setting its visible cells."""

        ref = PixelRef(*ref)
        point = self.point(ref)
        point.filled = True
        point.context_filled = context_filled
        self.attributes.add_row(ref)
        if visible is not None:
            self.set_visible(ref, visible)
        return point

    def set_visible(self, ref: PixelRef, pixels: Iterable[PixelRef]) -> None:
        """Encode the cells visible from ``ref`` into its adjacency node."""

        ref = PixelRef(*ref)
        pixels = [PixelRef(*pix) for pix in pixels]
        for pix in pixels:
            self._check(pix)
        self.point(ref).node = AdjacencyNode.from_pixels(ref, pixels)

    def set_node(self, ref: PixelRef, node: AdjacencyNode) -> None:
        """Install ``node`` as the visible set of ``ref``.

        Every pixel the node lists must lie inside the grid.
        """

        ref = PixelRef(*ref)
        for pix in node.iter_pixels():
            self._check(pix)
        self.point(ref).node = node

    def merge(self, a: PixelRef, b: PixelRef) -> None:
        """Link two filled cells as merge partners of each other."""

        a, b = PixelRef(*a), PixelRef(*b)
        if a == b:
            raise ValueError(f"Cannot merge cell {a} with itself")
        for ref in (a, b):
            if not self.point(ref).filled:
                raise ValueError(f"Merge partner {ref} is not filled")
        self.point(a).merge_pixel = b
        self.point(b).merge_pixel = a

    def _check(self, ref: PixelRef) -> None:
        if ref not in self:
            raise ValueError(
                f"Cell {tuple(ref)} lies outside the {self.cols}x{self.rows} grid"
            )


__all__ = ["Point", "PointMap"]
