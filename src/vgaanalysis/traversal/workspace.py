"""Scratch state reused across traversal episodes."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from vgaanalysis.grid.pixel import VERTICAL, PixelRef


@dataclass(frozen=True)
class VisitedMarker:
    """Snapshot of one cell's visited state.

    ``discovered_bins`` holds one bit per adjacency bin that first reached the
    cell and ``via_merge`` marks a cell first reached through a merge link;
    ``consumed`` means the cell has been dealt with for the episode and
    is never expanded again.
    """

    consumed: bool = False
    discovered_bins: int = 0
    via_merge: bool = False

    @property
    def seen(self) -> bool:
        return self.consumed or self.via_merge or self.discovered_bins != 0


class ScratchWorkspace:
    """Visited and extent matrices for one run, indexed ``[row, column]``.

    The workspace belongs to a single run and is reset at the start of every
    episode rather than reallocated.  Extents start at each cell's own
    position: ``extent_x`` is the furthest column already expanded by
    horizontal scans passing through the cell, ``extent_y`` the furthest row
    for vertical scans.
    """

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = cols
        self.rows = rows
        self.discovered = np.zeros((rows, cols), dtype=np.uint32)
        self.consumed = np.zeros((rows, cols), dtype=bool)
        self.merged = np.zeros((rows, cols), dtype=bool)
        self.extent_x = np.zeros((rows, cols), dtype=np.int64)
        self.extent_y = np.zeros((rows, cols), dtype=np.int64)
        self.reset()

    def reset(self) -> None:
        self.discovered.fill(0)
        self.consumed.fill(False)
        self.merged.fill(False)
        rows, cols = np.indices((self.rows, self.cols))
        self.extent_x[:] = cols
        self.extent_y[:] = rows

    def is_unseen(self, ref: PixelRef) -> bool:
        y, x = ref.y, ref.x
        return not (self.consumed[y, x] or self.merged[y, x]) and self.discovered[y, x] == 0

    def discover(self, ref: PixelRef, bin_index: int) -> None:
        self.discovered[ref.y, ref.x] |= np.uint32(1 << bin_index)

    def discover_via_merge(self, ref: PixelRef) -> None:
        self.merged[ref.y, ref.x] = True

    def is_consumed(self, ref: PixelRef) -> bool:
        return bool(self.consumed[ref.y, ref.x])

    def consume(self, ref: PixelRef) -> None:
        self.consumed[ref.y, ref.x] = True

    def claim_extent(self, ref: PixelRef, direction: int, end: int) -> bool:
        """Extend the scan extent at ``ref`` to ``end`` along ``direction``.

        Returns ``True`` when the extent already reached ``end``, meaning the
        rest of the run was covered by an earlier scan and can be skipped.
        """

        extents = self.extent_y if direction & VERTICAL else self.extent_x
        if extents[ref.y, ref.x] >= end:
            return True
        extents[ref.y, ref.x] = end
        return False

    def marker(self, ref: PixelRef) -> VisitedMarker:
        return VisitedMarker(
            consumed=bool(self.consumed[ref.y, ref.x]),
            discovered_bins=int(self.discovered[ref.y, ref.x]),
            via_merge=bool(self.merged[ref.y, ref.x]),
        )

    def extent(self, ref: PixelRef) -> PixelRef:
        return PixelRef(int(self.extent_x[ref.y, ref.x]), int(self.extent_y[ref.y, ref.x]))


__all__ = ["ScratchWorkspace", "VisitedMarker"]
