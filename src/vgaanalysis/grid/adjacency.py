"""Run-length encoded visibility adjacency for a single grid cell.

Every cell owns an :class:`AdjacencyNode` made of 32 angular bins.  Each bin
stores the cells visible from the owner inside its sector as contiguous runs
along the bin's principal axis, which keeps per-cell storage small on large
grids.  Computing visibility itself happens elsewhere; :meth:`AdjacencyNode.from_pixels`
only encodes an already known visible set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple

import numpy as np

from .pixel import HORIZONTAL, NEGDIAGONAL, POSDIAGONAL, VERTICAL, PixelRef

BIN_COUNT = 32
BIN_WIDTH_DEG = 360.0 / BIN_COUNT


def bin_direction(index: int) -> int:
    """Return the scan axis for bin ``index`` (sector centred on ``index * 11.25``)."""

    if not 0 <= index < BIN_COUNT:
        raise ValueError(f"Bin index must be in [0, {BIN_COUNT}), got {index}")
    octant = index % 16
    if octant == 4:
        return POSDIAGONAL
    if octant == 12:
        return NEGDIAGONAL
    if octant <= 3 or octant >= 13:
        return HORIZONTAL
    return VERTICAL


def _line_key(ref: PixelRef, direction: int) -> int:
    # Cells sharing a key lie on one line parallel to the bin axis.
    if direction == HORIZONTAL:
        return ref.y
    if direction == VERTICAL:
        return ref.x
    if direction == POSDIAGONAL:
        return ref.x - ref.y
    return ref.x + ref.y


@dataclass(frozen=True)
class PixelRun:
    """Contiguous cells from ``start`` to ``end`` inclusive along a bin axis."""

    start: PixelRef
    end: PixelRef

    def length(self, direction: int) -> int:
        return self.end.col(direction) - self.start.col(direction) + 1

    def pixels(self, direction: int) -> Iterator[PixelRef]:
        pix = self.start
        while pix.col(direction) <= self.end.col(direction):
            yield pix
            pix = pix.moved(direction)


@dataclass(frozen=True)
class Bin:
    """One angular sector of a node's adjacency."""

    index: int
    runs: Tuple[PixelRun, ...] = ()
    direction: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", bin_direction(self.index))
        object.__setattr__(self, "runs", tuple(self.runs))
        for run in self.runs:
            if run.start.col(self.direction) > run.end.col(self.direction):
                raise ValueError(
                    f"Run {run.start}->{run.end} runs backwards along bin {self.index}"
                )
            if _line_key(run.start, self.direction) != _line_key(run.end, self.direction):
                raise ValueError(
                    f"Run {run.start}->{run.end} is not aligned with bin {self.index}"
                )

    @property
    def is_diagonal(self) -> bool:
        return self.direction in (POSDIAGONAL, NEGDIAGONAL)

    def pixel_count(self) -> int:
        return sum(run.length(self.direction) for run in self.runs)


@dataclass(frozen=True)
class AdjacencyNode:
    """Visible cells of one grid cell, split into 32 bins."""

    bins: Tuple[Bin, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "bins", tuple(self.bins))
        if len(self.bins) != BIN_COUNT:
            raise ValueError(
                f"AdjacencyNode requires exactly {BIN_COUNT} bins, got {len(self.bins)}"
            )
        for position, bin_ in enumerate(self.bins):
            if bin_.index != position:
                raise ValueError(
                    f"Bin at position {position} has index {bin_.index}"
                )

    @classmethod
    def empty(cls) -> "AdjacencyNode":
        return cls(tuple(Bin(i) for i in range(BIN_COUNT)))

    @classmethod
    def from_pixels(cls, origin: PixelRef, pixels: Iterable[PixelRef]) -> "AdjacencyNode":
        """Encode the cells visible from ``origin`` into run-length bins.

        The origin itself is dropped and duplicates are ignored.  Cells are
        assigned to the bin whose sector contains their bearing from the
        origin, then grouped into maximal runs along that bin's axis.
        """

        unique = {PixelRef(*pix) for pix in pixels}
        unique.discard(origin)
        if not unique:
            return cls.empty()

        coords = np.array(sorted(unique), dtype=np.int64)
        dx = coords[:, 0] - origin.x
        dy = coords[:, 1] - origin.y
        bearing = np.degrees(np.arctan2(dy, dx)) % 360.0
        indices = np.floor((bearing + BIN_WIDTH_DEG / 2.0) / BIN_WIDTH_DEG).astype(int)
        indices %= BIN_COUNT

        bins = []
        for index in range(BIN_COUNT):
            members = coords[indices == index]
            bins.append(Bin(index, _encode_runs(members, bin_direction(index))))
        return cls(tuple(bins))

    def iter_pixels(self) -> Iterator[PixelRef]:
        for bin_ in self.bins:
            for run in bin_.runs:
                yield from run.pixels(bin_.direction)

    def pixel_count(self) -> int:
        return sum(bin_.pixel_count() for bin_ in self.bins)


def _encode_runs(coords: np.ndarray, direction: int) -> Tuple[PixelRun, ...]:
    if coords.size == 0:
        return ()

    xs = coords[:, 0]
    ys = coords[:, 1]
    if direction == HORIZONTAL:
        keys, positions = ys, xs
    elif direction == VERTICAL:
        keys, positions = xs, ys
    elif direction == POSDIAGONAL:
        keys, positions = xs - ys, xs
    else:
        keys, positions = xs + ys, xs

    order = np.lexsort((positions, keys))
    keys = keys[order]
    positions = positions[order]

    # A new run starts wherever the line changes or the axis position skips a cell.
    breaks = np.flatnonzero((np.diff(keys) != 0) | (np.diff(positions) != 1)) + 1
    starts = np.concatenate(([0], breaks))
    stops = np.concatenate((breaks, [keys.size])) - 1

    runs = []
    for first, last in zip(starts, stops):
        runs.append(
            PixelRun(
                _from_line(int(keys[first]), int(positions[first]), direction),
                _from_line(int(keys[last]), int(positions[last]), direction),
            )
        )
    return tuple(runs)


def _from_line(key: int, position: int, direction: int) -> PixelRef:
    if direction == HORIZONTAL:
        return PixelRef(position, key)
    if direction == VERTICAL:
        return PixelRef(key, position)
    if direction == POSDIAGONAL:
        return PixelRef(position, position - key)
    return PixelRef(position, key - position)


__all__ = [
    "BIN_COUNT",
    "AdjacencyNode",
    "Bin",
    "PixelRun",
    "bin_direction",
]
