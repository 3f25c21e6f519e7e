"""Shared fixtures building small hand-made point maps."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence, Tuple

import pytest

from vgaanalysis.grid.pixel import PixelRef
from vgaanalysis.grid.pointmap import PointMap

Cell = Tuple[int, int]


def _rook_visible(cells: set, origin: Cell) -> list:
    """Cells sharing a row or column with ``origin`` with no gap in between."""

    visible = []
    for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        x, y = origin[0] + dx, origin[1] + dy
        while (x, y) in cells:
            visible.append(PixelRef(x, y))
            x, y = x + dx, y + dy
    return visible


@pytest.fixture
def open_map() -> Callable[..., PointMap]:
    """Factory for maps whose filled cells all see each other."""

    def _build(
        cols: int,
        rows: int,
        cells: Optional[Iterable[Cell]] = None,
        context: Sequence[Cell] = (),
    ) -> PointMap:
        point_map = PointMap(cols, rows)
        if cells is None:
            cells = [(x, y) for x in range(cols) for y in range(rows)]
        cells = [PixelRef(*cell) for cell in cells]
        for ref in cells:
            point_map.fill(ref, context_filled=tuple(ref) in set(context))
        for ref in cells:
            point_map.set_visible(ref, cells)
        return point_map

    return _build


@pytest.fixture
def rook_map() -> Callable[..., PointMap]:
    """Factory for maps where cells only see along unobstructed rows and columns."""

    def _build(
        cols: int,
        rows: int,
        cells: Iterable[Cell],
        context: Sequence[Cell] = (),
    ) -> PointMap:
        point_map = PointMap(cols, rows)
        cells = {tuple(cell) for cell in cells}
        for cell in sorted(cells):
            point_map.fill(PixelRef(*cell), context_filled=cell in set(context))
        for cell in sorted(cells):
            point_map.set_visible(PixelRef(*cell), _rook_visible(cells, cell))
        return point_map

    return _build


@pytest.fixture
def chain_map() -> Callable[..., PointMap]:
    """Factory for a one-row corridor where each cell sees only its neighbours."""

    def _build(length: int, context: Sequence[int] = ()) -> PointMap:
        point_map = PointMap(length, 1)
        for x in range(length):
            point_map.fill(PixelRef(x, 0), context_filled=x in set(context))
        for x in range(length):
            neighbours = [PixelRef(n, 0) for n in (x - 1, x + 1) if 0 <= n < length]
            point_map.set_visible(PixelRef(x, 0), neighbours)
        return point_map

    return _build
