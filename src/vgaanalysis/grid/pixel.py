"""Grid cell references and the axis conventions used by adjacency bins."""

from __future__ import annotations

from typing import NamedTuple

HORIZONTAL = 0x01
VERTICAL = 0x02
POSDIAGONAL = 0x04
NEGDIAGONAL = 0x08
DIAGONAL = POSDIAGONAL | NEGDIAGONAL

_STEPS = {
    HORIZONTAL: (1, 0),
    VERTICAL: (0, 1),
    POSDIAGONAL: (1, 1),
    NEGDIAGONAL: (1, -1),
}


class PixelRef(NamedTuple):
    """Column/row address of a grid cell.

    ``x`` is the column and ``y`` the row.  Scans along any bin axis always move
    towards increasing ``col(direction)``, so a run is walked from its start to
    its end with :meth:`moved`.
    """

    x: int
    y: int

    def col(self, direction: int) -> int:
        """Return the coordinate that advances along ``direction``."""

        return self.y if direction & VERTICAL else self.x

    def moved(self, direction: int) -> "PixelRef":
        """Return the next cell one step along ``direction``."""

        try:
            dx, dy = _STEPS[direction]
        except KeyError:
            raise ValueError(f"Unknown bin direction: {direction!r}") from None
        return PixelRef(self.x + dx, self.y + dy)

    def is_even(self) -> bool:
        """Parity test used to thin out roots among context-filled cells."""

        return self.x % 2 == 0 and self.y % 2 == 0


__all__ = [
    "DIAGONAL",
    "HORIZONTAL",
    "NEGDIAGONAL",
    "POSDIAGONAL",
    "VERTICAL",
    "PixelRef",
]
