"""Per-cell attribute storage for analysis results."""

from __future__ import annotations

import bisect
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from .pixel import PixelRef


_INITIAL_CAPACITY = 16


class AttributeTable:
    """Columnar float32 table with one row per filled grid cell.

    Columns are kept in alphabetical order and addressed by position, so a
    caller registering several columns must insert them alphabetically for
    the indices it was handed to remain valid.  Unset values are ``NaN``.

    Column buffers are over-allocated and doubled when full, so registering
    rows one at a time stays linear in the row count.
    """

    def __init__(self, refs: Iterable[PixelRef] = ()) -> None:
        self._row_ids: Dict[PixelRef, int] = {}
        self._refs: List[PixelRef] = []
        self._names: List[str] = []
        self._values: List[np.ndarray] = []
        self._capacity = _INITIAL_CAPACITY
        self.displayed_column: Optional[int] = None
        for ref in refs:
            self.add_row(ref)

    def __len__(self) -> int:
        return len(self._refs)

    @property
    def column_names(self) -> List[str]:
        return list(self._names)

    def add_row(self, ref: PixelRef) -> int:
        """Register a row for ``ref`` and return its row id."""

        ref = PixelRef(*ref)
        if ref in self._row_ids:
            return self._row_ids[ref]
        row = len(self._refs)
        self._row_ids[ref] = row
        self._refs.append(ref)
        if row == self._capacity:
            self._grow()
        return row

    def has_row(self, ref: PixelRef) -> bool:
        return PixelRef(*ref) in self._row_ids

    def get_row_id(self, ref: PixelRef) -> int:
        try:
            return self._row_ids[PixelRef(*ref)]
        except KeyError:
            raise KeyError(f"No attribute row for cell {tuple(ref)}") from None

    def insert_column(self, name: str) -> int:
        """Add ``name`` in sorted position and return its column index.

        Inserting a name that already exists returns the existing index and
        leaves its values untouched.
        """

        if name in self._names:
            return self._names.index(name)
        position = bisect.bisect_left(self._names, name)
        self._names.insert(position, name)
        self._values.insert(position, np.full(self._capacity, np.nan, dtype=np.float32))
        if self.displayed_column is not None and self.displayed_column >= position:
            self.displayed_column += 1
        return position

    def get_column_index(self, name: str) -> int:
        try:
            return self._names.index(name)
        except ValueError:
            raise KeyError(f"Unknown attribute column: {name!r}") from None

    def set_value(self, row: int, column: int, value: float) -> None:
        self._column(column)[self._check_row(row)] = np.float32(value)

    def get_value(self, row: int, column: int) -> float:
        return float(self._column(column)[self._check_row(row)])

    def column_values(self, column: int) -> np.ndarray:
        return self._column(column).copy()

    def set_displayed_column(self, column: int) -> None:
        self._column(column)
        self.displayed_column = column

    def to_frame(self) -> pd.DataFrame:
        """Export the table as a DataFrame with ``x``/``y`` cell coordinates."""

        data = {
            "x": np.array([ref.x for ref in self._refs], dtype=int),
            "y": np.array([ref.y for ref in self._refs], dtype=int),
        }
        for column, name in enumerate(self._names):
            data[name] = self._column(column).copy()
        return pd.DataFrame(data)

    def _column(self, column: int) -> np.ndarray:
        if not 0 <= column < len(self._values):
            raise IndexError(f"Attribute column index out of range: {column}")
        return self._values[column][: len(self._refs)]

    def _check_row(self, row: int) -> int:
        if not 0 <= row < len(self._refs):
            raise IndexError(f"Attribute row index out of range: {row}")
        return row

    def _grow(self) -> None:
        self._capacity *= 2
        for index, values in enumerate(self._values):
            grown = np.full(self._capacity, np.nan, dtype=np.float32)
            grown[: len(values)] = values
            self._values[index] = grown


__all__ = ["AttributeTable"]
