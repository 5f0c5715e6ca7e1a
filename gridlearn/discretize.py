"""Common machinery for filters that discretise numeric columns."""

from __future__ import annotations

import numbers
from collections.abc import Sequence
from typing import Any


class DiscretizeFilter:
    """Holds the training rows and the set of columns selected for discretising."""

    def __init__(self, rows: Sequence[Sequence[Any]]) -> None:
        self.rows: list[tuple[Any, ...]] = [tuple(row) for row in rows]
        self._columns: dict[int, None] = {}
        self.trained = False

    @property
    def width(self) -> int:
        """Number of columns in the training rows."""
        return len(self.rows[0]) if self.rows else 0

    def add_attribute(self, column: int) -> None:
        """Select ``column`` for discretisation.

        Raises ValueError if the column does not exist and TypeError if it
        holds anything other than numbers.
        """
        if (
            isinstance(column, bool)
            or not isinstance(column, int)
            or not 0 <= column < self.width
        ):
            raise ValueError("invalid attribute")
        if not all(
            isinstance(row[column], numbers.Real) and not isinstance(row[column], bool)
            for row in self.rows
        ):
            raise TypeError(f"column {column} is not numeric")
        self._columns[column] = None

    def attributes(self) -> tuple[int, ...]:
        """Return the selected columns in the order they were added."""
        return tuple(self._columns)

    def _selected(self, column: int) -> bool:
        return column in self._columns

    def _values(self, column: int) -> list[float]:
        return [float(row[column]) for row in self.rows]