"""Equal-width ("histogram") binning of numeric columns."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from gridlearn.discretize import DiscretizeFilter


class BinningFilter(DiscretizeFilter):
    """Splits each selected column's training range into ``bins`` equal bins."""

    precision = 2

    def __init__(self, rows: Sequence[Sequence[Any]], bins: int) -> None:
        super().__init__(rows)
        self.bins = bins
        self.min_vals: dict[int, float] = {}
        self.max_vals: dict[int, float] = {}

    def train(self) -> None:
        """Record the minimum and maximum of every selected column."""
        for column in self.attributes():
            values = self._values(column)
            self.min_vals[column] = min(values, default=math.inf)
            self.max_vals[column] = max(values, default=-math.inf)
        self.trained = True

    def _range(self, column: int) -> tuple[float, float]:
        if column not in self.min_vals:
            raise RuntimeError("filter has not been trained")
        return self.min_vals[column], self.max_vals[column]

    def transform(self, column: int, value: Any) -> Any:
        """Return the bin index of ``value``; unselected columns pass through."""
        if not self._selected(column):
            return value
        low, high = self._range(column)
        value = float(value)
        if value <= low:
            return 0
        delta = (high - low) / self.bins
        return int(math.floor((value - low) / delta + 0.0001))

    def categories(self, column: int) -> list[str]:
        """Return the lower edge of every bin (and the upper bound) as text."""
        if not self._selected(column):
            raise ValueError(f"column {column} is not discretised")
        low, high = self._range(column)
        delta = (high - low) / self.bins
        labels: list[str] = []
        for i in range(self.bins + 1):
            label = f"{i * delta + low:.{self.precision}f}"
            if label not in labels:
                labels.append(label)
        return labels

    def __str__(self) -> str:
        return f"BinningFilter({len(self.attributes())} Attribute(s), {self.bins} bin(s))"