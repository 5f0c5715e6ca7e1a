"""Supervised discretisation by merging intervals with similar class mixes."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from gridlearn.discretize import DiscretizeFilter


@dataclass
class FrequencyTableEntry:
    """A numeric value and how often each class was observed with it."""

    value: float
    frequency: dict[str, int] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.value:.2f} {self.frequency}"


def build_frequency_table(
    values: Sequence[float], classes: Sequence[str]
) -> list[FrequencyTableEntry]:
    """Count classes per distinct value, in order of first appearance."""
    if len(values) != len(classes):
        raise ValueError(
            f"row count mismatch: {len(values)} values but {len(classes)} classes"
        )
    table: dict[float, FrequencyTableEntry] = {}
    for value, cls in zip(values, classes):
        value = float(value)
        entry = table.get(value)
        if entry is None:
            entry = table[value] = FrequencyTableEntry(value)
        entry.frequency[cls] = entry.frequency.get(cls, 0) + 1
    return list(table.values())


def _pow(x: float, y: float) -> float:
    if x == 0 and y < 0:
        return math.inf
    try:
        return math.pow(x, y)
    except OverflowError:
        return math.inf


def _gamma(x: float) -> float:
    if x == 0:
        return math.inf
    try:
        return math.gamma(x)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def chi_squared_pdf(k: float, x: float) -> float:
    """Density of the chi-squared distribution with ``k`` degrees of freedom."""
    if x < 0:
        return 0.0
    half = k / 2
    top = _pow(x, half - 1) * math.exp(-x / 2)
    bottom = _pow(2.0, half) * _gamma(half)
    if bottom == 0:
        return math.copysign(math.inf, top) if top else math.nan
    return top / bottom


def chi_squared_percentile(k: int, x: float) -> float:
    """Cumulative chi-squared probability of ``x`` by numerical integration."""
    intervals = 4 * 32
    w = x / intervals
    values = [chi_squared_pdf(float(k), w * i) for i in range(intervals + 1)]
    ret1 = values[0] + values[-1]
    ret2 = sum(values[2 : intervals - 1 : 4])
    ret3 = sum(values[4 : intervals - 3 : 4])
    ret4 = sum(values[1:intervals:2])
    return (2.0 * w / 45) * (7 * ret1 + 12 * ret2 + 14 * ret3 + 32 * ret4)


def count_classes(entries: Sequence[FrequencyTableEntry]) -> dict[str, int]:
    """Total number of observations of each class across the table."""
    counts: dict[str, int] = {}
    for entry in entries:
        for cls, n in entry.frequency.items():
            counts[cls] = counts.get(cls, 0) + n
    return counts


def chi_statistic(entry1: FrequencyTableEntry, entry2: FrequencyTableEntry) -> float:
    """Chi-squared statistic of the class distributions of two adjacent rows."""
    counts = count_classes([entry1, entry2])
    observed1 = sum(entry1.frequency.values())
    observed2 = sum(entry2.frequency.values())
    total = observed1 + observed2

    chi = 0.0
    for entry, observed in ((entry1, observed1), (entry2, observed2)):
        for cls in sorted(counts):
            expected = counts[cls] * observed / total
            numerator = (entry.frequency.get(cls, 0) - expected) ** 2
            chi += numerator / max(expected, 0.5)
    return chi


def merge_adjacent(
    freq: Sequence[FrequencyTableEntry], index: int
) -> list[FrequencyTableEntry]:
    """Return a table with rows ``index`` and ``index + 1`` combined.

    The merged row keeps the value of the lower row.
    """
    first, second = freq[index], freq[index + 1]
    merged = FrequencyTableEntry(first.value, count_classes([first, second]))
    return [*freq[:index], merged, *freq[index + 2 :]]


def chi_merge(
    values: Sequence[float],
    classes: Sequence[str],
    significance: float,
    min_rows: int,
    max_rows: int,
) -> list[FrequencyTableEntry]:
    """Discretise already-sorted ``values`` by ChiMerge.

    Adjacent rows are merged while the table is above ``max_rows`` or while
    the most similar pair is not significant at ``significance``, as long as
    the table holds more than ``min_rows`` rows.
    """
    if min_rows < 2:
        min_rows = 2
    if not min_rows < max_rows:
        max_rows = min_rows + 1
    if significance == 0:
        significance = 10

    freq = build_frequency_table(values, classes)
    degrees_of_freedom = len(count_classes(freq)) - 1
    while len(freq) > min_rows:
        stats = [chi_statistic(a, b) for a, b in zip(freq, freq[1:])]
        best = min((s for s in stats if not math.isnan(s)), default=math.inf)
        indexes = [i for i, s in enumerate(stats) if s == best]

        merge = len(freq) > max_rows
        if chi_squared_percentile(degrees_of_freedom, best) < significance:
            merge = True
        if not merge or not indexes:
            break
        for offset, index in enumerate(indexes):
            freq = merge_adjacent(freq, index - offset)
    return freq


class ChiMergeFilter(DiscretizeFilter):
    """Discretises selected columns by ChiMerge against the row classes."""

    def __init__(
        self,
        rows: Sequence[Sequence[Any]],
        classes: Sequence[str],
        significance: float,
    ) -> None:
        super().__init__(rows)
        self.classes = list(classes)
        if len(self.classes) != len(self.rows):
            raise ValueError(
                f"row count mismatch: {len(self.rows)} rows "
                f"but {len(self.classes)} classes"
            )
        self.significance = significance
        self.min_rows = 2
        self.max_rows = len(self.rows)
        self.tables: dict[int, list[FrequencyTableEntry]] = {}

    def train(self) -> None:
        """Build the interval table of every selected column."""
        for column in self.attributes():
            values = self._values(column)
            order = sorted(range(len(values)), key=values.__getitem__)
            self.tables[column] = chi_merge(
                [values[i] for i in order],
                [self.classes[i] for i in order],
                self.significance,
                self.min_rows,
                self.max_rows,
            )
        self.trained = True

    def _table(self, column: int) -> list[FrequencyTableEntry]:
        if column not in self.tables:
            raise RuntimeError("filter has not been trained")
        return self.tables[column]

    def transform(self, column: int, value: Any) -> Any:
        """Return the interval index of ``value``; unselected columns pass through."""
        if not self._selected(column):
            return value
        value = float(value)
        index = 0
        for position, entry in enumerate(self._table(column)):
            if not entry.value < value:
                break
            index = position
        return index

    def categories(self, column: int) -> list[str]:
        """Return the lower bound of each interval of ``column`` as text."""
        if not self._selected(column):
            raise ValueError(f"column {column} is not discretised")
        labels: list[str] = []
        for entry in self._table(column):
            label = f"{entry.value:f}"
            if label not in labels:
                labels.append(label)
        return labels

    def __str__(self) -> str:
        return (
            f"ChiMergeFilter({len(self.tables)} Attributes, "
            f"{self.significance:.2f} Significance)"
        )