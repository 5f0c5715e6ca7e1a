"""Confusion matrices and the classification metrics derived from them."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

ConfusionMatrix = dict[str, dict[str, int]]

_TAB_WIDTH = 8


def confusion_matrix(reference: Sequence[str], predicted: Sequence[str]) -> ConfusionMatrix:
    """Count reference-class / predicted-class pairs."""
    if len(reference) != len(predicted):
        raise ValueError(
            f"Row count mismatch: ref has {len(reference)} rows, "
            f"gen has {len(predicted)} rows"
        )
    matrix: ConfusionMatrix = {}
    for ref, gen in zip(reference, predicted):
        row = matrix.setdefault(ref, {})
        row[gen] = row.get(gen, 0) + 1
    return matrix


def _ratio(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator:
        return math.copysign(math.inf, numerator)
    return math.nan


def true_positives(cls: str, c: Mapping[str, Mapping[str, int]]) -> float:
    """Number of times ``cls`` was predicted correctly."""
    return float(c.get(cls, {}).get(cls, 0))


def false_positives(cls: str, c: Mapping[str, Mapping[str, int]]) -> float:
    """Number of times another class was predicted as ``cls``."""
    return float(sum(row.get(cls, 0) for ref, row in c.items() if ref != cls))


def false_negatives(cls: str, c: Mapping[str, Mapping[str, int]]) -> float:
    """Number of times ``cls`` was predicted as another class."""
    return float(sum(n for gen, n in c.get(cls, {}).items() if gen != cls))


def true_negatives(cls: str, c: Mapping[str, Mapping[str, int]]) -> float:
    """Number of rows that neither are nor were predicted as ``cls``."""
    return float(
        sum(
            n
            for ref, row in c.items()
            if ref != cls
            for gen, n in row.items()
            if gen != cls
        )
    )


def precision(cls: str, c: Mapping[str, Mapping[str, int]]) -> float:
    """Fraction of predictions of ``cls`` that were correct."""
    tp = true_positives(cls, c)
    return _ratio(tp, tp + false_positives(cls, c))


def recall(cls: str, c: Mapping[str, Mapping[str, int]]) -> float:
    """Fraction of rows of ``cls`` that were predicted as ``cls``."""
    tp = true_positives(cls, c)
    return _ratio(tp, tp + false_negatives(cls, c))


def f1_score(cls: str, c: Mapping[str, Mapping[str, int]]) -> float:
    """Harmonic mean of precision and recall for ``cls``."""
    p = precision(cls, c)
    r = recall(cls, c)
    return _ratio(2 * p * r, p + r)


def accuracy(c: Mapping[str, Mapping[str, int]]) -> float:
    """Fraction of all rows that were classified correctly."""
    correct = sum(row.get(ref, 0) for ref, row in c.items())
    total = sum(sum(row.values()) for row in c.values())
    return _ratio(float(correct), float(total))


def micro_precision(c: Mapping[str, Mapping[str, int]]) -> float:
    """Precision from the true and false positives summed over all classes."""
    tp = sum(true_positives(k, c) for k in c)
    fp = sum(false_positives(k, c) for k in c)
    return _ratio(tp, tp + fp)


def macro_precision(c: Mapping[str, Mapping[str, int]]) -> float:
    """Mean of the per-class precisions."""
    return _ratio(sum(precision(k, c) for k in c), float(len(c)))


def micro_recall(c: Mapping[str, Mapping[str, int]]) -> float:
    """Recall from the true positives and false negatives summed over all classes."""
    tp = sum(true_positives(k, c) for k in c)
    fn = sum(false_negatives(k, c) for k in c)
    return _ratio(tp, tp + fn)


def macro_recall(c: Mapping[str, Mapping[str, int]]) -> float:
    """Mean of the per-class recalls."""
    return _ratio(sum(recall(k, c) for k in c), float(len(c)))


def _fixed(value: float, digits: int) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:.{digits}f}"


def _tabulate(lines: list[tuple[list[str], str]]) -> str:
    """Align tab-terminated cells into columns padded with tabs."""
    widths: list[int] = []
    for cells, _ in lines:
        for col, cell in enumerate(cells):
            if col == len(widths):
                widths.append(0)
            widths[col] = max(widths[col], len(cell))

    out = []
    for cells, trailing in lines:
        parts = []
        for col, cell in enumerate(cells):
            cell_width = -(-widths[col] // _TAB_WIDTH) * _TAB_WIDTH
            padding = cell_width - len(cell)
            parts.append(cell + "\t" * (-(-padding // _TAB_WIDTH)))
        out.append("".join(parts) + trailing + "\n")
    return "".join(out)


def summary(c: Mapping[str, Mapping[str, int]]) -> str:
    """Return a table of per-class metrics followed by the overall accuracy."""
    lines: list[tuple[list[str], str]] = [
        (
            ["Reference Class", "True Positives", "False Positives",
             "True Negatives", "Precision", "Recall"],
            "F1 Score",
        ),
        (
            ["---------------", "--------------", "---------------",
             "--------------", "---------", "------"],
            "--------",
        ),
    ]
    for k in c:
        lines.append(
            (
                [
                    k,
                    _fixed(true_positives(k, c), 0),
                    _fixed(false_positives(k, c), 0),
                    _fixed(true_negatives(k, c), 0),
                    _fixed(precision(k, c), 4),
                    _fixed(recall(k, c), 4),
                ],
                _fixed(f1_score(k, c), 4),
            )
        )
    return _tabulate(lines) + f"Overall accuracy: {_fixed(accuracy(c), 4)}\n"


def show_confusion_matrix(c: Mapping[str, Mapping[str, int]]) -> str:
    """Return a human-readable grid of the matrix's counts."""
    classes = list(c)
    lines: list[tuple[list[str], str]] = [
        (["Reference Class", *classes], ""),
        (["---------------", *("-" * len(k) for k in classes)], ""),
    ]
    for ref in classes:
        row = c[ref]
        lines.append(([ref, *(str(row.get(gen, 0)) for gen in classes)], ""))
    return _tabulate(lines)