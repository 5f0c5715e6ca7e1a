"""K-fold cross-validation producing one confusion matrix per fold."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from gridlearn.confusion import ConfusionMatrix, confusion_matrix


class Classifier(Protocol):
    """Anything that can be trained on labelled rows and then label new rows."""

    def fit(self, rows: Sequence[Any], labels: Sequence[str]) -> Any: ...

    def predict(self, rows: Sequence[Any]) -> Sequence[str]: ...


def cross_validated_metric(
    matrices: Sequence[ConfusionMatrix],
    metric: Callable[[ConfusionMatrix], float],
) -> tuple[float, float]:
    """Return the mean and (population) variance of ``metric`` over the folds."""
    scores = [metric(c) for c in matrices]
    if not scores:
        return math.nan, math.nan
    mean = sum(scores) / len(scores)
    variance = sum((s - mean) ** 2 for s in scores) / len(scores)
    return mean, variance


def cross_fold_confusion_matrices(
    rows: Sequence[Any],
    labels: Sequence[str],
    classifier: Classifier,
    folds: int,
    rng: random.Random | None = None,
) -> list[ConfusionMatrix]:
    """Assign every row to a random fold, then train on the other folds and
    evaluate on each fold in turn, returning one confusion matrix per fold."""
    if folds < 1:
        raise ValueError("the number of folds must be at least 1")
    rows = list(rows)
    labels = list(labels)
    if len(rows) != len(labels):
        raise ValueError(
            f"row count mismatch: {len(rows)} rows but {len(labels)} labels"
        )
    rng = rng if rng is not None else random.Random()

    members: list[list[int]] = [[] for _ in range(folds)]
    for index in range(len(rows)):
        members[rng.randrange(folds)].append(index)

    matrices: list[ConfusionMatrix] = []
    for fold, test_indices in enumerate(members):
        train_indices = [
            i for other, indices in enumerate(members) if other != fold for i in indices
        ]
        classifier.fit(
            [rows[i] for i in train_indices], [labels[i] for i in train_indices]
        )
        predicted = classifier.predict([rows[i] for i in test_indices])
        matrices.append(
            confusion_matrix([labels[i] for i in test_indices], list(predicted))
        )
    return matrices