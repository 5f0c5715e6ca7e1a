"""K nearest neighbours classification and regression."""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Sequence
from os import PathLike
from typing import Any

import numpy as np

from gridlearn.kdtree import KDTree

Metric = Callable[[Sequence[float], Sequence[float]], float]

_ALGORITHMS = ("linear", "kdtree")
_CLASSIFIER_NAME = "KNN"
_CLASSIFIER_VERSION = "1.0"


def euclidean(a: Sequence[float], b: Sequence[float]) -> float:
    """Straight-line distance between two vectors."""
    diff = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    return float(np.sqrt(np.sum(diff * diff)))


def manhattan(a: Sequence[float], b: Sequence[float]) -> float:
    """Sum of absolute coordinate differences between two vectors."""
    diff = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    return float(np.sum(np.abs(diff)))


def cosine(a: Sequence[float], b: Sequence[float]) -> float:
    """One minus the cosine of the angle between two vectors."""
    x = np.asarray(a, dtype=float)
    y = np.asarray(b, dtype=float)
    norms = float(np.linalg.norm(x) * np.linalg.norm(y))
    if norms == 0:
        return math.nan
    return 1.0 - float(np.dot(x, y)) / norms


_METRICS: dict[str, Metric] = {
    "euclidean": euclidean,
    "manhattan": manhattan,
    "cosine": cosine,
}


def _as_matrix(rows) -> np.ndarray:
    data = np.asarray(rows, dtype=float)
    if data.ndim == 1:
        data = data.reshape(-1, 1) if data.size else data.reshape(0, 0)
    if data.ndim != 2:
        raise ValueError("rows must form a two-dimensional table")
    return data


class KNNClassifier:
    """Labels rows by a vote among their nearest training rows.

    ``distance`` is one of 'euclidean', 'manhattan' or 'cosine' and
    ``algorithm`` one of 'linear' or 'kdtree'. With ``weighted`` set, each
    neighbour's vote counts by the inverse of its distance.
    """

    def __init__(self, distance: str, algorithm: str, neighbours: int) -> None:
        self.distance = distance
        self.algorithm = algorithm
        self.neighbours = neighbours
        self.weighted = False
        self.allow_optimisations = True
        self._train: np.ndarray | None = None
        self._labels: list[str] = []

    def fit(self, rows, labels: Sequence[str]) -> None:
        """Store the training rows and their labels."""
        data = _as_matrix(rows)
        labels = [str(label) for label in labels]
        if len(data) != len(labels):
            raise ValueError(
                f"row count mismatch: {len(data)} rows but {len(labels)} labels"
            )
        self._train = data
        self._labels = labels

    def _vote(self, indices: Sequence[int]) -> str:
        counts: dict[str, int] = {}
        for index in indices:
            label = self._labels[index]
            counts[label] = counts.get(label, 0) + 1
        return max(counts, key=counts.__getitem__)

    def _weighted_vote(self, indices: Sequence[int], lengths: Sequence[float]) -> str:
        scores: dict[str, float] = {}
        for index, length in zip(indices, lengths):
            label = self._labels[index]
            weight = math.inf if length == 0 else 1.0 / length
            scores[label] = scores.get(label, 0.0) + weight
        return max(scores, key=scores.__getitem__)

    def _decide(self, indices: Sequence[int], lengths: Sequence[float]) -> str:
        if self.weighted:
            return self._weighted_vote(indices, lengths)
        return self._vote(indices)

    def _optimised_euclidean(self, data: np.ndarray) -> list[str]:
        train = self._train
        squared = ((data[:, None, :] - train[None, :, :]) ** 2).sum(axis=-1)
        order = np.argsort(squared, axis=1, kind="stable")[:, : self.neighbours]
        return [self._vote(row.tolist()) for row in order]

    def predict(self, rows) -> list[str]:
        """Return the predicted label of every row."""
        metric = _METRICS.get(self.distance)
        if metric is None:
            raise ValueError("unsupported distance function")
        if self.algorithm not in _ALGORITHMS:
            raise ValueError("unsupported searching algorithm")
        if self._train is None:
            raise RuntimeError("classifier has not been fitted")

        data = _as_matrix(rows)
        if len(data) == 0:
            return []
        if data.shape[1] != self._train.shape[1]:
            raise ValueError("attributes not compatible")
        k = self.neighbours
        if not 1 <= k <= len(self._train):
            raise ValueError(
                f"neighbours must be between 1 and {len(self._train)}, got {k}"
            )

        if self.algorithm == "linear":
            if self.allow_optimisations and self.distance == "euclidean":
                return self._optimised_euclidean(data)
            predictions = []
            for row in data:
                dists = np.array([metric(row, t) for t in self._train])
                nearest = np.argsort(dists, kind="stable")[:k].tolist()
                predictions.append(self._decide(nearest, dists[nearest].tolist()))
            return predictions

        tree = KDTree()
        tree.build(self._train.tolist())
        predictions = []
        for row in data:
            nearest, lengths = tree.search(k, metric, row.tolist())
            predictions.append(self._decide(nearest, lengths))
        return predictions

    def _metadata(self) -> dict[str, Any]:
        return {
            "distance_func": self.distance,
            "algorithm": self.algorithm,
            "neighbours": self.neighbours,
            "weighted": self.weighted,
            "allow_optimizations": self.allow_optimisations,
        }

    def save(self, path: str | PathLike) -> None:
        """Write the classifier and its training data to ``path`` as JSON."""
        document = {
            "format_version": 1,
            "classifier_name": _CLASSIFIER_NAME,
            "classifier_version": _CLASSIFIER_VERSION,
            "classifier_metadata": self._metadata(),
            "training_rows": None if self._train is None else self._train.tolist(),
            "training_labels": list(self._labels),
        }
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(document, handle)

    def load(self, path: str | PathLike) -> None:
        """Replace this classifier's state with the one saved at ``path``."""
        with open(path, encoding="utf-8") as handle:
            try:
                document = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError("can't understand this file format") from exc
        if not isinstance(document, dict):
            raise ValueError("can't understand this file format")
        if document.get("classifier_name") != _CLASSIFIER_NAME:
            raise ValueError("this file doesn't contain a KNN classifier")
        if document.get("classifier_version") != _CLASSIFIER_VERSION:
            raise ValueError("can't understand this file format")
        try:
            meta = document["classifier_metadata"]
            self.distance = str(meta["distance_func"])
            self.algorithm = str(meta["algorithm"])
            self.neighbours = int(meta["neighbours"])
            self.weighted = bool(meta["weighted"])
            self.allow_optimisations = bool(meta["allow_optimizations"])
            rows = document["training_rows"]
            labels = document["training_labels"]
        except (KeyError, TypeError) as exc:
            raise ValueError("can't understand this file format") from exc
        if rows is None:
            self._train = None
            self._labels = []
        else:
            self.fit(rows, labels)

    def __str__(self) -> str:
        return f"KNNClassifier({self.distance}, {self.neighbours})"


def reload_knn_classifier(path: str | PathLike) -> KNNClassifier:
    """Load a classifier saved with ``KNNClassifier.save``."""
    classifier = KNNClassifier("", "", 0)
    classifier.load(path)
    return classifier


class KNNRegressor:
    """Predicts a value as the mean of the values of the nearest rows."""

    _METRICS: dict[str, Metric] = {"euclidean": euclidean, "manhattan": manhattan}

    def __init__(self, distance: str) -> None:
        self.distance = distance
        self.data: np.ndarray | None = None
        self.values: list[float] = []

    def fit(self, data, values: Sequence[float]) -> None:
        """Store the training rows and their target values."""
        matrix = _as_matrix(data)
        values = [float(v) for v in values]
        if len(matrix) != len(values):
            raise ValueError(
                f"row count mismatch: {len(matrix)} rows but {len(values)} values"
            )
        self.data = matrix
        self.values = values

    def predict(self, vector: Sequence[float], k: int) -> float:
        """Return the mean value of the ``k`` rows nearest to ``vector``."""
        metric = self._METRICS.get(self.distance)
        if metric is None:
            raise ValueError("unsupported distance function")
        if self.data is None:
            raise RuntimeError("regressor has not been fitted")
        if not 1 <= k <= len(self.data):
            raise ValueError(f"k must be between 1 and {len(self.data)}, got {k}")
        dists = np.array([metric(row, vector) for row in self.data])
        nearest = np.argsort(dists, kind="stable")[:k]
        return sum(self.values[i] for i in nearest.tolist()) / k