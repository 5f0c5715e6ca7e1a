# gridlearn

Small, readable machine-learning building blocks for numeric tabular data.
The package works on plain rows of numbers (lists or NumPy arrays) with
class labels as strings.

## What is inside

- `gridlearn.clustermap` – `ClusterMap`, a `dict` from cluster id to a list
  of row indices. `invert()` gives the row-to-cluster mapping and `equals()`
  checks that two clusterings are the same up to relabelling; both raise
  `ClusterMapError` (a `ValueError`) describing what is wrong.
- `gridlearn.dbscan` – density-based clustering. `dbscan(rows, params)`
  takes `DBSCANParameters(eps, min_count, metric, columns)` and returns a
  `ClusterMap` whose clusters are numbered from 1; noise rows belong to no
  cluster. `pairwise_distances(rows, metric)` and
  `region_query(point, distances, eps)` are the helpers it is built from.
- `gridlearn.heap` – `MaxHeap`, a binary max-heap of `HeapNode` candidates
  ordered by distance.
- `gridlearn.kdtree` – `KDTree` with `build(data)` and
  `search(k, distance, target)`, which returns the row numbers and distances
  of the `k` nearest rows, nearest first.
- `gridlearn.knn` – the distances `euclidean`, `manhattan` and `cosine`;
  `KNNClassifier(distance, algorithm, neighbours)` with `"linear"` or
  `"kdtree"` search, an optional `weighted` vote (inverse distance), and
  `save(path)` / `load(path)` to a JSON file (`reload_knn_classifier(path)`
  loads one directly); and `KNNRegressor(distance)`, which predicts the mean
  value of the `k` nearest rows.
- `gridlearn.discretize` – `DiscretizeFilter`, the shared base that holds the
  training rows and the numeric columns chosen with `add_attribute(column)`.
- `gridlearn.binning` – `BinningFilter(rows, bins)`: equal-width binning of
  the chosen columns (`train()`, `transform(column, value)`,
  `categories(column)`).
- `gridlearn.chimerge` – supervised discretisation by ChiMerge:
  `chi_merge(...)`, the frequency-table and chi-squared helpers, and
  `ChiMergeFilter(rows, classes, significance)` with the same
  `train` / `transform` / `categories` interface.
- `gridlearn.confusion` – `confusion_matrix(reference, predicted)` and the
  metrics built on it: `true_positives`, `false_positives`,
  `false_negatives`, `true_negatives`, `precision`, `recall`, `f1_score`,
  `accuracy`, `micro_precision`, `macro_precision`, `micro_recall`,
  `macro_recall`, plus the text tables `summary(c)` and
  `show_confusion_matrix(c)`.
- `gridlearn.crossfold` – `cross_fold_confusion_matrices(rows, labels,
  classifier, folds, rng)` assigns rows to random folds and returns one
  confusion matrix per fold; `cross_validated_metric(matrices, metric)`
  returns the mean and variance of a metric across them. Any object with
  `fit(rows, labels)` and `predict(rows)` can be used as the classifier.

## Installation

```
pip install gridlearn
```

For running the tests:

```
pip install "gridlearn[test]"
pytest
```

## Example

```python
from gridlearn.knn import KNNClassifier
from gridlearn.confusion import confusion_matrix, summary

train = [[1.0, 1.0], [1.2, 0.9], [5.0, 5.1], [5.2, 4.8]]
labels = ["blue", "blue", "red", "red"]

cls = KNNClassifier("euclidean", "kdtree", 2)
cls.fit(train, labels)
predicted = cls.predict([[1.1, 1.0], [5.1, 5.0]])

matrix = confusion_matrix(["blue", "red"], predicted)
print(summary(matrix))
```

Clustering with DBSCAN:

```python
from gridlearn.dbscan import DBSCANParameters, dbscan
from gridlearn.knn import euclidean

rows = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [10.0, 10.0]]
clusters = dbscan(rows, DBSCANParameters(eps=1.0, min_count=2, metric=euclidean))
for cluster_id, members in clusters.items():
    print(cluster_id, members)
```

Cross-validation:

```python
import random

from gridlearn.confusion import accuracy
from gridlearn.crossfold import cross_fold_confusion_matrices, cross_validated_metric

matrices = cross_fold_confusion_matrices(
    train, labels, KNNClassifier("euclidean", "linear", 1), 2, random.Random(1)
)
mean, variance = cross_validated_metric(matrices, accuracy)
```

## What it does not do

- There is no Gaussian-mixture (expectation–maximisation) clustering; the
  clustering on offer is DBSCAN.
- There is no dataset loading: rows are passed in as lists or arrays, and
  reading CSV or other files is left to the caller.
- There is no command-line tool; everything is used as a library.