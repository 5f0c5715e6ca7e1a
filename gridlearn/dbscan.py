"""Density-based clustering (DBSCAN)."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from itertools import combinations

import numpy as np

from gridlearn.clustermap import ClusterMap

Metric = Callable[[np.ndarray, np.ndarray], float]


def _euclidean(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


@dataclass
class DBSCANParameters:
    """Parameters of a DBSCAN run.

    ``eps`` is the neighbourhood radius, ``min_count`` the number of points a
    neighbourhood needs to be dense, ``metric`` the pairwise distance and
    ``columns`` the row columns used (all of them when None).
    """

    eps: float
    min_count: int
    metric: Metric = _euclidean
    columns: Sequence[int] | None = None


def _as_matrix(rows, columns: Sequence[int] | None) -> np.ndarray:
    data = np.asarray(rows, dtype=float)
    if data.ndim != 2:
        data = data.reshape(len(rows), -1) if len(rows) else np.zeros((0, 0))
    if columns is not None:
        data = data[:, list(columns)]
    return data


def pairwise_distances(rows, metric: Metric = _euclidean) -> np.ndarray:
    """Return the symmetric matrix of distances between every pair of rows."""
    data = _as_matrix(rows, None)
    count = len(data)
    dist = np.zeros((count, count))
    for i, j in combinations(range(count), 2):
        d = metric(data[i], data[j])
        dist[i, j] = d
        dist[j, i] = d
    return dist


def region_query(point: int, distances: np.ndarray, eps: float) -> set[int]:
    """Return the indices of every point within ``eps`` of ``point``."""
    return set(np.flatnonzero(distances[point] <= eps).tolist())


def dbscan(rows, params: DBSCANParameters) -> ClusterMap:
    """Cluster ``rows`` and return a map of cluster id to row indices.

    Clusters are numbered from 1; noise points belong to no cluster.
    """
    data = _as_matrix(rows, params.columns)
    dist = pairwise_distances(data, params.metric)
    count = len(dist)

    clusters = ClusterMap()
    visited: set[int] = set()
    clustered: set[int] = set()

    def expand(point: int, neighbours: set[int], cluster: int) -> None:
        if point in clustered:
            raise RuntimeError(f"point {point} is already assigned to a cluster")
        members = clusters.setdefault(cluster, [])
        members.append(point)
        clustered.add(point)
        visited.add(point)

        i = 0
        while i < count:
            if i not in neighbours or i in visited:
                i += 1
                continue
            visited.add(i)
            reachable = region_query(i, dist, params.eps)
            grown = len(reachable) >= params.min_count
            if grown:
                neighbours |= reachable
            if i not in clustered:
                members.append(i)
                clustered.add(i)
            i = 0 if grown else i + 1

    cluster = 0
    for i in range(count):
        if i in visited:
            continue
        visited.add(i)
        neighbours = region_query(i, dist, params.eps)
        if len(neighbours) < params.min_count:
            clustered |= neighbours
            continue
        cluster += 1
        expand(i, neighbours, cluster)

    for cid in [cid for cid, members in clusters.items() if len(members) < params.min_count]:
        del clusters[cid]
    return clusters