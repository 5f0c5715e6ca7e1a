"""Cluster assignments keyed by cluster identifier."""

from __future__ import annotations

from collections.abc import Mapping, Sequence


class ClusterMapError(ValueError):
    """Raised when a cluster map is invalid or two maps do not correspond."""


class ClusterMap(dict):
    """Maps a cluster identifier to the list of point indices it contains."""

    def invert(self) -> dict[int, int]:
        """Return a mapping from point index to the cluster holding it."""
        inverse: dict[int, int] = {}
        for cluster, points in self.items():
            for point in points:
                if point in inverse:
                    raise ClusterMapError(
                        "not a valid cluster map "
                        "(points appear in more than one cluster)"
                    )
                inverse[point] = cluster
        return inverse

    def equals(self, other: Mapping[int, Sequence[int]]) -> bool:
        """Return True if the clusters of ``other`` are a relabelling of these.

        Raises ClusterMapError describing the first difference found.
        """
        other = other if isinstance(other, ClusterMap) else ClusterMap(other)
        if len(self) != len(other):
            raise ClusterMapError(
                "ref and other do not contain the same number of clusters "
                f"({len(self)} and {len(other)})"
            )

        try:
            ref_inverse = self.invert()
        except ClusterMapError as exc:
            raise ClusterMapError(f"ref: {exc}") from exc
        try:
            other_inverse = other.invert()
        except ClusterMapError as exc:
            raise ClusterMapError(f"other: {exc}") from exc

        relabel: dict[int, int] = {}
        for point, ref_cluster in ref_inverse.items():
            if point not in other_inverse:
                raise ClusterMapError(
                    f"failed to find reference point {point} in other"
                )
            other_cluster = other_inverse[point]
            mapped = relabel.setdefault(other_cluster, ref_cluster)
            if mapped != ref_cluster:
                raise ClusterMapError(
                    f"ref point {point} (cluster {other_cluster}) is assigned "
                    f"to a different cluster ({ref_cluster}) in ref {relabel!r}"
                )

        for old, points in other.items():
            new = relabel.get(old, 0)
            ref_points = self.get(new, [])
            if not set(points) <= set(ref_points):
                raise ClusterMapError(
                    f"re-labelled cluster {old} => {new} doesn't contain "
                    f"the same points ({ref_points}, {list(points)})"
                )
        return True