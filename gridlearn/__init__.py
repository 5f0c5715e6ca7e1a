"""DBSCAN clustering, k-d tree and k-nearest-neighbour models, discretisation filters and evaluation metrics for tabular data."""

__version__ = "0.1.0"