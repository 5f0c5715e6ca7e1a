[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridlearn"
version = "0.1.0"
description = "Clustering, nearest-neighbour classification, discretisation filters and evaluation metrics for tabular data"
requires-python = ">=3.10"
keywords = [
    "machine-learning",
    "clustering",
    "dbscan",
    "knn",
    "kd-tree",
    "chimerge",
    "discretization",
    "confusion-matrix",
    "cross-validation",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gridlearn"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
