import math

import pytest

from gridlearn.kdtree import KDTree


def euclidean(a, b):
    return math.dist(a, b)


def manhattan(a, b):
    return sum(abs(x - y) for x, y in zip(a, b))


SIX_POINTS = [[2, 3], [5, 4], [4, 7], [8, 1], [7, 2], [9, 6]]


def test_build_no_input_data():
    with pytest.raises(ValueError, match="^no input data$"):
        KDTree().build([])


def test_build_feature_count_mismatch():
    with pytest.raises(ValueError, match="^amounts of features are not the same$"):
        KDTree().build([[3, 5], [6, 7, 10]])


def test_build_single_row():
    kd = KDTree()
    kd.build([[3, 5]])
    rows, lengths = kd.search(1, euclidean, [6, 9])
    assert rows == [0]
    assert lengths == [pytest.approx(5.0)]


def test_build_identical_rows():
    kd = KDTree()
    kd.build([[3, 5], [3, 5], [3, 5]])
    rows, lengths = kd.search(3, euclidean, [3, 5])
    assert sorted(rows) == [0, 1, 2]
    assert lengths == [0.0, 0.0, 0.0]


def test_search_k3_euclidean():
    kd = KDTree()
    kd.build(SIX_POINTS)
    rows, lengths = kd.search(3, euclidean, [7, 3])
    assert rows == [4, 3, 1]
    assert lengths == pytest.approx([1.0, math.sqrt(5), math.sqrt(5)])


def test_search_k2_euclidean():
    kd = KDTree()
    kd.build(SIX_POINTS)
    rows, _ = kd.search(2, euclidean, [7, 3])
    assert rows == [4, 1]


def test_search_with_manhattan():
    kd = KDTree()
    kd.build(SIX_POINTS)
    rows, lengths = kd.search(1, manhattan, [7, 3])
    assert rows == [4]
    assert lengths == [pytest.approx(1.0)]


def test_k_larger_than_training_data():
    kd = KDTree()
    kd.build([[3, 5], [2, 1]])
    with pytest.raises(ValueError, match="^k is largerer than amount of trainData$"):
        kd.search(3, euclidean, [7, 3])


def test_target_feature_count_mismatch():
    kd = KDTree()
    kd.build([[3, 5], [2, 1]])
    with pytest.raises(ValueError, match="^amount of features is not equal$"):
        kd.search(1, euclidean, [7, 3, 5])


def test_search_through_empty_branch():
    kd = KDTree()
    kd.build([[3, 5], [2, 1]])
    rows, lengths = kd.search(1, euclidean, [7, 3])
    assert rows == [0]
    assert lengths == [pytest.approx(math.sqrt(20))]


def test_search_all_nodes_left():
    kd = KDTree()
    kd.build([[1, 2], [5, 6], [9, 10]])
    rows, _ = kd.search(1, euclidean, [7, 3])
    assert rows[0] == 1


def test_node_farther_than_heap_max_left():
    kd = KDTree()
    kd.build([[1, 2], [5, 6], [9, 10]])
    rows, _ = kd.search(1, euclidean, [8, 7])
    assert rows[0] == 2


def test_node_farther_than_heap_max_right():
    kd = KDTree()
    kd.build([[1, 2], [5, 4], [9, 10]])
    rows, _ = kd.search(1, euclidean, [3, 3])
    assert rows[0] == 0


def test_k_must_be_positive():
    kd = KDTree()
    kd.build([[1, 2], [5, 4]])
    with pytest.raises(ValueError, match="at least 1"):
        kd.search(0, euclidean, [3, 3])


def test_search_matches_brute_force_ordering():
    data = [[float(i % 5), float((i * 7) % 11)] for i in range(20)]
    kd = KDTree()
    kd.build(data)
    target = [2.2, 4.9]
    _, lengths = kd.search(5, euclidean, target)
    best = sorted(euclidean(target, row) for row in data)[:5]
    assert lengths == pytest.approx(best)