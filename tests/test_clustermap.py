import pytest

from gridlearn.clustermap import ClusterMap, ClusterMapError


def test_only_cluster_zero():
    m1 = ClusterMap({0: [1, 2]})
    m2 = ClusterMap({0: [1, 2]})
    assert m1.equals(m2) is True


def test_empty_maps_are_equal():
    assert ClusterMap().equals(ClusterMap()) is True


def test_many_elements():
    m1 = ClusterMap({0: [1, 2, 3, 4, 5], 1: [11, 12, 13, 14, 15]})
    m2 = ClusterMap({0: [1, 2, 3, 4, 5], 1: [11, 12, 13, 14, 15]})
    assert m1.equals(m2) is True


def test_cluster_contents_differ():
    m1 = ClusterMap({1: [1, 2, 3], 0: [4, 5]})
    m2 = ClusterMap({1: [1, 2, 3], 0: [6, 5]})
    with pytest.raises(ClusterMapError):
        m1.equals(m2)


def test_cluster_count_differs():
    m1 = ClusterMap({1: [1, 2, 3], 0: [4, 5]})
    m2 = ClusterMap({1: [1, 2, 3]})
    with pytest.raises(ClusterMapError, match="same number of clusters"):
        m1.equals(m2)


def test_cluster_one_size_differs():
    m1 = ClusterMap({1: [1, 3], 0: [4, 5]})
    m2 = ClusterMap({1: [1, 2, 3]})
    with pytest.raises(ClusterMapError):
        m1.equals(m2)


def test_duplicate_in_cluster_one():
    m1 = ClusterMap({1: [1, 1], 0: [4, 5]})
    m2 = ClusterMap()
    with pytest.raises(ClusterMapError):
        m1.equals(m2)


def test_duplicate_in_cluster_zero():
    m1 = ClusterMap({1: [1, 2], 0: [4, 4]})
    m2 = ClusterMap()
    with pytest.raises(ClusterMapError):
        m1.equals(m2)


def test_exactly_the_same():
    m1 = ClusterMap({0: [1, 2, 3], 1: [4, 5]})
    m2 = ClusterMap({0: [1, 2, 3], 1: [4, 5]})
    assert m1.equals(m2) is True


def test_relabelled_clusters():
    m1 = ClusterMap({1: [1, 2, 3], 0: [4, 5]})
    m2 = ClusterMap({0: [1, 2, 3], 1: [4, 5]})
    assert m1.equals(m2) is True


def test_missing_clusters():
    m1 = ClusterMap({1: [1, 2, 3]})
    m2 = ClusterMap({1: [1, 2, 3], 0: [4, 5]})
    with pytest.raises(ClusterMapError):
        m1.equals(m2)


def test_missing_points():
    m1 = ClusterMap({1: [1, 3], 0: [4, 5]})
    m2 = ClusterMap({1: [1, 2, 3], 0: [4, 5]})
    with pytest.raises(ClusterMapError, match="doesn't contain"):
        m1.equals(m2)


def test_invalid_maps():
    m1 = ClusterMap({0: [1, 2, 3], 1: [4, 4, 5]})
    m2 = ClusterMap({0: [1, 2, 3], 1: [4, 5]})
    with pytest.raises(ClusterMapError, match="^ref:"):
        m1.equals(m2)


def test_invalid_other_map():
    m1 = ClusterMap({0: [1, 2, 3], 1: [4, 5]})
    m2 = ClusterMap({0: [1, 2, 3], 1: [4, 5, 5]})
    with pytest.raises(ClusterMapError, match="^other:"):
        m1.equals(m2)


def test_equals_accepts_plain_dict():
    m1 = ClusterMap({3: [0, 1], 4: [2]})
    assert m1.equals({8: [2], 9: [1, 0]}) is True


def test_invert():
    m = ClusterMap({0: [1, 2], 5: [3]})
    assert m.invert() == {1: 0, 2: 0, 3: 5}


def test_invert_rejects_shared_points():
    m = ClusterMap({0: [1, 2], 1: [2]})
    with pytest.raises(ClusterMapError, match="more than one cluster"):
        m.invert()