import pytest

from gridlearn.binning import BinningFilter

SEPAL_LENGTH = [
    5.1, 4.9, 4.7, 4.6, 5.0, 5.4, 4.6, 5.0, 4.4, 4.9,
    5.4, 4.8, 4.8, 4.3, 5.8, 5.7, 5.4, 5.1, 5.7, 5.1,
    7.0, 6.4, 6.9, 5.5, 6.5, 5.7, 6.3, 4.9, 6.6, 5.2,
    6.3, 5.8, 7.1, 6.3, 6.5, 7.6, 4.9, 7.3, 6.7, 7.9,
]


def _filter(bins=10):
    rows = [[v, float(i)] for i, v in enumerate(SEPAL_LENGTH)]
    filt = BinningFilter(rows, bins)
    filt.add_attribute(0)
    filt.train()
    return filt


def test_extremes_map_to_first_and_last_bin():
    filt = _filter()
    assert filt.transform(0, min(SEPAL_LENGTH)) == 0
    assert filt.transform(0, max(SEPAL_LENGTH)) == 10


def test_bins_are_in_range_and_monotonic():
    filt = _filter()
    indices = [filt.transform(0, v) for v in sorted(SEPAL_LENGTH)]
    assert all(0 <= i <= 10 for i in indices)
    assert indices == sorted(indices)


def test_category_labels_match_bins():
    filt = _filter()
    labels = filt.categories(0)
    assert len(labels) == 11
    assert labels[0] == "4.30"
    assert labels[-1] == "7.90"
    for v in SEPAL_LENGTH:
        assert float(labels[filt.transform(0, v)]) <= v + 0.01


def test_records_training_range():
    filt = _filter()
    assert filt.min_vals[0] == min(SEPAL_LENGTH)
    assert filt.max_vals[0] == max(SEPAL_LENGTH)
    assert filt.trained is True


def test_unselected_column_passes_through():
    filt = _filter()
    assert filt.transform(1, 12.0) == 12.0
    with pytest.raises(ValueError):
        filt.categories(1)


def test_untrained_transform_raises():
    filt = BinningFilter([[1.0], [2.0]], 4)
    filt.add_attribute(0)
    with pytest.raises(RuntimeError):
        filt.transform(0, 1.5)


def test_string():
    assert str(_filter(5)) == "BinningFilter(1 Attribute(s), 5 bin(s))"