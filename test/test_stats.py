import pytest

from rowframe.compute import stats


def test_integers_stay_integers():
    assert stats.total([1, 2, 3]) == 6
    assert isinstance(stats.total([1, 2, 3]), int)
    assert stats.total([1, 2.5]) == 3.5


def test_integer_sums_are_exact():
    assert stats.total([2**62, 2**62]) == 2**63
    assert stats.total([-(2**63), -1]) == -(2**63) - 1
    assert stats.total([2**70, 1]) == 2**70 + 1
    assert stats.total([2**62, -(2**62), 5]) == 5


def test_huge_integers_are_compared_as_floats():
    assert stats.maximum([2**70, 1]) == 2**70
    assert stats.mean([2**70, 2**70]) == float(2**70)


def test_min_max_return_the_original_values():
    assert stats.minimum([2.5, 1]) == 1
    assert isinstance(stats.minimum([2.5, 1]), int)
    assert stats.maximum([2, 1.5]) == 2
    assert isinstance(stats.maximum([2, 1.5]), int)
    assert stats.maximum([1, 2.5]) == 2.5


@pytest.mark.parametrize(
    "kernel",
    [stats.total, stats.mean, stats.minimum, stats.maximum, stats.median, stats.std],
)
def test_empty_input(kernel):
    assert kernel([]) is None


def test_sample_statistics():
    assert stats.variance([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(4.5714285)
    assert stats.std([1]) is None
    assert stats.variance([1]) is None


def test_median():
    assert stats.median([3, 1, 2]) == 2
    assert stats.median([4, 1, 3, 2]) == 2.5
