"""
Tests for holdout split generation.

What we test
------------
1. Clamping — requested horizon is forced into [1, n-1].
2. Partition — train and test are contiguous, disjoint, and cover the series.
3. No leakage — every train index precedes every test index.
4. Unsplittable series — fewer than two observations give an invalid split.
"""

from __future__ import annotations

import pytest

from weekly_forecast.backtest.splits import HoldoutSplit, split_holdout


@pytest.mark.parametrize(
    ("n", "requested", "expected"),
    [
        (10, 3, 3),
        (10, 9, 9),
        (10, 10, 9),
        (10, 50, 9),
        (10, 0, 1),
        (10, -4, 1),
        (2, 5, 1),
    ],
)
def test_horizon_clamped(n: int, requested: int, expected: int) -> None:
    split = split_holdout(n, requested)
    assert split.horizon == expected
    assert split.requested == requested
    assert split.is_valid


def test_horizon_at_least_series_length_leaves_one_training_point() -> None:
    split = split_holdout(5, 5)
    assert split.horizon == 4
    assert split.train_length == 1


def test_partition_covers_series() -> None:
    values = list(range(12))
    split = split_holdout(len(values), 4)
    train, test = split.train(values), split.test(values)
    assert train == list(range(8))
    assert test == [8, 9, 10, 11]
    assert train + test == values
    assert max(train) < min(test)


@pytest.mark.parametrize("n", [0, 1])
def test_unsplittable_series(n: int) -> None:
    split = split_holdout(n, 3)
    assert split.horizon == 0
    assert not split.is_valid
    assert split.test(list(range(n))) == []


def test_split_is_frozen() -> None:
    split = HoldoutSplit(n_total=10, requested=3, horizon=3)
    with pytest.raises(Exception):
        split.horizon = 4  # type: ignore[misc]
