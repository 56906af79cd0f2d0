"""
Holdout split generation.

Split structure
---------------
Given a series of length ``n`` and a requested holdout length ``H``:

  h     = clamp(H, 1, n − 1)
  train = values[0 : n − h]
  test  = values[n − h : n]

The clamp keeps at least one training observation and at least one test
observation, so a request of ``H >= n`` degrades to ``h = n − 1`` with a
single training point instead of failing.  A series with fewer than two
observations cannot be split at all.

Leakage prevention
------------------
Every training index is strictly before every test index.  The forecasting
engines receive only ``train``; ``test`` is used for scoring alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class HoldoutSplit:
    """One train/test partition of a series of length ``n_total``.

    Attributes:
        n_total:   Length of the full series.
        requested: Holdout length asked for.
        horizon:   Effective holdout length after clamping (0 if unsplittable).
    """

    n_total: int
    requested: int
    horizon: int

    @property
    def train_length(self) -> int:
        return self.n_total - self.horizon

    @property
    def is_valid(self) -> bool:
        return self.horizon >= 1 and self.train_length >= 1

    def train(self, values: Sequence[T]) -> list[T]:
        return list(values[: self.train_length])

    def test(self, values: Sequence[T]) -> list[T]:
        return list(values[self.train_length :]) if self.horizon else []


def split_holdout(n_total: int, horizon: int) -> HoldoutSplit:
    """Clamp ``horizon`` into ``[1, n_total − 1]`` and describe the split.

    Args:
        n_total: Length of the series to split.
        horizon: Requested holdout length.

    Returns:
        :class:`HoldoutSplit`.  When ``n_total < 2`` the split has
        ``horizon == 0`` and ``is_valid`` is False.
    """
    if n_total < 2:
        return HoldoutSplit(n_total=n_total, requested=horizon, horizon=0)
    h = max(1, min(horizon, n_total - 1))
    return HoldoutSplit(n_total=n_total, requested=horizon, horizon=h)
