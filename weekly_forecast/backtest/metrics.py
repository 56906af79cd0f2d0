"""
Forecast accuracy metrics.

Metric design rationale
-----------------------
MAPE (Mean Absolute Percentage Error)
  Normalizes each absolute error by the actual value and reports the mean as
  a percentage.  "Was I off by 5%?" reads the same whether weekly sales are
  50 units or 50,000.
  Safeguard: pairs whose actual value is exactly zero are excluded; the
  percentage is undefined there.
  Interpretation: 5.0 = 5% average error.

RMSE (Root Mean Squared Error)
  Squares errors before averaging, so a handful of large misses dominate.
  Reported in the units of the series.  No zero-actual exclusion.

Pair filtering
--------------
Both metrics compare ``actual[i]`` with ``predicted[i]`` index-for-index.
A pair is dropped when either side is ``None``, NaN or infinite.  Engines
mark "no prediction possible here" with ``None`` (SMA warm-up, HW index 0),
so those positions simply fall out of the comparison.

When no pair survives, the score is ``None``: a degenerate comparison is
never reported as a perfect ``0.0``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Optional, Sequence, get_args

MetricName = Literal["MAPE", "RMSE"]
VALID_METRICS: frozenset[str] = frozenset(get_args(MetricName))

Value = Optional[float]


@dataclass(frozen=True)
class MetricResult:
    """A metric score tagged with the metric that produced it.

    Attributes:
        metric:  ``"MAPE"`` or ``"RMSE"``.
        value:   The score, or ``None`` when no pair survived filtering.
        n_pairs: Number of (actual, predicted) pairs that were scored.
    """

    metric: str
    value: float | None
    n_pairs: int

    @property
    def is_defined(self) -> bool:
        return self.value is not None


def _is_finite(v: Value) -> bool:
    return v is not None and math.isfinite(v)


def _finite_pairs(
    actual: Sequence[Value],
    predicted: Sequence[Value],
    drop_zero_actual: bool = False,
) -> list[tuple[float, float]]:
    """Aligned pairs where both values are finite (and, optionally, actual != 0)."""
    return [
        (a, p)  # type: ignore[misc]
        for a, p in zip(actual, predicted)
        if _is_finite(a) and _is_finite(p) and not (drop_zero_actual and a == 0)
    ]


def mape(actual: Sequence[Value], predicted: Sequence[Value]) -> float | None:
    """Mean absolute percentage error, in percent (5.0 = 5%)."""
    pairs = _finite_pairs(actual, predicted, drop_zero_actual=True)
    if not pairs:
        return None
    return sum(abs((a - p) / a) for a, p in pairs) / len(pairs) * 100


def rmse(actual: Sequence[Value], predicted: Sequence[Value]) -> float | None:
    """Root mean squared error, in series units."""
    pairs = _finite_pairs(actual, predicted)
    if not pairs:
        return None
    return math.sqrt(sum((a - p) ** 2 for a, p in pairs) / len(pairs))


_METRIC_FUNCS = {
    "MAPE": mape,
    "RMSE": rmse,
}


def score(
    metric: str,
    actual: Sequence[Value],
    predicted: Sequence[Value],
) -> float | None:
    """Score ``predicted`` against ``actual`` with the named metric.

    Args:
        metric:    ``"MAPE"`` or ``"RMSE"`` (case-insensitive).
        actual:    Observed values.
        predicted: Predictions aligned index-for-index with ``actual``.

    Returns:
        Non-negative score, or ``None`` when no comparable pair exists.

    Raises:
        ValueError: If ``metric`` is not a known metric name.
    """
    key = metric.upper()
    if key not in _METRIC_FUNCS:
        raise ValueError(
            f"Unknown metric '{metric}'. Must be one of {sorted(VALID_METRICS)}."
        )
    return _METRIC_FUNCS[key](actual, predicted)


def evaluate_metric(
    metric: str,
    actual: Sequence[Value],
    predicted: Sequence[Value],
) -> MetricResult:
    """Like :func:`score`, but returns a :class:`MetricResult` with the pair count."""
    key = metric.upper()
    value = score(key, actual, predicted)
    n_pairs = len(_finite_pairs(actual, predicted, drop_zero_actual=(key == "MAPE")))
    return MetricResult(metric=key, value=value, n_pairs=n_pairs)
