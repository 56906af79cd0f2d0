"""
Additive Holt-Winters exponential smoothing.

Model
-----
The series is decomposed into three recursively smoothed components:

  level    L[t] = α·(y[t] − S_prev) + (1−α)·(L[t−1] + B[t−1])
  trend    B[t] = β·(L[t] − L[t−1]) + (1−β)·B[t−1]
  seasonal S[t] = γ·(y[t] − L[t]) + (1−γ)·S_prev

where ``S_prev`` is the seasonal estimate one full period earlier,
``S[t−s]``, or the initialization table entry for ``t mod s`` while
``t < s``.  Seasonal slots inside the first period keep their initialization
values; the first seasonal update happens at ``t = s``.

Per index ``t >= 1`` two predictions are recorded:

  one-step-ahead   yhat[t] = L[t−1] + B[t−1] + S_prev
  in-sample fit    fit[t]  = L[t]   + B[t]   + S_prev

``fit`` deliberately reuses ``S_prev`` rather than the freshly updated
``S[t]``: it is the seasonal reference that was known when index ``t`` was
predicted.

Initialization
--------------
  seasonal  Per-position mean over all complete periods minus the overall
            mean.  Positions with no complete period fall back to the raw
            observation at that position, or the overall mean if the series
            is too short to have one.
  level     y[0] − seasonal_init[0]
  trend     Mean first difference over the first min(10, n−1) steps.  The
            bounded lookback keeps early noise from dominating the slope.
            A single observation has no difference to take, so its trend,
            fit and forecast are all undefined.

Forecast
--------
  F(h) = L[n−1] + h·B[n−1] + S_last[(n + h − 1) mod s],  h = 1..H

where ``S_last`` holds the most recent seasonal estimate for each of the
``s`` positions.  The trend term is linear in ``h``, so long horizons drift
without bound; this is inherent to the additive model.

Storage is flat indexed lists sized to the series; ``S[t−s]`` is a plain
list lookup.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_SEASON_LENGTH = 52
TREND_INIT_MAX_STEPS = 10


@dataclass(frozen=True)
class HoltWintersState:
    """Smoothing state produced by one :func:`holt_winters_additive` call.

    Every list has the same length as the input series.  ``None`` marks a
    position with no value (``one_step_ahead[0]``; ``trend[0]`` and ``fit[0]``
    for a single observation; everything for an empty
    input).

    Attributes:
        level:          Smoothed level per index.
        trend:          Smoothed trend per index.
        seasonal:       Seasonal component per index.
        fit:            In-sample fit ``L[t] + B[t] + S_prev``.
        one_step_ahead: Prediction for ``t`` made at ``t−1``.
        seasonal_init:  The ``s``-entry initialization table.
    """

    level: list[Optional[float]]
    trend: list[Optional[float]]
    seasonal: list[Optional[float]]
    fit: list[Optional[float]]
    one_step_ahead: list[Optional[float]]
    seasonal_init: list[float]

    def __len__(self) -> int:
        return len(self.level)


def init_seasonal_additive(values: Sequence[float], season_length: int) -> list[float]:
    """Initial additive seasonal estimates, one per within-period position.

    Args:
        values:        Observations in time order.
        season_length: Period ``s`` (floored to 1).

    Returns:
        List of ``s`` deviations from the overall mean.  All zeros for an
        empty series.
    """
    s = max(1, season_length)
    n = len(values)
    if n == 0:
        return [0.0] * s

    overall_mean = sum(values) / n
    full_periods = n // s

    season_means = [0.0] * s
    for i in range(s):
        if full_periods > 0:
            season_means[i] = sum(values[k * s + i] for k in range(full_periods)) / full_periods
        elif i < n:
            season_means[i] = values[i]
        else:
            season_means[i] = overall_mean

    return [m - overall_mean for m in season_means]


def _initial_trend(values: Sequence[float]) -> Optional[float]:
    """Mean first difference over the first min(10, n-1) steps; ``None`` if n < 2."""
    n = len(values)
    steps = min(TREND_INIT_MAX_STEPS, n - 1)
    if steps < 1:
        return None
    return (values[steps] - values[0]) / steps


def holt_winters_additive(
    values: Sequence[float],
    season_length: int,
    alpha: float,
    beta: float,
    gamma: float,
) -> HoltWintersState:
    """Run the additive Holt-Winters recursion over the whole series.

    Args:
        values:        Observations in time order (not mutated).
        season_length: Seasonal period ``s`` (floored to 1).
        alpha:         Level smoothing constant.
        beta:          Trend smoothing constant.
        gamma:         Seasonal smoothing constant.

    Returns:
        :class:`HoltWintersState` covering every index.  An empty series
        yields empty component lists.
    """
    s = max(1, season_length)
    n = len(values)

    level: list[Optional[float]] = [None] * n
    trend: list[Optional[float]] = [None] * n
    seasonal: list[Optional[float]] = [None] * n
    fit: list[Optional[float]] = [None] * n
    yhat: list[Optional[float]] = [None] * n

    init = init_seasonal_additive(values, s)
    if n == 0:
        return HoltWintersState(level, trend, seasonal, fit, yhat, init)

    level[0] = values[0] - init[0]
    trend[0] = _initial_trend(values)
    for t in range(min(s, n)):
        seasonal[t] = init[t]

    for t in range(1, n):
        s_prev = seasonal[t - s] if t >= s else init[t % s]
        l_prev = level[t - 1]
        b_prev = trend[t - 1]

        yhat[t] = l_prev + b_prev + s_prev
        l_t = alpha * (values[t] - s_prev) + (1 - alpha) * (l_prev + b_prev)
        b_t = beta * (l_t - l_prev) + (1 - beta) * b_prev
        if t >= s:
            seasonal[t] = gamma * (values[t] - l_t) + (1 - gamma) * s_prev

        level[t] = l_t
        trend[t] = b_t
        fit[t] = l_t + b_t + s_prev

    if trend[0] is not None:
        fit[0] = level[0] + trend[0] + init[0]

    logger.debug(
        "holt_winters_additive | n=%d s=%d alpha=%.3f beta=%.3f gamma=%.3f",
        n, s, alpha, beta, gamma,
    )
    return HoltWintersState(level, trend, seasonal, fit, yhat, init)


def last_seasonal_by_position(
    seasonal: Sequence[Optional[float]],
    season_length: int,
) -> list[float]:
    """Most recent finite seasonal estimate for each within-period position.

    Walks backward from the end of the series and stops once every position
    is filled.  Positions never seen default to 0.0.
    """
    s = max(1, season_length)
    lookup = [0.0] * s
    seen = [False] * s
    remaining = s
    for t in range(len(seasonal) - 1, -1, -1):
        pos = t % s
        v = seasonal[t]
        if not seen[pos] and v is not None and math.isfinite(v):
            lookup[pos] = v
            seen[pos] = True
            remaining -= 1
            if remaining == 0:
                break
    return lookup


def forecast_holt_winters(
    values: Sequence[float],
    season_length: int,
    alpha: float,
    beta: float,
    gamma: float,
    horizon: int,
) -> list[Optional[float]]:
    """Multi-step additive Holt-Winters forecast from the end of ``values``.

    Args:
        values:        Training observations in time order.
        season_length: Seasonal period ``s`` (floored to 1).
        alpha:         Level smoothing constant.
        beta:          Trend smoothing constant.
        gamma:         Seasonal smoothing constant.
        horizon:       Number of future steps ``H``.

    Returns:
        ``H`` forecasts; ``H`` ``None`` values for an empty series or a
        single observation (no trend to extrapolate).
    """
    steps = max(0, horizon)
    n = len(values)
    if n == 0:
        logger.debug("forecast_holt_winters called with an empty series")
        return [None] * steps

    s = max(1, season_length)
    state = holt_winters_additive(values, s, alpha, beta, gamma)
    l_end = state.level[n - 1]
    b_end = state.trend[n - 1]
    if b_end is None:
        logger.debug("forecast_holt_winters: trend undefined for a single observation")
        return [None] * steps
    lookup = last_seasonal_by_position(state.seasonal, s)

    return [l_end + h * b_end + lookup[(n + h - 1) % s] for h in range(1, steps + 1)]
