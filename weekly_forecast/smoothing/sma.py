"""
Simple moving average engine.

Three related operations, all parameterized by a window ``W``:

  calc_sma       Historical fit for display.  Position ``t`` holds the mean
                 of the ``W`` observations ending at ``t``; the first ``W-1``
                 positions are ``None`` because a partial window would be
                 misleading on a chart.

  osa_sma        One-step-ahead predictions for rolling evaluation.  Position
                 ``t`` is predicted from the ``min(W, t)`` observations
                 strictly before it, so the window shrinks near the start
                 instead of going undefined.  Position 0 has no history and
                 is ``None``.

  forecast_sma   Multi-step forecast.  The mean of the last ``min(W, n)``
                 observations, repeated ``H`` times.  An SMA forecast is
                 always a flat line.

All three are pure functions: inputs are never mutated and nothing is cached.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


def calc_sma(values: Sequence[float], window: int) -> list[Optional[float]]:
    """Trailing moving average with a full-window requirement.

    The trailing sum is maintained incrementally: add the newest value, drop
    the one that just left the window.

    Args:
        values: Observations in time order.
        window: Window size ``W``.  ``W <= 1`` returns a copy of ``values``.

    Returns:
        List the same length as ``values``.
    """
    n = len(values)
    if window <= 1:
        return [float(v) for v in values]

    out: list[Optional[float]] = [None] * n
    running = 0.0
    for t in range(n):
        running += values[t]
        if t - window >= 0:
            running -= values[t - window]
        if t >= window - 1:
            out[t] = running / window
    return out


def osa_sma(values: Sequence[float], window: int) -> list[Optional[float]]:
    """One-step-ahead moving average predictions.

    ``out[t]`` is the mean of ``values[t-w:t]`` with ``w = min(window, t)``.

    Args:
        values: Observations in time order.
        window: Maximum number of prior observations to average (floored to 1).

    Returns:
        List the same length as ``values``; ``out[0]`` is ``None``.
    """
    n = len(values)
    w_max = max(1, window)
    out: list[Optional[float]] = [None] * n
    for t in range(1, n):
        w = min(w_max, t)
        out[t] = sum(values[t - w:t]) / w
    return out


def forecast_sma(
    values: Sequence[float],
    window: int,
    horizon: int,
) -> list[Optional[float]]:
    """Flat multi-step forecast from the trailing mean.

    Args:
        values:  Training observations in time order.
        window:  Window size; clamped to ``[1, len(values)]``.
        horizon: Number of future steps ``H``.

    Returns:
        ``H`` copies of the trailing mean.  An empty ``values`` yields ``H``
        ``None`` values since there is nothing to average.
    """
    n = len(values)
    steps = max(0, horizon)
    if n == 0:
        logger.debug("forecast_sma called with an empty series")
        return [None] * steps

    w = max(1, min(window, n))
    last_mean = sum(values[n - w:]) / w
    return [last_mean] * steps
