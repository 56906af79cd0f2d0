"""
Synthetic weekly sales generator.

Three reproducible scenarios, each ``weeks`` observations long:

  flat          baseline + noise
  trend         baseline + linear trend + noise
  season_trend  (baseline + linear trend) × annual sine + noise

Constants
---------
  baseline        500
  trend           +3.0 per week (``trend`` and ``season_trend``)
  annual swing    ±20% on a 52-week sine (``season_trend`` only)
  noise           uniform in [−20, +20)
  floor           50

Noise comes from a small linear congruential generator rather than
``random`` so that the same seed produces the same series on every platform
and Python version.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterator, get_args

from weekly_forecast.config import DataProfile
from weekly_forecast.models.series import WeeklySeries
from weekly_forecast.utils.time_utils import weekly_dates

logger = logging.getLogger(__name__)

VALID_PROFILES: frozenset[str] = frozenset(get_args(DataProfile))

DEFAULT_START = date(2024, 1, 7)
DEFAULT_WEEKS = 52 * 2
DEFAULT_SEED = 42

BASELINE = 500.0
TREND_PER_WEEK = 3.0
ANNUAL_AMPLITUDE = 0.2
NOISE_SPAN = 40.0
FLOOR = 50.0

_LCG_MULTIPLIER = 9301
_LCG_INCREMENT = 49297
_LCG_MODULUS = 233280


def _lcg(seed: int) -> Iterator[float]:
    """Yield uniform floats in [0, 1) from a linear congruential generator."""
    state = seed
    while True:
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        yield state / _LCG_MODULUS


def generate_weekly(
    profile: str = "season_trend",
    weeks: int = DEFAULT_WEEKS,
    start: date = DEFAULT_START,
    seed: int = DEFAULT_SEED,
) -> WeeklySeries:
    """Generate a synthetic weekly series for one scenario.

    Args:
        profile: ``"flat"``, ``"trend"`` or ``"season_trend"``.
        weeks:   Number of weekly observations.
        start:   Date of the first observation.
        seed:    LCG seed; equal seeds give identical series.

    Returns:
        :class:`WeeklySeries` named after the profile.

    Raises:
        ValueError: If ``profile`` is unknown.
    """
    if profile not in VALID_PROFILES:
        raise ValueError(
            f"Unknown data profile '{profile}'. Must be one of {sorted(VALID_PROFILES)}."
        )

    trend_per_week = 0.0 if profile == "flat" else TREND_PER_WEEK
    annual_amp = ANNUAL_AMPLITUDE if profile == "season_trend" else 0.0

    rng = _lcg(seed)
    values: list[float] = []
    for w in range(max(0, weeks)):
        annual = 1 + annual_amp * math.sin(2 * math.pi * w / 52)
        noise = (next(rng) - 0.5) * NOISE_SPAN
        y = max(FLOOR, (BASELINE + trend_per_week * w) * annual + noise)
        values.append(round(y, 2))

    logger.debug("Generated %d weeks for profile=%s seed=%d", len(values), profile, seed)
    return WeeklySeries(
        name=profile,
        dates=weekly_dates(start, len(values)),
        values=values,
    )
