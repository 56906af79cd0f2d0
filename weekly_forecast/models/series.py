"""
Weekly observation series: the input contract for every engine.

A ``WeeklySeries`` is what a data provider hands to the forecaster: ordered
``(date, value)`` pairs at a fixed weekly cadence.  The smoothing engines only
ever see ``series.values``; the dates exist so forecasts can be labelled with
the calendar weeks they cover.

The model is frozen.  Engines treat their input as immutable, and a frozen
container makes that a property of the type instead of a convention.
"""

from __future__ import annotations

import logging
import math
from datetime import date

from pydantic import BaseModel, ConfigDict, model_validator

from weekly_forecast.utils.time_utils import future_weekly_dates, is_weekly_cadence

logger = logging.getLogger(__name__)


class WeeklySeries(BaseModel):
    """Ordered weekly observations.

    Attributes:
        name: Free-form label for reports (e.g. the synthetic profile name or
            the CSV file stem).
        dates: Observation dates, strictly increasing.
        values: One finite float per date.
    """

    model_config = ConfigDict(frozen=True)

    name: str = "series"
    dates: tuple[date, ...]
    values: tuple[float, ...]

    @model_validator(mode="after")
    def validate_alignment(self) -> "WeeklySeries":
        if len(self.dates) != len(self.values):
            raise ValueError(
                f"dates and values must have equal length, "
                f"got {len(self.dates)} and {len(self.values)}."
            )
        for prev, curr in zip(self.dates, self.dates[1:]):
            if curr <= prev:
                raise ValueError(
                    f"dates must be strictly increasing: {curr} follows {prev}."
                )
        bad = [i for i, v in enumerate(self.values) if not math.isfinite(v)]
        if bad:
            raise ValueError(f"values must be finite; non-finite at index {bad[:5]}.")
        if not is_weekly_cadence(list(self.dates)):
            # Index order still encodes time order; only the labels drift.
            logger.warning("Series '%s' is not on a strict 7-day cadence.", self.name)
        return self

    def __len__(self) -> int:
        return len(self.values)

    @property
    def last_date(self) -> date | None:
        return self.dates[-1] if self.dates else None

    def future_dates(self, horizon: int) -> list[date]:
        """Weekly dates for forecast steps 1..horizon after the last observation."""
        if self.last_date is None:
            return []
        return future_weekly_dates(self.last_date, horizon)
