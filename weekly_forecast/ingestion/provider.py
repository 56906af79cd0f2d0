"""
Series provider selection.

Pipeline stages never decide where data comes from themselves; they call
``load_series(config.data)``.  A configured ``series_file`` wins, otherwise
the synthetic generator is used.
"""

from __future__ import annotations

import logging
from pathlib import Path

from weekly_forecast.config import DataConfig
from weekly_forecast.ingestion.series_csv import parse_series_csv
from weekly_forecast.ingestion.synthetic import generate_weekly
from weekly_forecast.models.series import WeeklySeries

logger = logging.getLogger(__name__)


def load_series(data_cfg: DataConfig) -> WeeklySeries:
    """Return the weekly series described by ``data_cfg``.

    Raises:
        FileNotFoundError: If ``series_file`` is set but missing.
        ValueError: If the CSV fails validation.
    """
    if data_cfg.series_file:
        logger.info("Loading series from %s", data_cfg.series_file)
        return parse_series_csv(Path(data_cfg.series_file))

    logger.info(
        "Generating synthetic series | profile=%s weeks=%d seed=%d",
        data_cfg.profile, data_cfg.weeks, data_cfg.seed,
    )
    return generate_weekly(
        profile=data_cfg.profile,
        weeks=data_cfg.weeks,
        start=data_cfg.start_date,
        seed=data_cfg.seed,
    )
