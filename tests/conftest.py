"""
Shared pytest fixtures for the weekly forecaster test suite.

Provides:
  - ``app_config``: default ``AppConfig`` with a short season length so tests
    run on small series.
  - ``config_file``: a TOML config written to a temp dir, for loader and CLI
    tests that must not depend on the repository's config/default.toml.
  - Sample ``WeeklySeries`` factories.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from weekly_forecast.config import (
    AppConfig,
    EvaluationConfig,
    HoltWintersConfig,
    LoggingConfig,
    SmaConfig,
)
from weekly_forecast.models.series import WeeklySeries
from weekly_forecast.utils.time_utils import weekly_dates

START = date(2024, 1, 7)


def _make_series(values: list[float], name: str = "test") -> WeeklySeries:
    return WeeklySeries(name=name, dates=weekly_dates(START, len(values)), values=values)


# ── Config fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def app_config() -> AppConfig:
    """Default config with s=5, W=3, H=4 and quiet logging."""
    return AppConfig(
        sma=SmaConfig(window=3),
        holt_winters=HoltWintersConfig(alpha=0.3, beta=0.1, gamma=0.2, season_length=5),
        evaluation=EvaluationConfig(mode="rolling", metric="MAPE", horizon=4),
        logging=LoggingConfig(level="WARNING"),
    )


CONFIG_TOML = """\
[data]
profile = "trend"
weeks = 60
start_date = 2024-01-07
seed = 42

[sma]
window = 4

[holt_winters]
alpha = 0.3
beta = 0.1
gamma = 0.2
season_length = 12

[evaluation]
mode = "holdout"
metric = "RMSE"
horizon = 6

[logging]
level = "WARNING"
log_file = ""
json_format = false
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a complete TOML config into a temp dir and return its path."""
    p = tmp_path / "default.toml"
    p.write_text(CONFIG_TOML, encoding="utf-8")
    return p


# ── Series fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def seasonal_series() -> WeeklySeries:
    """Exact period-5 pattern around 10, three full periods, no trend."""
    pattern = [8.0, 9.0, 10.0, 11.0, 12.0]
    return _make_series(pattern * 3, name="seasonal")


@pytest.fixture
def constant_series() -> WeeklySeries:
    """Thirty weeks at exactly 100."""
    return _make_series([100.0] * 30, name="constant")


@pytest.fixture
def make_series():
    """Factory: ``make_series(values, name="test") -> WeeklySeries``."""
    return _make_series
