"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``WEEKLY_FORECAST_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Parameter validation lives here, not in the smoothing engines.  The engines
clamp window/period/horizon values and never raise; the config layer is where
an out-of-range smoothing constant or an unknown metric is rejected.
"""

from __future__ import annotations

import os
import tomllib
from datetime import date
from pathlib import Path
from typing import Any, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from weekly_forecast.backtest.metrics import MetricName

DataProfile = Literal["flat", "trend", "season_trend"]
EvalMode = Literal["rolling", "holdout"]

# ── Sub-config models ─────────────────────────────────────────────────────────


class DataConfig(BaseModel):
    """Where the weekly series comes from.

    When ``series_file`` is set the series is read from that CSV; otherwise the
    synthetic generator produces ``weeks`` observations for ``profile``.
    """

    model_config = ConfigDict(frozen=True)

    profile: DataProfile = "season_trend"
    weeks: int = 104
    start_date: date = date(2024, 1, 7)
    seed: int = 42
    series_file: Optional[str] = None

    @field_validator("weeks")
    @classmethod
    def validate_weeks(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"weeks must be >= 1, got {v}.")
        return v


class SmaConfig(BaseModel):
    """Simple moving average parameters."""

    model_config = ConfigDict(frozen=True)

    window: int = 8

    @field_validator("window")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"window must be >= 1, got {v}.")
        return v


class HoltWintersConfig(BaseModel):
    """Additive Holt-Winters smoothing constants and seasonal period."""

    model_config = ConfigDict(frozen=True)

    alpha: float = 0.3
    beta: float = 0.1
    gamma: float = 0.2
    season_length: int = 52

    @field_validator("alpha", "beta", "gamma")
    @classmethod
    def validate_smoothing_constant(cls, v: float) -> float:
        if not 0.0 < v < 1.0:
            raise ValueError(f"smoothing constants must be in (0.0, 1.0), got {v}.")
        return v

    @field_validator("season_length")
    @classmethod
    def validate_season_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"season_length must be >= 1, got {v}.")
        return v


class EvaluationConfig(BaseModel):
    """Evaluation protocol, metric and forecast horizon.

    ``horizon`` is both the number of forecast weeks and the holdout length.
    """

    model_config = ConfigDict(frozen=True)

    mode: EvalMode = "rolling"
    metric: MetricName = "MAPE"
    horizon: int = 12

    @field_validator("metric", mode="before")
    @classmethod
    def normalize_metric(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("horizon")
    @classmethod
    def validate_horizon(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"horizon must be >= 1, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration, the single source of truth.

    All pipeline stages and CLI commands receive an ``AppConfig`` instance.
    It is constructed by ``load_config()`` which merges TOML + .env.
    """

    model_config = ConfigDict(frozen=True)

    data: DataConfig = DataConfig()
    sma: SmaConfig = SmaConfig()
    holt_winters: HoltWintersConfig = HoltWintersConfig()
    evaluation: EvaluationConfig = EvaluationConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply WEEKLY_FORECAST_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def with_overrides(
    config: AppConfig,
    overrides: dict[str, dict[str, Any]],
) -> AppConfig:
    """Return a re-validated copy of ``config`` with per-section overrides.

    ``None`` values are skipped, so CLI options that were not given leave the
    loaded config untouched.

    Example::

        with_overrides(cfg, {"sma": {"window": 4}, "evaluation": {"mode": None}})

    Raises:
        pydantic.ValidationError: If an override fails validation.
    """
    cleaned = {
        section: {k: v for k, v in values.items() if v is not None}
        for section, values in overrides.items()
    }
    return _build_app_config(_deep_merge(config.model_dump(), cleaned))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply WEEKLY_FORECAST_* env vars to the raw config dict.

    Supported overrides:
      WEEKLY_FORECAST_LOG_LEVEL    → raw["logging"]["level"]
      WEEKLY_FORECAST_DEBUG        → raw["debug"]
      WEEKLY_FORECAST_SERIES_FILE  → raw["data"]["series_file"]
      WEEKLY_FORECAST_PROFILE      → raw["data"]["profile"]
    """
    if log_level := os.environ.get("WEEKLY_FORECAST_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("WEEKLY_FORECAST_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    if series_file := os.environ.get("WEEKLY_FORECAST_SERIES_FILE"):
        raw.setdefault("data", {})["series_file"] = series_file

    if profile := os.environ.get("WEEKLY_FORECAST_PROFILE"):
        raw.setdefault("data", {})["profile"] = profile

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        data=DataConfig(**raw.get("data", {})),
        sma=SmaConfig(**raw.get("sma", {})),
        holt_winters=HoltWintersConfig(**raw.get("holt_winters", {})),
        evaluation=EvaluationConfig(**raw.get("evaluation", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
