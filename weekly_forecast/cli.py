"""
Weekly forecaster CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Apply command-line overrides (re-validated through the config models).
  3. Configure logging.
  4. Run the pipeline stage.
  5. Report result to stdout (ASCII table, or JSON with ``--json``).

Install and run::

    pip install -e .
    weekly-forecast --help
    weekly-forecast validate-config
    weekly-forecast show-series --profile trend --limit 20
    weekly-forecast forecast --window 8 --alpha 0.3 --horizon 12
    weekly-forecast forecast --mode holdout --metric RMSE --json
    weekly-forecast evaluate --series-file data/weekly_sales.csv
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

app = typer.Typer(
    name="weekly-forecast",
    help="Weekly SMA and Holt-Winters forecaster with rolling and holdout evaluation.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(
    config_path: Optional[str] = None,
    overrides: Optional[dict[str, dict[str, Any]]] = None,
):
    """Load AppConfig (plus overrides), printing a friendly error on failure."""
    from weekly_forecast.config import load_config, with_overrides

    try:
        cfg_path = Path(config_path) if config_path else None
        config = load_config(cfg_path)
        if overrides:
            config = with_overrides(config, overrides)
        return config
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from weekly_forecast.utils.logging import configure_logging
    configure_logging(config.logging)


def _data_overrides(profile: Optional[str], series_file: Optional[str]) -> dict[str, Any]:
    return {"profile": profile, "series_file": series_file}


def _run_stage_or_exit(stage):
    """Run a pipeline stage, converting input errors into exit code 1."""
    try:
        return stage.run()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Shared options ────────────────────────────────────────────────────────────

_CONFIG_OPT = typer.Option(None, "--config", help="Path to TOML config file.")
_PROFILE_OPT = typer.Option(
    None, "--profile", help="Synthetic data profile: flat | trend | season_trend.",
)
_SERIES_FILE_OPT = typer.Option(
    None, "--series-file", help="CSV file with 'date' and 'value' columns.",
)
_JSON_OPT = typer.Option(False, "--json", help="Print JSON instead of tables.")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPT,
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    source = config.data.series_file or f"synthetic:{config.data.profile}"
    typer.echo(f"  Data source:      {source}")
    typer.echo(f"  SMA window:       {config.sma.window}")
    hw = config.holt_winters
    typer.echo(
        f"  Holt-Winters:     alpha={hw.alpha} beta={hw.beta} "
        f"gamma={hw.gamma} s={hw.season_length}"
    )
    ev = config.evaluation
    typer.echo(f"  Evaluation:       {ev.mode} / {ev.metric} / horizon={ev.horizon}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("show-series")
def show_series(
    profile: Optional[str] = _PROFILE_OPT,
    series_file: Optional[str] = _SERIES_FILE_OPT,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=0, help="Only print the last N weeks.",
    ),
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print the input series (synthetic or CSV)."""
    from weekly_forecast.ingestion.provider import load_series
    from weekly_forecast.reporting.formatters import format_series_table

    config = _load_config_or_exit(
        config_path, {"data": _data_overrides(profile, series_file)},
    )
    _configure_logging(config)

    try:
        series = load_series(config.data)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_series_table(series, limit=limit))


@app.command("forecast")
def forecast(
    window: Optional[int] = typer.Option(None, "--window", "-w", help="SMA window W."),
    alpha: Optional[float] = typer.Option(None, "--alpha", help="HW level constant."),
    beta: Optional[float] = typer.Option(None, "--beta", help="HW trend constant."),
    gamma: Optional[float] = typer.Option(None, "--gamma", help="HW seasonal constant."),
    season_length: Optional[int] = typer.Option(
        None, "--season-length", "-s", help="HW seasonal period (52 for weekly/annual).",
    ),
    horizon: Optional[int] = typer.Option(
        None, "--horizon", "-H", help="Forecast weeks; also the holdout length.",
    ),
    mode: Optional[str] = typer.Option(None, "--mode", help="rolling | holdout."),
    metric: Optional[str] = typer.Option(None, "--metric", help="MAPE | RMSE."),
    profile: Optional[str] = _PROFILE_OPT,
    series_file: Optional[str] = _SERIES_FILE_OPT,
    history_rows: int = typer.Option(
        8, "--history", help="Trailing in-sample weeks to print.",
    ),
    as_json: bool = _JSON_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Fit SMA and Holt-Winters, forecast H weeks, and score both methods."""
    from weekly_forecast.pipeline.forecast import ForecastStage
    from weekly_forecast.reporting.export import forecast_report_to_dict
    from weekly_forecast.reporting.formatters import format_forecast_report

    config = _load_config_or_exit(config_path, {
        "data": _data_overrides(profile, series_file),
        "sma": {"window": window},
        "holt_winters": {
            "alpha": alpha, "beta": beta, "gamma": gamma, "season_length": season_length,
        },
        "evaluation": {"mode": mode, "metric": metric, "horizon": horizon},
    })
    _configure_logging(config)

    report = _run_stage_or_exit(ForecastStage(config=config))

    if as_json:
        typer.echo(json.dumps(forecast_report_to_dict(report), indent=2))
        return
    typer.echo(format_forecast_report(report, history_rows=history_rows))


@app.command("evaluate")
def evaluate(
    window: Optional[int] = typer.Option(None, "--window", "-w", help="SMA window W."),
    alpha: Optional[float] = typer.Option(None, "--alpha", help="HW level constant."),
    beta: Optional[float] = typer.Option(None, "--beta", help="HW trend constant."),
    gamma: Optional[float] = typer.Option(None, "--gamma", help="HW seasonal constant."),
    season_length: Optional[int] = typer.Option(
        None, "--season-length", "-s", help="HW seasonal period.",
    ),
    horizon: Optional[int] = typer.Option(
        None, "--horizon", "-H", help="Holdout length (clamped to [1, n-1]).",
    ),
    profile: Optional[str] = _PROFILE_OPT,
    series_file: Optional[str] = _SERIES_FILE_OPT,
    as_json: bool = _JSON_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Score both methods under rolling and holdout, with MAPE and RMSE."""
    from weekly_forecast.pipeline.evaluate import EvaluateStage
    from weekly_forecast.reporting.export import evaluation_grid_to_dict
    from weekly_forecast.reporting.formatters import format_evaluation_grid

    config = _load_config_or_exit(config_path, {
        "data": _data_overrides(profile, series_file),
        "sma": {"window": window},
        "holt_winters": {
            "alpha": alpha, "beta": beta, "gamma": gamma, "season_length": season_length,
        },
        "evaluation": {"horizon": horizon},
    })
    _configure_logging(config)

    grid = _run_stage_or_exit(EvaluateStage(config=config))

    if as_json:
        typer.echo(json.dumps(evaluation_grid_to_dict(grid), indent=2))
        return
    typer.echo(format_evaluation_grid(grid))


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
