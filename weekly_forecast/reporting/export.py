"""
JSON-ready views of pipeline results.

Used by ``--json`` CLI output.  Dates become ISO strings and undefined
values stay ``None`` (JSON ``null``); nothing here touches the filesystem.
"""

from __future__ import annotations

from typing import Any

from weekly_forecast.backtest.evaluator import EvaluationReport
from weekly_forecast.pipeline.evaluate import EvaluationGrid
from weekly_forecast.pipeline.forecast import ForecastReport


def evaluation_report_to_dict(report: EvaluationReport) -> dict[str, Any]:
    return {
        "mode": report.mode,
        "metric": report.metric,
        "horizon": report.horizon,
        "n_train": report.n_train,
        "scores": dict(report.scores),
        "best_method": report.best_method(),
    }


def forecast_report_to_dict(report: ForecastReport) -> dict[str, Any]:
    """Serialize a :class:`ForecastReport` for JSON output."""
    series = report.series
    return {
        "run_slug": report.run.run_slug,
        "series": {
            "name": series.name,
            "dates": [d.isoformat() for d in series.dates],
            "values": list(series.values),
        },
        "params": dict(report.params),
        "forecast_dates": [d.isoformat() for d in report.forecast_dates],
        "methods": {
            name: {
                "label": m.label,
                "historical_fit": m.historical_fit,
                "one_step_ahead": m.one_step_ahead,
                "forecast": m.forecast,
            }
            for name, m in report.methods.items()
        },
        "evaluation": (
            evaluation_report_to_dict(report.evaluation)
            if report.evaluation is not None
            else None
        ),
    }


def evaluation_grid_to_dict(grid: EvaluationGrid) -> dict[str, Any]:
    return {
        "run_slug": grid.run.run_slug,
        "series_name": grid.series_name,
        "n_observations": grid.n_observations,
        "reports": [evaluation_report_to_dict(r) for r in grid.reports],
    }
