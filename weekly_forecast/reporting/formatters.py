"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept in-memory results and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Undefined values
----------------
Engines mark positions without a prediction as ``None`` and metrics return
``None`` when nothing was comparable.  Both render as ``n/a``, never as 0,
which would read as a perfect score.
"""

from __future__ import annotations

from typing import Optional, Sequence

from weekly_forecast.backtest.evaluator import EvaluationReport
from weekly_forecast.models.series import WeeklySeries
from weekly_forecast.pipeline.evaluate import EvaluationGrid
from weekly_forecast.pipeline.forecast import ForecastReport

NA = "n/a"


def format_value(v: Optional[float], digits: int = 2) -> str:
    """Format a number with fixed decimals, or ``n/a`` for ``None``."""
    if v is None:
        return NA
    return f"{v:,.{digits}f}"


def format_score(metric: str, v: Optional[float]) -> str:
    """Format a metric score with its unit (``%`` for MAPE)."""
    if v is None:
        return NA
    if metric.upper() == "MAPE":
        return f"{v:.2f}%"
    return f"{v:,.2f}"


# ── Series ────────────────────────────────────────────────────────────────────


def format_series_table(series: WeeklySeries, limit: int | None = None) -> str:
    """Format the observations of a series as a two-column table.

    Args:
        series: Series to print.
        limit:  Print at most this many trailing rows (``None`` = all,
                negative treated as 0).
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Series: {series.name} ===")
    lines.append(f"  Observations: {len(series)}")
    if len(series) == 0:
        lines.append("  (empty series)")
        return "\n".join(lines)

    lines.append(f"  Range:        {series.dates[0]} .. {series.dates[-1]}")
    lines.append("")
    lines.append(f"    {'Week':>10}  {'Value':>12}")
    lines.append("    " + "-" * 24)

    pairs = list(zip(series.dates, series.values))
    if limit is not None:
        keep = max(0, limit)
        if len(pairs) > keep:
            lines.append(f"    ... {len(pairs) - keep} earlier rows omitted")
            pairs = pairs[len(pairs) - keep:]
    for d, v in pairs:
        lines.append(f"    {d.isoformat():>10}  {format_value(v):>12}")
    return "\n".join(lines)


# ── Evaluation ────────────────────────────────────────────────────────────────


def _mode_caption(report: EvaluationReport) -> str:
    if report.mode == "holdout":
        return f"holdout (train={report.n_train}, h={report.horizon})"
    return f"rolling one-step-ahead (n={report.n_train})"


def format_evaluation_report(report: EvaluationReport) -> str:
    """Format one (mode, metric) evaluation as a method/score table."""
    lines: list[str] = []
    lines.append(f"  [{report.metric}] {_mode_caption(report)}")
    best = report.best_method()
    for name, value in report.scores.items():
        marker = "  <- best" if name == best else ""
        lines.append(f"    {name:<6} {format_score(report.metric, value):>12}{marker}")
    return "\n".join(lines)


def format_evaluation_grid(grid: EvaluationGrid) -> str:
    """Format every report in an :class:`EvaluationGrid`."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Evaluation ===")
    lines.append(f"  Series:       {grid.series_name} ({grid.n_observations} weeks)")
    if not grid.reports:
        lines.append("  (no evaluation reports)")
        return "\n".join(lines)
    for report in grid.reports:
        lines.append("")
        lines.append(format_evaluation_report(report))
    return "\n".join(lines)


# ── Forecast ──────────────────────────────────────────────────────────────────


def _row(cells: Sequence[str], widths: Sequence[int]) -> str:
    return "    " + "  ".join(f"{c:>{w}}" for c, w in zip(cells, widths))


def format_forecast_report(report: ForecastReport, history_rows: int = 8) -> str:
    """Format a forecast run: parameters, recent fit, forecast and evaluation.

    Args:
        report:       Result of ``ForecastStage.run()``.
        history_rows: How many trailing in-sample weeks to show.
    """
    series = report.series
    names = list(report.methods)
    widths = [10, 12] + [12] * len(names)

    lines: list[str] = []
    lines.append("")
    lines.append("=== Forecast ===")
    lines.append(f"  Series:       {series.name} ({len(series)} weeks)")
    for m in report.methods.values():
        lines.append(f"  Method:       {m.label}")
    lines.append(f"  Horizon:      {report.horizon} weeks")

    if len(series) > 0 and history_rows > 0:
        lines.append("")
        lines.append("  Recent fit")
        lines.append(_row(["Week", "Actual", *[f"{n} fit" for n in names]], widths))
        lines.append("    " + "-" * (sum(widths) + 2 * (len(widths) - 1)))
        start = max(0, len(series) - history_rows)
        for t in range(start, len(series)):
            cells = [
                series.dates[t].isoformat(),
                format_value(series.values[t]),
                *[format_value(report.methods[n].historical_fit[t]) for n in names],
            ]
            lines.append(_row(cells, widths))

    lines.append("")
    lines.append("  Forecast")
    lines.append(_row(["Week", "Step", *names], widths))
    lines.append("    " + "-" * (sum(widths) + 2 * (len(widths) - 1)))
    if not report.forecast_dates:
        lines.append("    (no forecast: empty series)")
    for h, d in enumerate(report.forecast_dates):
        cells = [
            d.isoformat(),
            f"+{h + 1}",
            *[format_value(report.methods[n].forecast[h]) for n in names],
        ]
        lines.append(_row(cells, widths))

    if report.evaluation is not None:
        lines.append("")
        lines.append(format_evaluation_report(report.evaluation))
    return "\n".join(lines)
