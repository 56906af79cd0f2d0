"""
ForecastStage — fit, forecast and evaluate both methods on one series.

This stage:
1. Loads the weekly series (CSV if configured, synthetic otherwise), unless
   a series is passed in directly.
2. Runs the SMA engine: historical fit, one-step-ahead, H-step forecast.
3. Runs the Holt-Winters engine: in-sample fit, one-step-ahead, H-step
   forecast.
4. Evaluates both methods under the configured mode and metric.
5. Returns a ``ForecastReport`` holding every sequence a chart or table
   needs.  Nothing is written to disk.

Every call recomputes from scratch; there is no cached engine state to
invalidate when a parameter changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from weekly_forecast.backtest.evaluator import (
    METHOD_HW,
    METHOD_SMA,
    EvaluationReport,
    evaluate,
)
from weekly_forecast.ingestion.provider import load_series
from weekly_forecast.models.meta import RunMetadata
from weekly_forecast.models.series import WeeklySeries
from weekly_forecast.pipeline.base import PipelineStage
from weekly_forecast.smoothing.holt_winters import forecast_holt_winters, holt_winters_additive
from weekly_forecast.smoothing.sma import calc_sma, forecast_sma, osa_sma

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MethodOutput:
    """All sequences produced by one forecasting method.

    Attributes:
        name:           ``"SMA"`` or ``"HW"``.
        label:          Human-readable description including parameters.
        historical_fit: In-sample curve, same length as the series.
        one_step_ahead: Rolling predictions, same length as the series.
        forecast:       ``H`` values beyond the last observation.
    """

    name: str
    label: str
    historical_fit: list[Optional[float]]
    one_step_ahead: list[Optional[float]]
    forecast: list[Optional[float]]


@dataclass
class ForecastReport:
    """Everything one forecast run produced."""

    run: RunMetadata
    series: WeeklySeries
    horizon: int
    forecast_dates: list[date]
    methods: dict[str, MethodOutput] = field(default_factory=dict)
    evaluation: EvaluationReport | None = None
    params: dict[str, Any] = field(default_factory=dict)


class ForecastStage(PipelineStage):
    """Single-series SMA + Holt-Winters forecast stage."""

    stage_name = "forecast"

    def _execute(
        self,
        run: RunMetadata,
        series: WeeklySeries | None = None,
    ) -> ForecastReport:
        """Produce fits, forecasts and an evaluation for one series.

        Args:
            run:    RunMetadata being tracked.
            series: Series to forecast.  Defaults to ``load_series(config.data)``.

        Returns:
            :class:`ForecastReport`.
        """
        cfg = self.config
        sma_cfg = cfg.sma
        hw_cfg = cfg.holt_winters
        ev_cfg = cfg.evaluation

        if series is None:
            series = load_series(cfg.data)
        run.series_name = series.name
        run.rows_processed = len(series)

        values = list(series.values)
        horizon = ev_cfg.horizon

        hw_state = holt_winters_additive(
            values, hw_cfg.season_length, hw_cfg.alpha, hw_cfg.beta, hw_cfg.gamma,
        )
        methods = {
            METHOD_SMA: MethodOutput(
                name=METHOD_SMA,
                label=f"SMA (W={sma_cfg.window})",
                historical_fit=calc_sma(values, sma_cfg.window),
                one_step_ahead=osa_sma(values, sma_cfg.window),
                forecast=forecast_sma(values, sma_cfg.window, horizon),
            ),
            METHOD_HW: MethodOutput(
                name=METHOD_HW,
                label=(
                    f"HW additive (a={hw_cfg.alpha:.2f}, b={hw_cfg.beta:.2f}, "
                    f"g={hw_cfg.gamma:.2f}, s={hw_cfg.season_length})"
                ),
                historical_fit=hw_state.fit,
                one_step_ahead=hw_state.one_step_ahead,
                forecast=forecast_holt_winters(
                    values, hw_cfg.season_length,
                    hw_cfg.alpha, hw_cfg.beta, hw_cfg.gamma, horizon,
                ),
            ),
        }

        evaluation = evaluate(
            mode=ev_cfg.mode,
            values=values,
            window=sma_cfg.window,
            alpha=hw_cfg.alpha,
            beta=hw_cfg.beta,
            gamma=hw_cfg.gamma,
            metric=ev_cfg.metric,
            horizon=horizon,
            season_length=hw_cfg.season_length,
        )

        log.info(
            "Forecast done | series=%s n=%d H=%d mode=%s metric=%s",
            series.name, len(values), horizon, ev_cfg.mode, ev_cfg.metric,
        )
        return ForecastReport(
            run=run,
            series=series,
            horizon=horizon,
            forecast_dates=series.future_dates(horizon),
            methods=methods,
            evaluation=evaluation,
            params={
                "window": sma_cfg.window,
                "alpha": hw_cfg.alpha,
                "beta": hw_cfg.beta,
                "gamma": hw_cfg.gamma,
                "season_length": hw_cfg.season_length,
                "horizon": horizon,
            },
        )
