"""
EvaluateStage — score both methods under every (mode, metric) combination.

One run produces four ``EvaluationReport``s: rolling/MAPE, rolling/RMSE,
holdout/MAPE, holdout/RMSE.  The configured mode and metric are ignored;
the smoothing parameters and horizon come from config as usual.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from weekly_forecast.backtest.evaluator import EvaluationReport, evaluate
from weekly_forecast.backtest.metrics import VALID_METRICS
from weekly_forecast.ingestion.provider import load_series
from weekly_forecast.models.meta import RunMetadata
from weekly_forecast.models.series import WeeklySeries
from weekly_forecast.pipeline.base import PipelineStage

log = logging.getLogger(__name__)

EVALUATION_MODES: tuple[str, ...] = ("rolling", "holdout")


@dataclass
class EvaluationGrid:
    """All evaluation reports for one series."""

    run: RunMetadata
    series_name: str
    n_observations: int
    reports: list[EvaluationReport] = field(default_factory=list)

    def get(self, mode: str, metric: str) -> EvaluationReport | None:
        for r in self.reports:
            if r.mode == mode and r.metric == metric:
                return r
        return None


class EvaluateStage(PipelineStage):
    """Rolling and holdout evaluation under both metrics."""

    stage_name = "evaluate"

    def _execute(
        self,
        run: RunMetadata,
        series: WeeklySeries | None = None,
    ) -> EvaluationGrid:
        cfg = self.config
        if series is None:
            series = load_series(cfg.data)
        run.series_name = series.name
        run.rows_processed = len(series)

        values = list(series.values)
        reports = [
            evaluate(
                mode=mode,
                values=values,
                window=cfg.sma.window,
                alpha=cfg.holt_winters.alpha,
                beta=cfg.holt_winters.beta,
                gamma=cfg.holt_winters.gamma,
                metric=metric,
                horizon=cfg.evaluation.horizon,
                season_length=cfg.holt_winters.season_length,
            )
            for mode in EVALUATION_MODES
            for metric in sorted(VALID_METRICS)
        ]

        log.info("Evaluation grid done | series=%s reports=%d", series.name, len(reports))
        return EvaluationGrid(
            run=run,
            series_name=series.name,
            n_observations=len(values),
            reports=reports,
        )
