"""
Evaluation harness: score SMA and Holt-Winters under two protocols.

Rolling
-------
Each engine's one-step-ahead sequence is computed over the *entire* series
and scored against the series itself.  Every prediction at index ``t`` uses
only indices ``< t``, so this measures short-horizon tracking under
continuous re-estimation.  There is no train/test split.

Holdout
-------
The series is split once (see :mod:`weekly_forecast.backtest.splits`).
Each engine forecasts ``h`` steps from the training prefix and the forecast
is scored against the withheld suffix.  This measures pure extrapolation:
the engines never see the test values.

Both protocols return ``{"SMA": score, "HW": score}`` where each score is a
float or ``None`` (no comparable pairs).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence, get_args

from weekly_forecast.backtest.metrics import MetricResult, evaluate_metric
from weekly_forecast.backtest.splits import split_holdout
from weekly_forecast.config import EvalMode
from weekly_forecast.smoothing.holt_winters import (
    DEFAULT_SEASON_LENGTH,
    forecast_holt_winters,
    holt_winters_additive,
)
from weekly_forecast.smoothing.sma import forecast_sma, osa_sma

log = logging.getLogger(__name__)

METHOD_SMA = "SMA"
METHOD_HW = "HW"
METHOD_NAMES: tuple[str, ...] = (METHOD_SMA, METHOD_HW)
VALID_MODES: frozenset[str] = frozenset(get_args(EvalMode))


@dataclass(frozen=True)
class EvaluationReport:
    """Scores for both methods under one (mode, metric) combination.

    Attributes:
        mode:    ``"rolling"`` or ``"holdout"``.
        metric:  ``"MAPE"`` or ``"RMSE"``.
        horizon: Effective holdout length (holdout mode); ``None`` for rolling.
        n_train: Training prefix length (holdout) or full length (rolling).
        scores:  Method name → score or ``None``.
    """

    mode: str
    metric: str
    horizon: int | None
    n_train: int
    scores: dict[str, float | None] = field(default_factory=dict)

    def best_method(self) -> str | None:
        """Method with the lowest defined score, or ``None`` if none is defined."""
        defined = {k: v for k, v in self.scores.items() if v is not None}
        if not defined:
            return None
        return min(defined, key=defined.__getitem__)


def _describe(results: dict[str, MetricResult]) -> str:
    """``SMA=1.23 (pairs=10) HW=n/a (pairs=0)`` for log lines."""
    return " ".join(
        f"{name}={r.value if r.is_defined else 'n/a'} (pairs={r.n_pairs})"
        for name, r in results.items()
    )


def evaluate_rolling(
    values: Sequence[float],
    window: int,
    alpha: float,
    beta: float,
    gamma: float,
    metric: str,
    season_length: int = DEFAULT_SEASON_LENGTH,
) -> dict[str, float | None]:
    """Score one-step-ahead predictions of both engines over the full series."""
    yhat_sma = osa_sma(values, window)
    yhat_hw = holt_winters_additive(values, season_length, alpha, beta, gamma).one_step_ahead

    results = {
        METHOD_SMA: evaluate_metric(metric, values, yhat_sma),
        METHOD_HW: evaluate_metric(metric, values, yhat_hw),
    }
    log.info(
        "Rolling evaluation | n=%d metric=%s %s",
        len(values), metric, _describe(results),
    )
    return {name: r.value for name, r in results.items()}


def evaluate_holdout(
    values: Sequence[float],
    horizon: int,
    window: int,
    alpha: float,
    beta: float,
    gamma: float,
    metric: str,
    season_length: int = DEFAULT_SEASON_LENGTH,
) -> dict[str, float | None]:
    """Score ``h``-step forecasts from the training prefix against the holdout.

    ``horizon`` is clamped to ``[1, n − 1]``.  A series too short to split
    (fewer than two observations) scores ``None`` for both methods.
    """
    split = split_holdout(len(values), horizon)
    if not split.is_valid:
        log.warning(
            "Holdout evaluation skipped: series of length %d cannot be split",
            len(values),
        )
        return {name: None for name in METHOD_NAMES}

    train = split.train(values)
    test = split.test(values)
    h = split.horizon

    pred_sma = forecast_sma(train, window, h)
    pred_hw = forecast_holt_winters(train, season_length, alpha, beta, gamma, h)

    results = {
        METHOD_SMA: evaluate_metric(metric, test, pred_sma),
        METHOD_HW: evaluate_metric(metric, test, pred_hw),
    }
    log.info(
        "Holdout evaluation | n=%d train=%d h=%d (requested %d) metric=%s %s",
        len(values), split.train_length, h, horizon, metric, _describe(results),
    )
    return {name: r.value for name, r in results.items()}


def evaluate(
    mode: str,
    values: Sequence[float],
    window: int,
    alpha: float,
    beta: float,
    gamma: float,
    metric: str,
    horizon: int,
    season_length: int = DEFAULT_SEASON_LENGTH,
) -> EvaluationReport:
    """Dispatch to the rolling or holdout protocol and wrap the result.

    Raises:
        ValueError: If ``mode`` is not ``"rolling"`` or ``"holdout"``.
    """
    key = mode.lower()
    if key not in VALID_MODES:
        raise ValueError(f"Unknown evaluation mode '{mode}'. Must be one of {sorted(VALID_MODES)}.")

    metric_key = metric.upper()
    if key == "rolling":
        scores = evaluate_rolling(
            values, window, alpha, beta, gamma, metric_key, season_length,
        )
        return EvaluationReport(
            mode=key, metric=metric_key, horizon=None, n_train=len(values), scores=scores,
        )

    split = split_holdout(len(values), horizon)
    scores = evaluate_holdout(
        values, horizon, window, alpha, beta, gamma, metric_key, season_length,
    )
    return EvaluationReport(
        mode=key,
        metric=metric_key,
        horizon=split.horizon,
        n_train=split.train_length,
        scores=scores,
    )
