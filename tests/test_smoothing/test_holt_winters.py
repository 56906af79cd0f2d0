"""
Tests for the additive Holt-Winters engine.

What we test
------------
1. Seasonal initialization — complete-period averaging, short-series fallback.
2. Recursion invariants — fit and one-step-ahead formulas, seasonal update
   only from t = s onward.
3. Known series — constant, exact linear trend, exact seasonal pattern.
4. Forecast — linear extrapolation plus repeating seasonal lookup.
5. Edge cases — empty input, single observation, period floored to 1.
"""

from __future__ import annotations

import pytest

from weekly_forecast.smoothing.holt_winters import (
    forecast_holt_winters,
    holt_winters_additive,
    init_seasonal_additive,
    last_seasonal_by_position,
)

ALPHA, BETA, GAMMA = 0.3, 0.1, 0.2

NOISY = [
    12.0, 15.0, 11.0, 18.0, 13.0, 16.0, 12.5, 19.0,
    14.0, 17.5, 13.0, 20.0, 15.0, 18.0, 14.5, 21.0,
]


# ── Seasonal initialization ────────────────────────────────────────────────────

def test_init_seasonal_uses_complete_periods() -> None:
    values = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 100.0]  # 2 full periods of 3 + 1 extra
    overall = sum(values) / len(values)
    init = init_seasonal_additive(values, 3)
    assert init == pytest.approx([2.5 - overall, 3.5 - overall, 4.5 - overall])


def test_init_seasonal_short_series_fallback() -> None:
    """No complete period: raw value minus mean, or 0 past the end."""
    init = init_seasonal_additive([1.0, 2.0, 3.0], 5)
    assert init == pytest.approx([-1.0, 0.0, 1.0, 0.0, 0.0])


def test_init_seasonal_empty_series() -> None:
    assert init_seasonal_additive([], 4) == [0.0, 0.0, 0.0, 0.0]


def test_init_seasonal_sums_to_zero_for_whole_periods() -> None:
    init = init_seasonal_additive(NOISY, 4)
    assert sum(init) == pytest.approx(0.0, abs=1e-9)


# ── Recursion invariants ───────────────────────────────────────────────────────

def test_state_lengths_match_input() -> None:
    state = holt_winters_additive(NOISY, 4, ALPHA, BETA, GAMMA)
    for seq in (state.level, state.trend, state.seasonal, state.fit, state.one_step_ahead):
        assert len(seq) == len(NOISY)
    assert len(state.seasonal_init) == 4


def test_one_step_ahead_undefined_at_zero_only() -> None:
    state = holt_winters_additive(NOISY, 4, ALPHA, BETA, GAMMA)
    assert state.one_step_ahead[0] is None
    assert all(v is not None for v in state.one_step_ahead[1:])
    assert all(v is not None for v in state.fit)


def test_predictions_follow_recursion() -> None:
    s = 4
    state = holt_winters_additive(NOISY, s, ALPHA, BETA, GAMMA)
    init = state.seasonal_init
    for t in range(1, len(NOISY)):
        s_prev = state.seasonal[t - s] if t >= s else init[t % s]
        assert state.one_step_ahead[t] == pytest.approx(
            state.level[t - 1] + state.trend[t - 1] + s_prev
        )
        assert state.fit[t] == pytest.approx(state.level[t] + state.trend[t] + s_prev)
        assert state.level[t] == pytest.approx(
            ALPHA * (NOISY[t] - s_prev)
            + (1 - ALPHA) * (state.level[t - 1] + state.trend[t - 1])
        )
        assert state.trend[t] == pytest.approx(
            BETA * (state.level[t] - state.level[t - 1]) + (1 - BETA) * state.trend[t - 1]
        )


def test_seasonal_copied_in_first_period_then_updated() -> None:
    s = 4
    state = holt_winters_additive(NOISY, s, ALPHA, BETA, GAMMA)
    assert state.seasonal[:s] == pytest.approx(state.seasonal_init)
    for t in range(s, len(NOISY)):
        assert state.seasonal[t] == pytest.approx(
            GAMMA * (NOISY[t] - state.level[t]) + (1 - GAMMA) * state.seasonal[t - s]
        )


def test_initial_level_and_trend() -> None:
    state = holt_winters_additive(NOISY, 4, ALPHA, BETA, GAMMA)
    assert state.level[0] == pytest.approx(NOISY[0] - state.seasonal_init[0])
    assert state.trend[0] == pytest.approx((NOISY[10] - NOISY[0]) / 10)
    assert state.fit[0] == pytest.approx(
        state.level[0] + state.trend[0] + state.seasonal_init[0]
    )


def test_initial_trend_short_series_uses_available_steps() -> None:
    state = holt_winters_additive([5.0, 8.0, 9.0], 2, ALPHA, BETA, GAMMA)
    assert state.trend[0] == pytest.approx((9.0 - 5.0) / 2)


def test_input_not_mutated() -> None:
    values = list(NOISY)
    holt_winters_additive(values, 4, ALPHA, BETA, GAMMA)
    forecast_holt_winters(values, 4, ALPHA, BETA, GAMMA, 6)
    assert values == NOISY


# ── Known series ───────────────────────────────────────────────────────────────

@pytest.mark.parametrize("season_length", [1, 4, 52])
def test_constant_series_tracks_constant(season_length: int) -> None:
    values = [100.0] * 30
    state = holt_winters_additive(values, season_length, ALPHA, BETA, GAMMA)
    assert state.fit == pytest.approx(values)
    assert state.one_step_ahead[1:] == pytest.approx(values[1:])
    forecast = forecast_holt_winters(values, season_length, ALPHA, BETA, GAMMA, 10)
    assert forecast == pytest.approx([100.0] * 10)


def test_linear_series_extrapolates_trend() -> None:
    values = [10.0 + 2.0 * t for t in range(20)]
    state = holt_winters_additive(values, 1, ALPHA, BETA, GAMMA)
    assert state.one_step_ahead[1:] == pytest.approx(values[1:])
    forecast = forecast_holt_winters(values, 1, ALPHA, BETA, GAMMA, 3)
    assert forecast == pytest.approx([50.0, 52.0, 54.0])


def test_exact_seasonal_pattern_is_reproduced(seasonal_series) -> None:
    values = list(seasonal_series.values)
    state = holt_winters_additive(values, 5, ALPHA, BETA, GAMMA)
    assert state.seasonal_init == pytest.approx([-2.0, -1.0, 0.0, 1.0, 2.0])
    assert state.one_step_ahead[1:] == pytest.approx(values[1:])
    forecast = forecast_holt_winters(values, 5, ALPHA, BETA, GAMMA, 6)
    assert forecast == pytest.approx([8.0, 9.0, 10.0, 11.0, 12.0, 8.0])


# ── Forecast ───────────────────────────────────────────────────────────────────

def test_forecast_formula_matches_terminal_state() -> None:
    s = 4
    n = len(NOISY)
    state = holt_winters_additive(NOISY, s, ALPHA, BETA, GAMMA)
    lookup = last_seasonal_by_position(state.seasonal, s)
    forecast = forecast_holt_winters(NOISY, s, ALPHA, BETA, GAMMA, 9)
    assert len(forecast) == 9
    for h in range(1, 10):
        expected = state.level[-1] + h * state.trend[-1] + lookup[(n + h - 1) % s]
        assert forecast[h - 1] == pytest.approx(expected)


def test_last_seasonal_by_position_takes_most_recent() -> None:
    seasonal = [1.0, 2.0, 3.0, 10.0, 20.0]
    assert last_seasonal_by_position(seasonal, 3) == [10.0, 20.0, 3.0]


def test_last_seasonal_by_position_skips_none_and_defaults_zero() -> None:
    seasonal = [1.0, None, None]
    assert last_seasonal_by_position(seasonal, 4) == [1.0, 0.0, 0.0, 0.0]


# ── Edge cases ─────────────────────────────────────────────────────────────────

def test_empty_series() -> None:
    state = holt_winters_additive([], 52, ALPHA, BETA, GAMMA)
    assert len(state) == 0
    assert state.level == [] and state.fit == [] and state.one_step_ahead == []
    assert forecast_holt_winters([], 52, ALPHA, BETA, GAMMA, 3) == [None, None, None]


def test_single_observation() -> None:
    state = holt_winters_additive([5.0], 52, ALPHA, BETA, GAMMA)
    assert state.level == [5.0]
    assert state.trend == [None]
    assert state.fit == [None]
    assert state.one_step_ahead == [None]
    assert forecast_holt_winters([5.0], 52, ALPHA, BETA, GAMMA, 3) == [None, None, None]


def test_two_observations_have_defined_trend() -> None:
    state = holt_winters_additive([5.0, 7.0], 52, ALPHA, BETA, GAMMA)
    assert state.trend[0] == pytest.approx(2.0)
    assert state.fit[0] is not None
    assert all(v is not None for v in forecast_holt_winters([5.0, 7.0], 52, ALPHA, BETA, GAMMA, 3))


def test_series_shorter_than_period_does_not_crash() -> None:
    values = NOISY[:7]
    forecast = forecast_holt_winters(values, 52, ALPHA, BETA, GAMMA, 12)
    assert len(forecast) == 12
    assert all(v is not None for v in forecast)


def test_zero_period_floored_to_one() -> None:
    state = holt_winters_additive(NOISY, 0, ALPHA, BETA, GAMMA)
    assert len(state.seasonal_init) == 1
    assert len(forecast_holt_winters(NOISY, 0, ALPHA, BETA, GAMMA, 2)) == 2
