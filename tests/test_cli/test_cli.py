"""
CLI smoke tests using typer's CliRunner.

Every invocation passes ``--config`` pointing at a temp TOML so results do
not depend on the repository's config/default.toml or a local.toml.
"""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from weekly_forecast.cli import app

runner = CliRunner()


def test_validate_config(config_file: Path) -> None:
    result = runner.invoke(app, ["validate-config", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert "[OK] Config valid." in result.output
    assert "synthetic:trend" in result.output
    assert "holdout / RMSE / horizon=6" in result.output


def test_validate_config_full(config_file: Path) -> None:
    result = runner.invoke(app, ["validate-config", "--config", str(config_file), "--full"])
    assert result.exit_code == 0, result.output
    assert '"season_length": 12' in result.output


def test_validate_config_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "none.toml")])
    assert result.exit_code == 1
    assert "[ERROR]" in result.output


def test_show_series_limit(config_file: Path) -> None:
    result = runner.invoke(
        app, ["show-series", "--config", str(config_file), "--profile", "flat", "-n", "5"],
    )
    assert result.exit_code == 0, result.output
    assert "=== Series: flat ===" in result.output
    assert "Observations: 60" in result.output
    assert "55 earlier rows omitted" in result.output


def test_show_series_negative_limit_rejected(config_file: Path) -> None:
    result = runner.invoke(app, ["show-series", "--config", str(config_file), "-n", "-1"])
    assert result.exit_code == 2


def test_forecast_table(config_file: Path) -> None:
    result = runner.invoke(app, ["forecast", "--config", str(config_file), "-H", "3"])
    assert result.exit_code == 0, result.output
    assert "=== Forecast ===" in result.output
    assert "Horizon:      3 weeks" in result.output
    assert "[RMSE] holdout" in result.output


def test_forecast_json(config_file: Path) -> None:
    result = runner.invoke(app, [
        "forecast", "--config", str(config_file), "--json",
        "--window", "6", "--alpha", "0.5", "--mode", "rolling", "--metric", "mape",
    ])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["params"]["window"] == 6
    assert payload["params"]["alpha"] == 0.5
    assert payload["params"]["season_length"] == 12
    assert len(payload["forecast_dates"]) == 6
    assert len(payload["methods"]["HW"]["historical_fit"]) == 60
    assert payload["evaluation"]["mode"] == "rolling"
    assert payload["evaluation"]["metric"] == "MAPE"


def test_forecast_from_csv(config_file: Path, tmp_path: Path) -> None:
    csv_path = tmp_path / "units.csv"
    rows = "\n".join(f"2024-01-{7 + 7 * i:02d},{10 + i}" for i in range(4))
    csv_path.write_text("date,value\n" + rows + "\n", encoding="utf-8")
    result = runner.invoke(app, [
        "forecast", "--config", str(config_file), "--series-file", str(csv_path), "--json",
    ])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["series"]["name"] == "units"
    assert payload["series"]["values"] == [10.0, 11.0, 12.0, 13.0]
    assert payload["evaluation"]["horizon"] == 3


def test_forecast_invalid_alpha(config_file: Path) -> None:
    result = runner.invoke(app, ["forecast", "--config", str(config_file), "--alpha", "1.5"])
    assert result.exit_code == 1
    assert "[ERROR] Config validation failed" in result.output


def test_forecast_missing_series_file(config_file: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, [
        "forecast", "--config", str(config_file), "--series-file", str(tmp_path / "x.csv"),
    ])
    assert result.exit_code == 1
    assert "[ERROR]" in result.output


def test_evaluate_table(config_file: Path) -> None:
    result = runner.invoke(app, ["evaluate", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert "=== Evaluation ===" in result.output
    assert "trend (60 weeks)" in result.output
    assert result.output.count("[MAPE]") == 2


def test_evaluate_json(config_file: Path) -> None:
    result = runner.invoke(app, ["evaluate", "--config", str(config_file), "--json", "-H", "10"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert len(payload["reports"]) == 4
    holdout = [r for r in payload["reports"] if r["mode"] == "holdout"]
    assert all(r["horizon"] == 10 and r["n_train"] == 50 for r in holdout)
