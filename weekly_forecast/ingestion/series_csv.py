"""
CSV loader for weekly observation series.

Format: comma delimited, with a header row.
Required columns:
  date, value

Extra columns are ignored.  Rows may appear in any order; they are sorted by
date before the series is built.

Date format:
  date  → YYYY-MM-DD

Value format:
  value → any float literal Python accepts; must be finite.

Example::

    date,value
    2024-01-07,512.4
    2024-01-14,498.1
"""

from __future__ import annotations

import csv
import logging
import math
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from weekly_forecast.models.series import WeeklySeries

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS = frozenset({"date", "value"})


def parse_series_csv(path: Path) -> WeeklySeries:
    """Parse a CSV file into a validated :class:`WeeklySeries`.

    All rows are validated before the series is built.  If **any** row fails,
    a single :class:`ValueError` is raised listing the first 10 failures.

    Args:
        path: Path to the CSV file (must exist).

    Returns:
        :class:`WeeklySeries` named after the file stem.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If required columns are missing, any row fails
            validation, or the dates do not form a valid series.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Series CSV file not found: {path}")

    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual_cols = {c.strip() for c in reader.fieldnames}
        missing = REQUIRED_CSV_COLUMNS - actual_cols
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )

        rows = [{(k or "").strip(): (v or "") for k, v in row.items()} for row in reader]

    points: list[tuple[date, float]] = []
    errors: list[tuple[int, str]] = []

    for i, row in enumerate(rows):
        line_no = i + 2  # 1-based, skip header row
        try:
            points.append((_parse_date(row, "date"), _parse_value(row, "value")))
        except ValueError as exc:
            errors.append((line_no, str(exc)))

    if errors:
        max_shown = 10
        detail = "\n".join(f"  Row {ln}: {msg}" for ln, msg in errors[:max_shown])
        suffix = f"\n  … and {len(errors) - max_shown} more" if len(errors) > max_shown else ""
        raise ValueError(
            f"{len(errors)} row(s) failed validation in {path.name}:\n{detail}{suffix}"
        )

    if not points:
        logger.warning("Series CSV is empty (header only): %s", path)

    points.sort(key=lambda p: p[0])
    try:
        series = WeeklySeries(
            name=path.stem,
            dates=[d for d, _ in points],
            values=[v for _, v in points],
        )
    except ValidationError as exc:
        raise ValueError(f"Invalid series in {path.name}: {exc}") from exc

    logger.info("Parsed %d observations from %s", len(series), path.name)
    return series


# ── Private helpers ────────────────────────────────────────────────────────────

def _parse_date(row: dict[str, str], key: str) -> date:
    """Parse a required ISO date (YYYY-MM-DD) from a CSV row field."""
    v = row.get(key, "").strip()
    if not v:
        raise ValueError(f"Required date field '{key}' is empty.")
    try:
        return date.fromisoformat(v)
    except ValueError:
        raise ValueError(
            f"Invalid date for '{key}': '{v}'. Expected YYYY-MM-DD format."
        )


def _parse_value(row: dict[str, str], key: str) -> float:
    """Parse a required finite float from a CSV row field."""
    v = row.get(key, "").strip()
    if not v:
        raise ValueError(f"Required numeric field '{key}' is empty.")
    try:
        out = float(v)
    except ValueError:
        raise ValueError(f"Invalid number for '{key}': '{v}'.")
    if not math.isfinite(out):
        raise ValueError(f"Non-finite value for '{key}': '{v}'.")
    return out
