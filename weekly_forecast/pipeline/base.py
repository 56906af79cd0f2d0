"""
Abstract base class for all pipeline stages.

Every stage follows the same contract:
  1. Receive ``AppConfig`` at construction.
  2. ``run(**kwargs)`` is the sole public API.
  3. ``run()`` creates a ``RunMetadata`` record, calls ``_execute()``,
     and finalizes the record with success/failed status.
  4. ``_execute()`` is the stage-specific implementation (overridden by
     subclasses) and returns the stage's in-memory result.

Error handling is centralized here: stages never swallow exceptions.  A
failure is logged with the run slug, recorded on the run, and re-raised.

Usage::

    class MyStage(PipelineStage):
        stage_name = "forecast"

        def _execute(self, run: RunMetadata, **kwargs) -> MyResult:
            run.rows_processed = 104
            return MyResult(run=run, ...)

    result = MyStage(config=app_config).run()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any
from uuid import uuid4

from weekly_forecast.config import AppConfig
from weekly_forecast.models.meta import RunMetadata
from weekly_forecast.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class PipelineStage(ABC):
    """Abstract base for all pipeline stages.

    Subclasses must:
      1. Set ``stage_name`` class variable.
      2. Implement ``_execute(run, **kwargs)``.

    Attributes:
        stage_name: String identifier matching a valid ``RunMetadata.pipeline_stage``.
        config: The application configuration for this run.
        last_run: ``RunMetadata`` of the most recent ``run()`` call.
    """

    stage_name: str  # Override in subclass

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.last_run: RunMetadata | None = None

    def run(self, **kwargs: Any) -> Any:
        """Execute this pipeline stage.

        Args:
            **kwargs: Stage-specific keyword arguments passed to ``_execute()``.

        Returns:
            Whatever ``_execute()`` returns.  The finalized ``RunMetadata``
            is available as ``self.last_run``.

        Raises:
            Exception: Re-raises any exception from ``_execute()`` after
                recording ``status='failed'`` in the run record.
        """
        run = RunMetadata(
            run_slug=str(uuid4()),
            pipeline_stage=self.stage_name,
            config_snapshot=self.config.model_dump(mode="json"),
            started_at=utcnow(),
        )
        self.last_run = run
        logger.info("Stage [%s] starting | run_slug=%s", self.stage_name, run.run_slug)

        try:
            result = self._execute(run=run, **kwargs)
        except Exception as exc:
            run.status = "failed"
            run.error_message = str(exc)
            run.finished_at = utcnow()
            logger.error(
                "Stage [%s] FAILED: %s | run_slug=%s",
                self.stage_name, exc, run.run_slug,
            )
            raise

        run.status = "success"
        run.finished_at = utcnow()
        logger.info(
            "Stage [%s] completed | rows=%d | run_slug=%s",
            self.stage_name, run.rows_processed, run.run_slug,
        )
        return result

    @abstractmethod
    def _execute(self, run: RunMetadata, **kwargs: Any) -> Any:
        """Stage-specific implementation.

        Args:
            run: The in-progress ``RunMetadata`` record (mutable).
            **kwargs: Stage-specific parameters.

        Returns:
            The stage's result object.
        """
        ...
