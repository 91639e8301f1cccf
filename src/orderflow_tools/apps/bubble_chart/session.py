"""Cancel-and-restart re-runs of the bubble chart pipeline.

A host that re-runs the pipeline whenever the instrument, interval or
thresholds change can call ``ChartSession.update`` without waiting for the
previous run. The newest call always wins: an in-flight run is cancelled
and, should its worker thread still finish, its output is discarded
instead of being published.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from orderflow_tools.apps.bubble_chart.pipeline import PipelineResult, run_pipeline

if TYPE_CHECKING:
    from collections.abc import Iterable

    from orderflow_tools.apps.bubble_chart.pipeline import PipelineConfig

logger = logging.getLogger(__name__)


class ChartSession:
    """Own a loaded feed and publish the result of the newest pipeline run.

    Args:
        lines: Raw feed lines; copied into an immutable tuple so worker
            threads only ever read them.

    """

    def __init__(self, lines: Iterable[str]) -> None:
        """Initialize the session with a pre-loaded feed.

        Args:
            lines: Raw feed lines in recording order.

        """
        self._lines: tuple[str, ...] = tuple(lines)
        self._generation = 0
        self._task: asyncio.Task[PipelineResult] | None = None
        self._latest: PipelineResult | None = None

    @property
    def latest(self) -> PipelineResult | None:
        """Return the most recently published result, if any."""
        return self._latest

    async def update(self, config: PipelineConfig) -> PipelineResult | None:
        """Re-run the pipeline for ``config``, superseding any in-flight run.

        The previous result is cleared as soon as a new run starts so a
        renderer never shows output belonging to an older configuration.

        Args:
            config: Configuration for the new run.

        Returns:
            The published result, or ``None`` if a newer update superseded
            this one before it finished.

        Raises:
            InvalidIntervalSpecError: If the interval cannot be resolved.

        """
        self._generation += 1
        generation = self._generation
        self._latest = None

        if self._task is not None and not self._task.done():
            logger.debug("Cancelling superseded run (generation %d)", generation - 1)
            self._task.cancel()

        task = asyncio.create_task(asyncio.to_thread(run_pipeline, self._lines, config))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return None
            raise
        except Exception:
            if generation != self._generation:
                logger.debug("Ignoring failure of superseded run (generation %d)", generation)
                return None
            raise

        if generation != self._generation:
            logger.debug("Discarding stale result (generation %d)", generation)
            return None
        self._latest = result
        return result
