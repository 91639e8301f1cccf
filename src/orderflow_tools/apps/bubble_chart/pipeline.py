"""One-shot batch pipeline from raw feed lines to bars and bubbles.

Validate a fixed ``PipelineConfig`` once at entry, resolve the interval
before touching any data, then normalize the feed, compute the run-wide
statistics, and derive bars and bubbles independently from the same
immutable tick tuple. Every run builds its own state from scratch; nothing
is cached between runs.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from orderflow_tools.apps.bubble_chart.aggregator import aggregate_bars
from orderflow_tools.apps.bubble_chart.detector import detect_bubbles
from orderflow_tools.apps.bubble_chart.normalizer import normalize_feed
from orderflow_tools.apps.bubble_chart.stats import compute_global_stats
from orderflow_tools.core.intervals import resolve_interval_ms
from orderflow_tools.core.models import Bar, Bubble, GlobalStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable, validated configuration for one pipeline run.

    Attributes:
        instrument_id: Instrument to chart (a key of the feed's ``feeds``).
        interval_spec: Bar width such as ``"30 seconds"`` or ``"1T"``.
        threshold_q: Minimum summed quantity at one timestamp for a bubble.
        big_player_threshold: Minimum single-trade quantity counted as a
            big player, for both the volume split and the bubble filter.

    """

    instrument_id: str
    interval_spec: str
    threshold_q: int
    big_player_threshold: int

    def __post_init__(self) -> None:
        """Validate the instrument and thresholds."""
        if not self.instrument_id:
            msg = "instrument_id must not be empty"
            raise ValueError(msg)
        if self.threshold_q < 0:
            msg = f"threshold_q must be >= 0, got {self.threshold_q}"
            raise ValueError(msg)
        if self.big_player_threshold < 0:
            msg = f"big_player_threshold must be >= 0, got {self.big_player_threshold}"
            raise ValueError(msg)


@dataclass(frozen=True)
class PipelineResult:
    """Complete, immutable output of one pipeline run."""

    instrument_id: str
    interval_ms: int
    bars: tuple[Bar, ...]
    bubbles: tuple[Bubble, ...]
    stats: GlobalStats
    tick_count: int
    skipped_lines: int


def run_pipeline(lines: Iterable[str], config: PipelineConfig) -> PipelineResult:
    """Run the full feed-to-chart transform for one configuration.

    Args:
        lines: Raw feed lines in recording order.
        config: Validated run configuration.

    Returns:
        Bars, bubbles and run statistics.

    Raises:
        InvalidIntervalSpecError: If ``config.interval_spec`` cannot be
            resolved. Raised before any line is read.

    """
    interval_ms = resolve_interval_ms(config.interval_spec)

    feed = normalize_feed(lines, config.instrument_id)
    stats = compute_global_stats(feed.ticks)
    bars = aggregate_bars(feed.ticks, interval_ms, config.big_player_threshold)
    bubbles = detect_bubbles(
        feed.ticks,
        config.threshold_q,
        config.big_player_threshold,
        stats.average_quantity,
    )

    logger.info(
        "Pipeline %s @ %dms: ticks=%d skipped=%d bars=%d bubbles=%d avg_qty=%s",
        config.instrument_id,
        interval_ms,
        len(feed.ticks),
        feed.skipped,
        len(bars),
        len(bubbles),
        stats.average_quantity,
    )

    return PipelineResult(
        instrument_id=config.instrument_id,
        interval_ms=interval_ms,
        bars=bars,
        bubbles=bubbles,
        stats=stats,
        tick_count=len(feed.ticks),
        skipped_lines=feed.skipped,
    )
