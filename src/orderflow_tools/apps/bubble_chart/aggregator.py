"""Bucket ticks into fixed-width OHLC bars with a four-way volume split.

Bucket boundaries are ``floor(timestamp / interval) * interval`` so they
depend only on the interval width, never on neighbouring data. Ticks are
folded in arrival order (not re-sorted by time), which means the close of
a bar is the price of the last tick *received* for that bucket. Empty
buckets are omitted rather than padded.
"""

import logging
from collections.abc import Sequence

from orderflow_tools.core.models import Bar, BarBuilder, Tick

logger = logging.getLogger(__name__)


def bucket_start(timestamp: int, interval_ms: int) -> int:
    """Return the start of the bucket containing ``timestamp``.

    Args:
        timestamp: Epoch milliseconds.
        interval_ms: Bar width in milliseconds.

    Returns:
        Bucket start in epoch milliseconds.

    """
    return (timestamp // interval_ms) * interval_ms


def aggregate_bars(
    ticks: Sequence[Tick],
    interval_ms: int,
    big_player_threshold: int,
) -> tuple[Bar, ...]:
    """Aggregate ticks into bars ordered by ascending interval start.

    Each tick's quantity is credited to exactly one of ``buy_volume``,
    ``big_player_buy_volume``, ``sell_volume`` or
    ``big_player_sell_volume`` according to its aggressor side and whether
    its quantity reaches ``big_player_threshold``.

    Args:
        ticks: Normalized ticks in feed order.
        interval_ms: Bar width in milliseconds (must be positive).
        big_player_threshold: Minimum single-trade quantity for the
            big-player accumulators.

    Returns:
        One immutable ``Bar`` per non-empty bucket.

    Raises:
        ValueError: If ``interval_ms`` is not positive.

    """
    if interval_ms <= 0:
        msg = f"interval_ms must be positive, got {interval_ms}"
        raise ValueError(msg)

    builders: dict[int, BarBuilder] = {}
    for tick in ticks:
        start = bucket_start(tick.timestamp, interval_ms)
        if start < 0:
            logger.debug("Dropping tick with negative bucket key: %s", tick)
            continue
        builder = builders.get(start)
        if builder is None:
            builders[start] = BarBuilder.open_with(start, tick, big_player_threshold)
        else:
            builder.add(tick, big_player_threshold)

    return tuple(builders[start].build() for start in sorted(builders))
