"""Detect high-impact trade clusters ("bubbles").

Ticks are grouped by exact millisecond timestamp, a finer grain than the
bar buckets and computed independently of them. A group becomes a bubble
only when both its summed quantity reaches ``threshold_q`` and its largest
single trade reaches the big-player threshold, so neither a lone giant
print nor a swarm of small trades qualifies on its own.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from orderflow_tools.core.models import Bubble, Tick


@dataclass
class _TimestampGroup:
    """Running totals for one exact-timestamp group."""

    timestamp: int
    total_quantity: int
    max_quantity: int
    max_price: Decimal

    def add(self, tick: Tick) -> None:
        """Fold a tick in; the first tick with the largest quantity keeps the price."""
        self.total_quantity += tick.quantity
        if tick.quantity > self.max_quantity:
            self.max_quantity = tick.quantity
            self.max_price = tick.price


def impact_score(max_quantity: int, average_quantity: Decimal) -> Decimal:
    """Return the peak trade size relative to the run's average trade size."""
    return Decimal(max_quantity) / average_quantity


def detect_bubbles(
    ticks: Sequence[Tick],
    threshold_q: int,
    big_player_threshold: int,
    average_quantity: Decimal,
) -> tuple[Bubble, ...]:
    """Emit a bubble for every timestamp group passing both thresholds.

    Args:
        ticks: Normalized ticks in feed order.
        threshold_q: Minimum summed quantity for the group.
        big_player_threshold: Minimum largest single quantity in the group.
        average_quantity: Run-wide mean quantity (strictly positive).

    Returns:
        Bubbles in ascending timestamp order.

    Raises:
        ValueError: If ``average_quantity`` is not positive.

    """
    if average_quantity <= 0:
        msg = f"average_quantity must be positive, got {average_quantity}"
        raise ValueError(msg)

    groups: dict[int, _TimestampGroup] = {}
    for tick in ticks:
        group = groups.get(tick.timestamp)
        if group is None:
            groups[tick.timestamp] = _TimestampGroup(
                timestamp=tick.timestamp,
                total_quantity=tick.quantity,
                max_quantity=tick.quantity,
                max_price=tick.price,
            )
        else:
            group.add(tick)

    bubbles = [
        Bubble(
            timestamp=group.timestamp,
            price=group.max_price,
            total_quantity=group.total_quantity,
            max_quantity=group.max_quantity,
            impact_score=impact_score(group.max_quantity, average_quantity),
        )
        for group in groups.values()
        if group.total_quantity >= threshold_q and group.max_quantity >= big_player_threshold
    ]
    bubbles.sort(key=lambda b: b.timestamp)
    return tuple(bubbles)
