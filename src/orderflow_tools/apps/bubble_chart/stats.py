"""Run-wide tick statistics."""

from collections.abc import Sequence
from decimal import Decimal

from orderflow_tools.core.models import ONE, GlobalStats, Tick


def compute_global_stats(ticks: Sequence[Tick]) -> GlobalStats:
    """Compute the mean trade quantity over every tick in the run.

    The average is a divisor for impact scores, so it falls back to 1
    when there are no ticks or every quantity is zero.

    Args:
        ticks: All normalized ticks for the run.

    Returns:
        ``GlobalStats`` with a strictly positive ``average_quantity``.

    """
    if not ticks:
        return GlobalStats(average_quantity=ONE)
    total = sum(t.quantity for t in ticks)
    if total == 0:
        return GlobalStats(average_quantity=ONE)
    return GlobalStats(average_quantity=Decimal(total) / Decimal(len(ticks)))
