"""Tests for run-wide tick statistics."""

from decimal import Decimal

from orderflow_tools.apps.bubble_chart.stats import compute_global_stats
from orderflow_tools.core.models import ONE, Side, Tick


def _tick(quantity: int) -> Tick:
    """Build a tick with the given quantity."""
    return Tick(timestamp=0, price=Decimal(100), quantity=quantity, aggressor=Side.BUY)


class TestComputeGlobalStats:
    """Tests for compute_global_stats."""

    def test_mean_quantity(self) -> None:
        """Average the quantities of all ticks."""
        stats = compute_global_stats([_tick(10), _tick(60), _tick(20)])
        assert stats.average_quantity == Decimal(30)

    def test_fractional_mean(self) -> None:
        """Keep a fractional average exact to Decimal precision."""
        stats = compute_global_stats([_tick(1), _tick(2)])
        assert stats.average_quantity == Decimal("1.5")

    def test_empty_defaults_to_one(self) -> None:
        """Fall back to 1 when there are no ticks."""
        assert compute_global_stats([]).average_quantity == ONE

    def test_all_zero_quantities_default_to_one(self) -> None:
        """Fall back to 1 rather than a zero divisor."""
        assert compute_global_stats([_tick(0), _tick(0)]).average_quantity == ONE
