"""Tests for fixed-interval bar aggregation."""

from decimal import Decimal

import pytest

from orderflow_tools.apps.bubble_chart.aggregator import aggregate_bars, bucket_start
from orderflow_tools.core.models import Side, Tick

_INTERVAL_MS = 30_000
_BASE = 1_722_588_660_000
_BIG = 50


def _tick(ts: int, price: str, quantity: int = 5, side: Side = Side.BUY) -> Tick:
    """Build a tick at the given offset from the aligned base timestamp."""
    return Tick(timestamp=_BASE + ts, price=Decimal(price), quantity=quantity, aggressor=side)


class TestBucketStart:
    """Tests for bucket_start."""

    def test_floors_to_interval(self) -> None:
        """Round down to the start of the bucket."""
        assert bucket_start(_BASE + 29_999, _INTERVAL_MS) == _BASE
        assert bucket_start(_BASE + 30_000, _INTERVAL_MS) == _BASE + _INTERVAL_MS

    def test_negative_timestamp_floors_below_zero(self) -> None:
        """Produce a negative key for a negative timestamp."""
        assert bucket_start(-1, _INTERVAL_MS) == -_INTERVAL_MS


class TestAggregateBars:
    """Tests for aggregate_bars."""

    def test_two_ticks_in_one_bucket(self) -> None:
        """Build one bar with OHLC and the small-buy volume."""
        bars = aggregate_bars([_tick(1_000, "100"), _tick(2_000, "105")], _INTERVAL_MS, _BIG)

        assert len(bars) == 1
        bar = bars[0]
        assert bar.interval_start == _BASE
        assert (bar.open, bar.high, bar.low, bar.close) == (
            Decimal(100),
            Decimal(105),
            Decimal(100),
            Decimal(105),
        )
        assert bar.buy_volume == 10
        assert bar.big_player_buy_volume == 0
        assert bar.sell_volume == 0
        assert bar.big_player_sell_volume == 0

    def test_four_way_volume_split(self) -> None:
        """Route each quantity by side and big-player threshold."""
        ticks = [
            _tick(0, "100", 10, Side.BUY),
            _tick(1, "100", 50, Side.BUY),
            _tick(2, "99", 49, Side.SELL),
            _tick(3, "98", 70, Side.SELL),
        ]

        (bar,) = aggregate_bars(ticks, _INTERVAL_MS, _BIG)

        assert bar.buy_volume == 10
        assert bar.big_player_buy_volume == 50
        assert bar.sell_volume == 49
        assert bar.big_player_sell_volume == 70

    def test_close_follows_arrival_order(self) -> None:
        """Use the last-arriving tick as close, not the latest timestamp."""
        ticks = [_tick(20_000, "101"), _tick(5_000, "97")]

        (bar,) = aggregate_bars(ticks, _INTERVAL_MS, _BIG)

        assert bar.open == Decimal(101)
        assert bar.close == Decimal(97)

    def test_bars_sorted_and_sparse(self) -> None:
        """Sort bars by start time and omit empty buckets."""
        ticks = [
            _tick(3 * _INTERVAL_MS + 1, "103"),
            _tick(1, "100"),
            _tick(3 * _INTERVAL_MS + 2, "104"),
        ]

        bars = aggregate_bars(ticks, _INTERVAL_MS, _BIG)

        assert [b.interval_start for b in bars] == [_BASE, _BASE + 3 * _INTERVAL_MS]

    def test_volume_conservation_and_ohlc_bounds(self) -> None:
        """Account for every quantity once and keep low <= open/close <= high."""
        prices = ["100", "102", "99", "101", "98", "103", "97", "100"]
        ticks = [
            _tick(i * 11_000, price, quantity=i * 13 % 90, side=Side.BUY if i % 2 else Side.SELL)
            for i, price in enumerate(prices)
        ]

        bars = aggregate_bars(ticks, _INTERVAL_MS, _BIG)

        assert sum(b.total_volume for b in bars) == sum(t.quantity for t in ticks)
        for bar in bars:
            assert bar.low <= bar.open <= bar.high
            assert bar.low <= bar.close <= bar.high

    def test_negative_bucket_dropped(self) -> None:
        """Drop ticks whose bucket key would be negative."""
        ticks = [
            Tick(timestamp=-5, price=Decimal(1), quantity=3, aggressor=Side.BUY),
            Tick(timestamp=10, price=Decimal(2), quantity=4, aggressor=Side.BUY),
        ]

        bars = aggregate_bars(ticks, _INTERVAL_MS, _BIG)

        assert len(bars) == 1
        assert bars[0].interval_start == 0
        assert bars[0].total_volume == 4

    def test_empty_ticks(self) -> None:
        """Return no bars for no ticks."""
        assert aggregate_bars([], _INTERVAL_MS, _BIG) == ()

    @pytest.mark.parametrize("interval_ms", [0, -1000])
    def test_non_positive_interval_raises(self, interval_ms: int) -> None:
        """Reject a non-positive bar width."""
        with pytest.raises(ValueError, match="interval_ms must be positive"):
            aggregate_bars([_tick(0, "100")], interval_ms, _BIG)
