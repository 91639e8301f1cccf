"""Core data models shared across the order-flow tools.

Define the immutable value objects (Tick, Bar, Bubble, GlobalStats) that
flow from the tick normalizer through the bar aggregator and impact
detector, plus the mutable ``BarBuilder`` used while a bucket is still
collecting ticks.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

ZERO = Decimal(0)
ONE = Decimal(1)


class Side(Enum):
    """Inferred aggressor side of a trade: BUY (lifted offer) or SELL (hit bid)."""

    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class Tick:
    """Immutable trade event for a single instrument.

    Attributes:
        timestamp: Last-traded time in epoch milliseconds.
        price: Last-traded price.
        quantity: Last-traded quantity (non-negative).
        aggressor: Side inferred from the price-direction proxy.

    """

    timestamp: int
    price: Decimal
    quantity: int
    aggressor: Side

    def __post_init__(self) -> None:
        """Validate the quantity is non-negative."""
        if self.quantity < 0:
            msg = f"quantity must be >= 0, got {self.quantity}"
            raise ValueError(msg)


@dataclass(frozen=True)
class GlobalStats:
    """Run-wide statistics used as normalisation constants downstream."""

    average_quantity: Decimal


@dataclass(frozen=True)
class Bar:
    """Immutable OHLC bar with a four-way volume breakdown.

    Volume is split by aggressor side and by whether each trade met the
    big-player threshold, so the four volume fields together account for
    every tick quantity in the bucket exactly once.
    """

    interval_start: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    buy_volume: int = 0
    big_player_buy_volume: int = 0
    sell_volume: int = 0
    big_player_sell_volume: int = 0

    @property
    def total_volume(self) -> int:
        """Return the sum of all four volume accumulators."""
        return (
            self.buy_volume
            + self.big_player_buy_volume
            + self.sell_volume
            + self.big_player_sell_volume
        )


@dataclass
class BarBuilder:
    """Mutable in-progress bar for one time bucket.

    Open a builder with the first tick of a bucket, feed the remaining
    ticks through ``add()``, then call ``build()`` to produce an
    immutable ``Bar``.
    """

    interval_start: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    buy_volume: int = 0
    big_player_buy_volume: int = 0
    sell_volume: int = 0
    big_player_sell_volume: int = 0

    @classmethod
    def open_with(cls, interval_start: int, tick: Tick, big_player_threshold: int) -> "BarBuilder":
        """Start a new bucket whose OHLC all equal the first tick's price.

        Args:
            interval_start: Bucket start in epoch milliseconds.
            tick: First tick seen in the bucket.
            big_player_threshold: Minimum quantity for a big-player trade.

        Returns:
            A builder already holding the tick's volume.

        """
        builder = cls(
            interval_start=interval_start,
            open=tick.price,
            high=tick.price,
            low=tick.price,
            close=tick.price,
        )
        builder.add_volume(tick, big_player_threshold)
        return builder

    def add(self, tick: Tick, big_player_threshold: int) -> None:
        """Fold a subsequent tick into the bucket (arrival order sets close)."""
        self.high = max(self.high, tick.price)
        self.low = min(self.low, tick.price)
        self.close = tick.price
        self.add_volume(tick, big_player_threshold)

    def add_volume(self, tick: Tick, big_player_threshold: int) -> None:
        """Credit the tick quantity to exactly one of the four accumulators."""
        big = tick.quantity >= big_player_threshold
        if tick.aggressor == Side.BUY:
            if big:
                self.big_player_buy_volume += tick.quantity
            else:
                self.buy_volume += tick.quantity
        elif big:
            self.big_player_sell_volume += tick.quantity
        else:
            self.sell_volume += tick.quantity

    def build(self) -> Bar:
        """Freeze the accumulated state into an immutable ``Bar``."""
        return Bar(
            interval_start=self.interval_start,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            buy_volume=self.buy_volume,
            big_player_buy_volume=self.big_player_buy_volume,
            sell_volume=self.sell_volume,
            big_player_sell_volume=self.big_player_sell_volume,
        )


@dataclass(frozen=True)
class Bubble:
    """Immutable high-impact event for one exact-timestamp tick group.

    Carry enough for a renderer to size the marker (``total_quantity``
    relative to the average) and colour it (``impact_score``).

    Attributes:
        timestamp: Shared epoch-millisecond timestamp of the group.
        price: Price of the largest trade in the group (first on ties).
        total_quantity: Sum of quantities in the group.
        max_quantity: Largest single quantity in the group.
        impact_score: ``max_quantity`` divided by the run's average quantity.

    """

    timestamp: int
    price: Decimal
    total_quantity: int
    max_quantity: int
    impact_score: Decimal
