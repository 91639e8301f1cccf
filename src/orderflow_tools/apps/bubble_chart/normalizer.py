"""Turn raw feed lines into validated ticks for one instrument.

Each feed line is a JSON record with a ``feeds`` mapping from instrument
identifier to its last-traded price, time and quantity (the ``ltpc``
block, either at the top level of the instrument entry or nested inside a
full-feed ``ff.marketFF`` / ``ff.indexFF`` block). Lines that fail to
decode, lack the target instrument, or carry invalid values are skipped
and counted; they never abort a run.

Aggressor side is inferred with a price-direction proxy: an uptick or an
unchanged price is a BUY, a downtick is a SELL, and the very first trade
is a BUY. True bid/ask-based aggressor inference is not possible from
last-trade data alone.
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, cast

from orderflow_tools.core.exceptions import MalformedRecordError
from orderflow_tools.core.models import Side, Tick
from orderflow_tools.core.timestamps import MAX_EPOCH_MS

logger = logging.getLogger(__name__)

_FULL_FEED_KEYS = ("marketFF", "indexFF")


@dataclass(frozen=True)
class RawTrade:
    """Price, time and quantity extracted from one feed line."""

    timestamp: int
    price: Decimal
    quantity: int


@dataclass(frozen=True)
class NormalizedFeed:
    """Ticks produced from a feed plus the number of lines skipped."""

    ticks: tuple[Tick, ...]
    skipped: int


class AggressorState:
    """Per-run price-direction state used to infer the aggressor side.

    Create a fresh instance for every run and every instrument; the
    state must never carry over between them.
    """

    def __init__(self) -> None:
        """Start with no previous price (the bootstrap case)."""
        self.last_price: Decimal | None = None

    def classify(self, price: Decimal) -> Side:
        """Return the aggressor for a trade at ``price`` and remember the price.

        An unchanged price is attributed to BUY, continuing the prior
        momentum rather than flipping sides.
        """
        if self.last_price is not None and price < self.last_price:
            side = Side.SELL
        else:
            side = Side.BUY
        self.last_price = price
        return side


def _to_decimal(value: Any, field: str) -> Decimal:
    """Convert a JSON price value to a finite ``Decimal``."""
    if isinstance(value, bool) or value is None:
        msg = f"{field} is missing or not numeric: {value!r}"
        raise MalformedRecordError(msg)
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        msg = f"{field} is not numeric: {value!r}"
        raise MalformedRecordError(msg) from exc
    if not result.is_finite():
        msg = f"{field} must be finite, got {value!r}"
        raise MalformedRecordError(msg)
    return result


def _to_non_negative_int(value: Any, field: str, maximum: int | None = None) -> int:
    """Convert a JSON integer or integer string to a non-negative ``int``.

    The feed sends timestamps and quantities as strings (``"1722588672206"``,
    ``"75"``); integral numbers such as ``75.0`` are accepted too. Values
    above ``maximum`` are rejected before conversion.
    """
    number = _to_decimal(value, field)
    if number != number.to_integral_value():
        msg = f"{field} must be an integer, got {value!r}"
        raise MalformedRecordError(msg)
    if number < 0:
        msg = f"{field} must be >= 0, got {value!r}"
        raise MalformedRecordError(msg)
    if maximum is not None and number > maximum:
        msg = f"{field} must be <= {maximum}, got {value!r}"
        raise MalformedRecordError(msg)
    return int(number)


def _extract_ltpc(entry: Any) -> dict[str, Any]:
    """Locate the last-traded block inside an instrument entry."""
    if not isinstance(entry, dict):
        msg = "instrument entry is not an object"
        raise MalformedRecordError(msg)
    entry_dict = cast("dict[str, Any]", entry)

    ltpc: Any = entry_dict.get("ltpc")
    if ltpc is None:
        full_feed: Any = entry_dict.get("ff")
        if isinstance(full_feed, dict):
            for key in _FULL_FEED_KEYS:
                block: Any = cast("dict[str, Any]", full_feed).get(key)
                if isinstance(block, dict) and "ltpc" in block:
                    ltpc = cast("dict[str, Any]", block)["ltpc"]
                    break

    if not isinstance(ltpc, dict):
        msg = "instrument entry has no ltpc block"
        raise MalformedRecordError(msg)
    return cast("dict[str, Any]", ltpc)


def parse_feed_line(line: str, instrument_id: str) -> RawTrade:
    """Extract the trade for ``instrument_id`` from a single feed line.

    Numbers are decoded as ``Decimal`` so prices keep their exact
    decimal representation.

    Args:
        line: One JSON-encoded feed record.
        instrument_id: Instrument to extract (e.g. ``NSE_FO|35165``).

    Returns:
        The extracted ``RawTrade``.

    Raises:
        MalformedRecordError: If the line cannot be decoded (including
            oversized integer literals and runaway nesting), has no entry
            for the instrument, or the entry lacks a valid price, time
            or quantity.

    """
    try:
        record: Any = json.loads(line, parse_float=Decimal)
    except (ValueError, RecursionError) as exc:
        msg = f"undecodable line: {exc}"
        raise MalformedRecordError(msg) from exc

    feeds: Any = cast("dict[str, Any]", record).get("feeds") if isinstance(record, dict) else None
    if not isinstance(feeds, dict):
        msg = "record has no feeds mapping"
        raise MalformedRecordError(msg)

    entry: Any = cast("dict[str, Any]", feeds).get(instrument_id)
    if entry is None:
        msg = f"record has no entry for {instrument_id}"
        raise MalformedRecordError(msg)

    ltpc = _extract_ltpc(entry)
    return RawTrade(
        timestamp=_to_non_negative_int(ltpc.get("ltt"), "ltt", maximum=MAX_EPOCH_MS),
        price=_to_decimal(ltpc.get("ltp"), "ltp"),
        quantity=_to_non_negative_int(ltpc.get("ltq"), "ltq"),
    )


def normalize_feed(lines: Iterable[str], instrument_id: str) -> NormalizedFeed:
    """Convert feed lines into ticks for one instrument, in feed order.

    Aggressor state starts empty on every call, so two calls over the
    same input always produce identical ticks.

    Args:
        lines: Raw feed lines in recording order.
        instrument_id: Instrument to keep.

    Returns:
        The ticks plus a count of skipped lines.

    """
    state = AggressorState()
    ticks: list[Tick] = []
    skipped = 0
    for line_no, line in enumerate(lines, start=1):
        try:
            trade = parse_feed_line(line, instrument_id)
        except MalformedRecordError as exc:
            skipped += 1
            logger.debug("Skipping line %d: %s", line_no, exc)
            continue
        ticks.append(
            Tick(
                timestamp=trade.timestamp,
                price=trade.price,
                quantity=trade.quantity,
                aggressor=state.classify(trade.price),
            )
        )
    return NormalizedFeed(ticks=tuple(ticks), skipped=skipped)
