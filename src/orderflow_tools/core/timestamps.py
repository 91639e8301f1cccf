"""Timestamp formatting utilities for terminal and CSV output."""

from datetime import UTC, datetime, timedelta

_MS_PER_SECOND = 1000

# 9999-12-31T23:59:59.999Z, the last instant a ``datetime`` can hold
MAX_EPOCH_MS = 253_402_300_799_999


def format_epoch_ms(value: int) -> str:
    """Format an epoch-millisecond timestamp as an ISO 8601 UTC string.

    Keep millisecond precision since bubbles are keyed by exact
    millisecond timestamps. Seconds and milliseconds are split with
    integer arithmetic so no float rounding can shift the result.

    Args:
        value: Epoch milliseconds, at most ``MAX_EPOCH_MS``.

    Returns:
        A string such as ``2024-08-02T08:51:13.206+00:00``.

    """
    seconds, millis = divmod(value, _MS_PER_SECOND)
    dt = datetime.fromtimestamp(seconds, tz=UTC) + timedelta(milliseconds=millis)
    return dt.isoformat(timespec="milliseconds")
