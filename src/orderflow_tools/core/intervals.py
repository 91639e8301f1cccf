"""Interval specification parsing for bar aggregation.

Turn human interval specifications such as ``"30 seconds"``, ``"1 minute"``,
``"5m"`` or the pandas-style ``"30S"`` / ``"1T"`` into a fixed duration in
milliseconds. Unparseable specifications raise ``InvalidIntervalSpecError``
so that a misconfigured run fails before any aggregation starts.
"""

import re
from dataclasses import dataclass

from orderflow_tools.core.exceptions import InvalidIntervalSpecError

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE

_UNIT_FACTORS: dict[str, int] = {
    "ms": 1,
    "millisecond": 1,
    "milliseconds": 1,
    "s": _MS_PER_SECOND,
    "sec": _MS_PER_SECOND,
    "secs": _MS_PER_SECOND,
    "second": _MS_PER_SECOND,
    "seconds": _MS_PER_SECOND,
    "m": _MS_PER_MINUTE,
    "t": _MS_PER_MINUTE,
    "min": _MS_PER_MINUTE,
    "mins": _MS_PER_MINUTE,
    "minute": _MS_PER_MINUTE,
    "minutes": _MS_PER_MINUTE,
    "h": _MS_PER_HOUR,
    "hr": _MS_PER_HOUR,
    "hrs": _MS_PER_HOUR,
    "hour": _MS_PER_HOUR,
    "hours": _MS_PER_HOUR,
}

_CANONICAL_UNITS = {
    1: "milliseconds",
    _MS_PER_SECOND: "seconds",
    _MS_PER_MINUTE: "minutes",
    _MS_PER_HOUR: "hours",
}

_SPEC_PATTERN = re.compile(r"^\s*(?P<count>[+-]?\d+)\s*(?P<unit>[A-Za-z]+)\s*$")


@dataclass(frozen=True)
class IntervalSpec:
    """Resolved interval: a positive count of a canonical unit.

    Attributes:
        count: Number of units per bar.
        unit: Canonical unit name (``seconds``, ``minutes``, ...).
        milliseconds: Total bar width in milliseconds.

    """

    count: int
    unit: str
    milliseconds: int

    def __str__(self) -> str:
        """Return a human-readable label such as ``30 seconds`` or ``1 minute``."""
        unit = self.unit.removesuffix("s") if self.count == 1 else self.unit
        return f"{self.count} {unit}"


def parse_interval(spec: str) -> IntervalSpec:
    """Parse an interval specification into an ``IntervalSpec``.

    Accept ``"<count> <unit>"`` or ``"<count><unit>"``; unit names are
    case-insensitive, so the pandas aliases ``S`` and ``T`` resolve to
    seconds and minutes.

    Args:
        spec: Interval specification string.

    Returns:
        The resolved ``IntervalSpec``.

    Raises:
        InvalidIntervalSpecError: If the spec is not a string, has no
            recognisable count/unit, uses an unknown unit, or has a
            non-positive count.

    """
    if not isinstance(spec, str):
        raise InvalidIntervalSpecError(spec, "expected a string such as '30 seconds'")

    match = _SPEC_PATTERN.match(spec)
    if match is None:
        raise InvalidIntervalSpecError(spec, "expected '<count> <unit>'")

    count = int(match.group("count"))
    if count <= 0:
        raise InvalidIntervalSpecError(spec, "count must be a positive integer")

    unit_token = match.group("unit").lower()
    factor = _UNIT_FACTORS.get(unit_token)
    if factor is None:
        known = ", ".join(sorted(set(_CANONICAL_UNITS.values())))
        raise InvalidIntervalSpecError(spec, f"unknown unit {unit_token!r} (use {known})")

    return IntervalSpec(count=count, unit=_CANONICAL_UNITS[factor], milliseconds=count * factor)


def resolve_interval_ms(spec: str) -> int:
    """Return the bar width in milliseconds for an interval specification.

    Raises:
        InvalidIntervalSpecError: If the specification cannot be parsed.

    """
    return parse_interval(spec).milliseconds
