"""Exceptions for the order-flow pipeline."""


class OrderflowError(Exception):
    """Base exception for order-flow errors."""


class InvalidIntervalSpecError(OrderflowError, ValueError):
    """Interval specification could not be resolved to a duration.

    Raised before any aggregation work begins so that no partial
    results are produced for a misconfigured run.
    """

    def __init__(self, spec: object, reason: str) -> None:
        """Initialize the interval error.

        Args:
            spec: The offending interval specification.
            reason: Human-readable explanation of what is wrong.

        """
        super().__init__(f"Invalid interval {spec!r}: {reason}")
        self.spec = spec
        self.reason = reason


class MalformedRecordError(OrderflowError):
    """A feed line that cannot be turned into a trade for the instrument.

    Never fatal: the normalizer catches it, skips the line, and counts it.
    """
