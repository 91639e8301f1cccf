"""Structural protocols for pluggable feed sources.

Define the ``FeedSource`` interface that decouples the CLI and chart
session from concrete feed storage. Any class whose shape matches the
protocol can be used without explicit inheritance (structural subtyping).
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FeedSource(Protocol):
    """Async provider of raw, line-oriented feed records.

    Implementors load a recorded feed (local file, archive, etc.) and
    return its lines in recording order, one JSON record per line.
    """

    async def get_lines(self) -> list[str]:
        """Return all feed lines in recording order."""
        ...
