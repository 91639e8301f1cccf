"""File-based feed provider for recorded market data sessions.

Read a recorded WebSocket session (one JSON record per line) from a local
text file instead of a live socket. Gzip-compressed recordings are read
transparently. The provider also lists the instrument identifiers that
appear in a feed so callers can validate an instrument selection.
"""

import gzip
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, cast

logger = logging.getLogger(__name__)

_GZIP_SUFFIX = ".gz"


class FeedFileProvider:
    """Load raw feed lines from a local recording.

    Implement the ``FeedSource`` protocol. Lines are returned in file
    order with trailing whitespace stripped; blank lines are dropped.
    Invalid UTF-8 bytes are replaced rather than raised, so a corrupt line
    reaches the normalizer as an undecodable record instead of aborting
    the read.
    """

    def __init__(self, file_path: Path) -> None:
        """Initialize the provider with the path to the recording.

        Args:
            file_path: Absolute or relative path to the feed file
                (plain text or ``.gz``).

        """
        self._file_path = file_path

    async def get_lines(self) -> list[str]:
        """Read every non-blank line from the recording.

        Returns:
            Feed lines in recording order.

        Raises:
            FileNotFoundError: If the recording does not exist.

        """
        if self._file_path.suffix == _GZIP_SUFFIX:
            with gzip.open(self._file_path, "rt", encoding="utf-8", errors="replace") as f:
                lines = [line.rstrip() for line in f]
        else:
            with self._file_path.open(encoding="utf-8", errors="replace") as f:
                lines = [line.rstrip() for line in f]
        result = [line for line in lines if line]
        logger.debug("Read %d feed lines from %s", len(result), self._file_path)
        return result


def list_instruments(lines: Iterable[str]) -> list[str]:
    """Collect the instrument identifiers present in a feed.

    Undecodable lines and lines without a ``feeds`` mapping are ignored.
    Every key under ``feeds`` is listed, including entries that carry no
    trade (an index quote with only ``ltp``, or an empty ``ltpc``), so an
    instrument on this list can still yield no ticks.

    Args:
        lines: Raw feed lines.

    Returns:
        Sorted, de-duplicated instrument identifiers.

    """
    instruments: set[str] = set()
    for line in lines:
        try:
            record: Any = json.loads(line)
        except (ValueError, RecursionError):
            continue
        if not isinstance(record, dict):
            continue
        feeds: Any = cast("dict[str, Any]", record).get("feeds")
        if isinstance(feeds, dict):
            instruments.update(str(key) for key in cast("dict[str, Any]", feeds))
    return sorted(instruments)
