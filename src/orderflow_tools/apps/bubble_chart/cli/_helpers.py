"""Shared helpers for the bubble chart CLI commands.

Provide feed loading, logging setup, and the resolution of interval and
threshold defaults from the YAML config. Keep these separate from the
command modules so each command stays focused on orchestration.
"""

import logging
from pathlib import Path

import typer

from orderflow_tools.core.config import get_config
from orderflow_tools.core.exceptions import InvalidIntervalSpecError
from orderflow_tools.core.intervals import IntervalSpec, parse_interval
from orderflow_tools.core.protocols import FeedSource
from orderflow_tools.data.providers.feed_file import FeedFileProvider, list_instruments

_DEFAULT_INTERVAL = "30 seconds"
_DEFAULT_THRESHOLD_Q = 2000
_DEFAULT_BIG_PLAYER = 500


def configure_logging(*, verbose: bool) -> None:
    """Enable INFO-level logging (DEBUG with ``verbose``) for a CLI run."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def resolve_interval(raw: str | None) -> IntervalSpec:
    """Resolve the bar interval from the CLI option or YAML config default.

    Fall back to ``30 seconds`` when neither the CLI option nor the config
    key ``bubble_chart.default_interval`` is set. Raise
    ``typer.BadParameter`` for an unparseable interval so the run fails
    before any data is processed.
    """
    value = raw or get_config().get("bubble_chart.default_interval", _DEFAULT_INTERVAL)
    try:
        return parse_interval(str(value))
    except InvalidIntervalSpecError as exc:
        raise typer.BadParameter(str(exc), param_hint="'--interval'") from exc


def resolve_threshold(raw: int | None, key: str, default: int, option: str) -> int:
    """Resolve a non-negative threshold from the CLI option or YAML config.

    Args:
        raw: Value passed on the command line, if any.
        key: Config key under ``bubble_chart``.
        default: Fallback when neither source provides a value.
        option: CLI option name used in error messages.

    Returns:
        The resolved threshold.

    """
    value = raw if raw is not None else get_config().get_int(f"bubble_chart.{key}", default)
    if value < 0:
        raise typer.BadParameter(f"{option} must be >= 0", param_hint=f"'{option}'")
    return value


def resolve_threshold_q(raw: int | None) -> int:
    """Resolve the summed-quantity bubble threshold."""
    return resolve_threshold(raw, "threshold_q", _DEFAULT_THRESHOLD_Q, "--threshold-q")


def resolve_big_player(raw: int | None) -> int:
    """Resolve the big-player single-trade threshold."""
    return resolve_threshold(raw, "big_player_threshold", _DEFAULT_BIG_PLAYER, "--big-player")


def build_feed_source(path: Path) -> FeedSource:
    """Build the feed source for a recording on disk."""
    return FeedFileProvider(path)


async def load_feed(source: FeedSource) -> list[str]:
    """Load raw feed lines from any ``FeedSource``."""
    return await source.get_lines()


def validate_instrument(instrument: str, lines: list[str]) -> str:
    """Check that ``instrument`` appears in the feed.

    Raise ``typer.BadParameter`` listing the known instruments otherwise.
    """
    known = list_instruments(lines)
    if instrument not in known:
        listing = ", ".join(known) if known else "none found"
        raise typer.BadParameter(
            f"Unknown instrument {instrument!r}. Known instruments: {listing}",
            param_hint="'--instrument'",
        )
    return instrument
