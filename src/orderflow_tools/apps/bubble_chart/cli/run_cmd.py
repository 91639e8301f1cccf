"""CLI command for building bars and bubbles from a recorded feed.

Load a recorded feed file, validate the instrument and interval, run the
bubble chart pipeline once, print summary, bar, and bubble tables, and
optionally export bars and bubbles to CSV for a rendering layer.
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from orderflow_tools.apps.bubble_chart.cli._helpers import (
    build_feed_source,
    configure_logging,
    load_feed,
    resolve_big_player,
    resolve_interval,
    resolve_threshold_q,
    validate_instrument,
)
from orderflow_tools.apps.bubble_chart.cli._output import (
    print_bars,
    print_bubbles,
    print_summary,
    write_bars_csv,
    write_bubbles_csv,
)
from orderflow_tools.apps.bubble_chart.pipeline import (
    PipelineConfig,
    PipelineResult,
    run_pipeline,
)


def run(  # noqa: PLR0913
    feed: Annotated[
        Path,
        typer.Option(exists=True, dir_okay=False, help="Recorded feed file (.txt or .gz)"),
    ],
    instrument: Annotated[str, typer.Option(help="Instrument id, e.g. 'NSE_FO|35165'")],
    interval: Annotated[
        str | None, typer.Option(help="Bar interval, e.g. '30 seconds', '1 minute', '30S'")
    ] = None,
    threshold_q: Annotated[
        int | None, typer.Option(help="Minimum summed quantity at one timestamp for a bubble")
    ] = None,
    big_player: Annotated[
        int | None, typer.Option(help="Minimum single-trade quantity for a big player")
    ] = None,
    bars_csv: Annotated[Path | None, typer.Option(help="Write bars to this CSV file")] = None,
    bubbles_csv: Annotated[
        Path | None, typer.Option(help="Write bubbles to this CSV file")
    ] = None,
    quiet: Annotated[  # noqa: FBT002
        bool, typer.Option("--quiet", "-q", help="Only print the summary")
    ] = False,
    verbose: Annotated[  # noqa: FBT002
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Build OHLC bars and high-impact bubbles for one instrument."""
    configure_logging(verbose=verbose)
    resolved_interval = resolve_interval(interval)
    config = PipelineConfig(
        instrument_id=instrument,
        interval_spec=str(resolved_interval),
        threshold_q=resolve_threshold_q(threshold_q),
        big_player_threshold=resolve_big_player(big_player),
    )

    result = asyncio.run(_run(feed, config))

    print_summary(result, resolved_interval)
    if not quiet:
        print_bars(result.bars)
        print_bubbles(result.bubbles)

    if bars_csv is not None:
        write_bars_csv(result.bars, bars_csv)
        typer.echo(f"Bars saved to {bars_csv}")
    if bubbles_csv is not None:
        write_bubbles_csv(result.bubbles, bubbles_csv)
        typer.echo(f"Bubbles saved to {bubbles_csv}")


async def _run(feed: Path, config: PipelineConfig) -> PipelineResult:
    """Load the feed, validate the instrument, and run the pipeline."""
    lines = await load_feed(build_feed_source(feed))
    validate_instrument(config.instrument_id, lines)
    return run_pipeline(lines, config)
