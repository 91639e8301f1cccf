"""Terminal output formatters and CSV export for the bubble chart CLI.

Centralise all output logic so that the command modules remain focused on
orchestration. CSV files carry both the raw epoch-millisecond timestamp
and an ISO 8601 rendering of it.
"""

from __future__ import annotations

import csv
from typing import TYPE_CHECKING

import typer

from orderflow_tools.core.timestamps import format_epoch_ms

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from orderflow_tools.apps.bubble_chart.pipeline import PipelineResult
    from orderflow_tools.core.intervals import IntervalSpec
    from orderflow_tools.core.models import Bar, Bubble

BAR_CSV_COLUMNS = (
    "interval_start",
    "time",
    "open",
    "high",
    "low",
    "close",
    "buy_volume",
    "big_player_buy_volume",
    "sell_volume",
    "big_player_sell_volume",
)

BUBBLE_CSV_COLUMNS = (
    "timestamp",
    "time",
    "price",
    "total_quantity",
    "max_quantity",
    "impact_score",
)


def print_summary(result: PipelineResult, interval: IntervalSpec) -> None:
    """Print a formatted summary of a pipeline run to the terminal."""
    typer.echo(f"\n{'=' * 60}")
    typer.echo(f"Instrument:      {result.instrument_id}")
    typer.echo(f"Interval:        {interval}")
    typer.echo(f"Ticks:           {result.tick_count}")
    typer.echo(f"Skipped lines:   {result.skipped_lines}")
    typer.echo(f"Avg quantity:    {result.stats.average_quantity:.4f}")
    typer.echo(f"Bars:            {len(result.bars)}")
    typer.echo(f"Bubbles:         {len(result.bubbles)}")
    typer.echo(f"{'=' * 60}\n")


def print_bars(bars: Sequence[Bar]) -> None:
    """Print a table of bars with their four-way volume split."""
    if not bars:
        typer.echo("No bars.")
        return

    header = (
        f"{'Time':<29} {'Open':>10} {'High':>10} {'Low':>10} {'Close':>10} "
        f"{'Buy':>8} {'BigBuy':>8} {'Sell':>8} {'BigSell':>8}"
    )
    typer.echo(header)
    typer.echo("-" * len(header))
    for bar in bars:
        typer.echo(
            f"{format_epoch_ms(bar.interval_start):<29} "
            f"{bar.open:>10} {bar.high:>10} {bar.low:>10} {bar.close:>10} "
            f"{bar.buy_volume:>8} {bar.big_player_buy_volume:>8} "
            f"{bar.sell_volume:>8} {bar.big_player_sell_volume:>8}"
        )
    typer.echo("")


def print_bubbles(bubbles: Sequence[Bubble]) -> None:
    """Print a table of detected bubbles."""
    if not bubbles:
        typer.echo("No bubbles.")
        return

    header = f"{'Time':<29} {'Price':>10} {'Total Qty':>10} {'Max Qty':>10} {'Impact':>8}"
    typer.echo(header)
    typer.echo("-" * len(header))
    for bubble in bubbles:
        typer.echo(
            f"{format_epoch_ms(bubble.timestamp):<29} "
            f"{bubble.price:>10} {bubble.total_quantity:>10} "
            f"{bubble.max_quantity:>10} {bubble.impact_score:>8.2f}"
        )
    typer.echo("")


def write_bars_csv(bars: Sequence[Bar], output: Path) -> None:
    """Write bars to a CSV file."""
    with output.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(BAR_CSV_COLUMNS)
        for bar in bars:
            writer.writerow(
                (
                    bar.interval_start,
                    format_epoch_ms(bar.interval_start),
                    bar.open,
                    bar.high,
                    bar.low,
                    bar.close,
                    bar.buy_volume,
                    bar.big_player_buy_volume,
                    bar.sell_volume,
                    bar.big_player_sell_volume,
                )
            )


def write_bubbles_csv(bubbles: Sequence[Bubble], output: Path) -> None:
    """Write bubbles to a CSV file."""
    with output.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(BUBBLE_CSV_COLUMNS)
        for bubble in bubbles:
            writer.writerow(
                (
                    bubble.timestamp,
                    format_epoch_ms(bubble.timestamp),
                    bubble.price,
                    bubble.total_quantity,
                    bubble.max_quantity,
                    bubble.impact_score,
                )
            )
