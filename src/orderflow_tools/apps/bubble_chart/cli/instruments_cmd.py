"""CLI command for listing the instruments present in a recorded feed."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from orderflow_tools.apps.bubble_chart.cli._helpers import build_feed_source, load_feed
from orderflow_tools.data.providers.feed_file import list_instruments


def instruments(
    feed: Annotated[
        Path,
        typer.Option(exists=True, dir_okay=False, help="Recorded feed file (.txt or .gz)"),
    ],
) -> None:
    """List every instrument id that appears in the feed."""
    lines = asyncio.run(load_feed(build_feed_source(feed)))
    found = list_instruments(lines)
    if not found:
        typer.echo("No instruments found.")
        raise typer.Exit(code=1)
    for instrument_id in found:
        typer.echo(instrument_id)
