"""CLI subpackage for the bubble chart app.

Create the Typer application and register all command modules.
"""

import typer

from orderflow_tools.apps.bubble_chart.cli.instruments_cmd import instruments
from orderflow_tools.apps.bubble_chart.cli.run_cmd import run

app = typer.Typer(help="Candlestick bars and high-impact trade bubbles from recorded feeds")

app.command()(run)
app.command()(instruments)

__all__ = ["app"]
