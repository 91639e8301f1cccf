"""CLI entry point for the bubble chart app.

All command logic lives in the cli subpackage.
"""

from orderflow_tools.apps.bubble_chart.cli import app

__all__ = ["app", "main"]


def main() -> None:
    """Run the bubble chart CLI application."""
    app()


if __name__ == "__main__":
    main()
