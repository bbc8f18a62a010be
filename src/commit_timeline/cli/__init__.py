"""CLI entry point."""

import typer

app = typer.Typer(
    name="commit-timeline",
    help="commit-timeline - plot how commits are distributed over time",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command to register it
from .plot import plot as _plot  # noqa: F401, E402


def main() -> None:
    app()
