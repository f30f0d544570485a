"""
a2vstation - Novation A-Station to V-Station patch converter.

The K-Station can read A-Station dumps and the V-Station can read K-Station
dumps, but the V-Station cannot read A-Station dumps. This tool rewrites the
device ID so the V-Station accepts them.
"""

import typer

from cli.commands.convert import convert

# Main app
app = typer.Typer(
    name="a2vstation",
    help="Convert Novation A-Station SysEx dumps for the V-Station.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Single command: the app runs it directly
app.command(name="convert")(convert)


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
