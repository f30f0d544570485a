"""
Convert command - rewrite an A-Station dump so the V-Station can read it.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.hex_view import display_frame_header

console = Console()
err_console = Console(stderr=True)

USAGE = "Usage: a2vstation INPUTFILE(.syx) OUTPUTFILE(.syx)"
SMF_NOTE = "\\[Note] Supported only *.syx files, SMF(*.mid) is not supported."


def print_info(message: str) -> None:
    """Print one diagnostic line on the informational channel."""
    console.print(f"[cyan]\\[INFO][/cyan] {message}", highlight=False)


def convert(
    source: Optional[Path] = typer.Argument(
        None, metavar="INPUTFILE", help="A-Station dump (.syx)", show_default=False
    ),
    output: Optional[Path] = typer.Argument(
        None, metavar="OUTPUTFILE", help="V-Station dump to write (.syx)", show_default=False
    ),
    extra: Optional[List[str]] = typer.Argument(None, hidden=True, show_default=False),
) -> None:
    """
    Convert a Novation A-Station dump into a V-Station readable dump.

    Rewrites the device ID of every SysEx message from A-Station (0x40)
    to K-Station/V-Station (0x41). Program data is left untouched.

    Examples:

        a2vstation astation.syx vstation.syx
    """
    if source is None or output is None or extra:
        err_console.print(USAGE, highlight=False)
        err_console.print(SMF_NOTE, highlight=False)
        raise typer.Exit(1)

    from stationconv.converters.a_to_v_station import AStationToVStationConverter
    from stationconv.utils.validation import (
        ConversionError,
        NotASysexFile,
        ValidationError,
    )

    converter = AStationToVStationConverter(on_info=print_info)

    try:
        result = converter.convert(source, output)
    except ConversionError as e:
        err_console.print(f"[red]\\[ERR] {escape(str(e))}[/red]", highlight=False)
        if isinstance(e, ValidationError) and e.header:
            display_frame_header(
                e.header,
                highlight=e.offset,
                title=f"Message {e.frame_index} at offset {e.stream_offset}",
                console=err_console,
            )
        elif isinstance(e, NotASysexFile):
            err_console.print(SMF_NOTE, highlight=False)
        raise typer.Exit(1)

    if result.frames == 0:
        console.print("[yellow]No SysEx messages found in input[/yellow]")

    console.print(
        f"[green]Converted:[/green] {escape(str(source))} -> {escape(str(output))}",
        highlight=False,
    )
    console.print(
        f"[dim]Output size: {result.bytes_written} bytes ({result.frames} SysEx messages)[/dim]"
    )
