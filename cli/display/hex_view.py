"""
Hex dump display utilities.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from stationconv.formats.sysex_parser import Offsets

err_console = Console(stderr=True)

# Header field names by offset, for the legend line
FIELD_NAMES = {
    Offsets.START: "SOX",
    Offsets.VENDOR_ID: "ID1",
    Offsets.VENDOR_ID + 1: "ID2",
    Offsets.VENDOR_ID + 2: "ID3",
    Offsets.DEVICE_TYPE: "TYP",
    Offsets.DEVICE_ID: "DEV",
    Offsets.MESSAGE_TYPE: "MSG",
    Offsets.BANK_MODE: "BSM",
    Offsets.BANK: "BNK",
    Offsets.PROGRAM: "PRG",
}


def display_frame_header(
    header: bytes,
    highlight: Optional[int] = None,
    title: str = "SysEx Header",
    console: Optional[Console] = None,
) -> None:
    """Display a frame header as hex, with the byte at highlight in red."""
    console = console or err_console

    hex_parts = []
    name_parts = []
    for offset, b in enumerate(header):
        name = FIELD_NAMES.get(offset, "")
        if offset == highlight:
            hex_parts.append(f"[bold red]{b:02X}[/bold red]")
            name_parts.append(f"[bold red]{name:^3}[/bold red]")
        else:
            hex_parts.append(f"{b:02X}")
            name_parts.append(f"[dim]{name:^3}[/dim]")

    if highlight is not None and highlight >= len(header):
        hex_parts.append("[bold red]--[/bold red]")
        name_parts.append("[bold red] ^ [/bold red]")

    lines = [
        "[dim]offset[/dim]  " + " ".join(f"{i:>3}" for i in range(len(hex_parts))),
        "[dim]bytes [/dim]  " + " ".join(f" {part}" for part in hex_parts),
        "[dim]field [/dim]  " + " ".join(name_parts),
    ]

    console.print(Panel("\n".join(lines), title=title, border_style="red", expand=False))
