"""
stationconv - Novation A-Station to V-Station patch converter.

The K-Station can read A-Station dumps and the V-Station can read K-Station
dumps, but the V-Station cannot read A-Station dumps. This library rewrites
the device ID of every SysEx frame in an A-Station dump so the V-Station
accepts it.

Example usage:
    from stationconv import convert_a_to_v_station

    result = convert_a_to_v_station("astation.syx", "vstation.syx", on_info=print)
    print(f"{result.frames} messages converted")
"""

__version__ = "0.1.0"
__author__ = "stationconv Contributors"

from stationconv.converters.a_to_v_station import (
    AStationToVStationConverter,
    TranscodeResult,
    convert_a_to_v_station,
    transcode,
)
from stationconv.formats.sysex_parser import BankMode, MessageType, SysExFrame
from stationconv.utils.validation import ConversionError

__all__ = [
    "AStationToVStationConverter",
    "TranscodeResult",
    "convert_a_to_v_station",
    "transcode",
    "BankMode",
    "MessageType",
    "SysExFrame",
    "ConversionError",
]
