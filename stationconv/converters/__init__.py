"""
Dump converters.

Example:
    from stationconv.converters import convert_a_to_v_station

    convert_a_to_v_station("astation.syx", "vstation.syx")
"""

from stationconv.converters.a_to_v_station import (
    AStationToVStationConverter,
    TranscodeResult,
    convert_a_to_v_station,
    transcode,
)

__all__ = [
    "AStationToVStationConverter",
    "TranscodeResult",
    "convert_a_to_v_station",
    "transcode",
]
