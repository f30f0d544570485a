"""SysEx frame layout for Novation A/K/V-Station dumps."""

from stationconv.formats.sysex_parser import BankMode, MessageType, Offsets, SysExFrame

__all__ = ["BankMode", "MessageType", "Offsets", "SysExFrame"]
