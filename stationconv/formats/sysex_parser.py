"""
Novation A-Station / K-Station / V-Station SysEx frame layout.

Program dump format:
    F0 00 20 29 01 ID xx MT BM xx xx BK PG [program data...] F7

Where:
    - 00 20 29: Novation manufacturer ID
    - 01: Device type
    - ID: 0x40 = A-Station, 0x41 = K-Station / V-Station
    - MT: Message type (0x00 current sound, 0x01 program, 0x02 program pair)
    - BM: Bank select mode (0 = current bank, 1 = bank given in BK)
    - BK: Bank number
    - PG: Program number
    - program data: 128 bytes per program, 256 for a program pair dump
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple, Union

SYSEX_START = 0xF0
SYSEX_END = 0xF7

NOVATION_ID: Tuple[int, int, int] = (0x00, 0x20, 0x29)
DEVICE_TYPE = 0x01
ASTATION_ID = 0x40
KSTATION_ID = 0x41  # Shared by K-Station and V-Station

SIZE_PROGRAM_DATA = 128
OFFSET_PROGRAM = 13

# Largest frame is a program pair dump: header + 2 programs + F7
MAX_FRAME_SIZE = SIZE_PROGRAM_DATA * 2 + OFFSET_PROGRAM + 1


class Offsets:
    """Fixed header offsets, relative to the F0 byte."""

    START = 0
    VENDOR_ID = 1  # 3 bytes
    DEVICE_TYPE = 4
    DEVICE_ID = 5
    MESSAGE_TYPE = 7
    BANK_MODE = 8
    BANK = 11
    PROGRAM = 12
    PROGRAM_DATA = OFFSET_PROGRAM


class MessageType(IntEnum):
    """A-Station dump message types."""

    CURRENT_SOUND = 0x00  # Sent from edit buffer
    PROGRAM = 0x01
    PROGRAM_PAIR = 0x02


class BankMode(IntEnum):
    """Destination bank control for program dumps."""

    CURRENT_BANK = 0
    EXPLICIT_BANK = 1


@dataclass
class SysExFrame:
    """
    View over one complete SysEx frame (F0 ... F7).

    The frame does not own its bytes: the transcoder hands in its reusable
    buffer, so a frame is only valid until the next one is read.

    Attributes:
        data: Frame bytes, including F0 and F7
        index: Zero-based position of the frame in the stream
        stream_offset: Offset of the F0 byte in the stream
    """

    data: Union[bytes, bytearray]
    index: int = 0
    stream_offset: int = 0

    def __len__(self) -> int:
        return len(self.data)

    def byte_at(self, offset: int) -> Optional[int]:
        """
        Return the header byte at offset, or None if the frame is too short.

        The end marker is never returned as a header field.
        """
        if offset < 0 or offset >= len(self.data) - 1:
            return None
        return self.data[offset]

    @property
    def header(self) -> bytes:
        """Copy of the header bytes (everything before the program data, never F7)."""
        end = min(Offsets.PROGRAM_DATA, max(len(self.data) - 1, 0))
        return bytes(self.data[:end])

    @property
    def vendor_id(self) -> Tuple[Optional[int], ...]:
        return tuple(self.byte_at(Offsets.VENDOR_ID + i) for i in range(3))

    @property
    def device_type(self) -> Optional[int]:
        return self.byte_at(Offsets.DEVICE_TYPE)

    @property
    def device_id(self) -> Optional[int]:
        return self.byte_at(Offsets.DEVICE_ID)

    @property
    def message_type(self) -> Optional[MessageType]:
        """Message type, or None for raw patch data dumps."""
        value = self.byte_at(Offsets.MESSAGE_TYPE)
        if value is None:
            return None
        try:
            return MessageType(value)
        except ValueError:
            return None

    @property
    def bank_mode(self) -> Optional[BankMode]:
        value = self.byte_at(Offsets.BANK_MODE)
        if value is None:
            return None
        try:
            return BankMode(value)
        except ValueError:
            return None

    @property
    def bank(self) -> Optional[int]:
        return self.byte_at(Offsets.BANK)

    @property
    def program(self) -> Optional[int]:
        return self.byte_at(Offsets.PROGRAM)

    @property
    def is_astation(self) -> bool:
        return self.device_id == ASTATION_ID

    @property
    def is_kstation(self) -> bool:
        return self.device_id == KSTATION_ID

    def describe(self) -> Optional[str]:
        """
        Human readable description of the dump, or None.

        Program pair dumps always report the bank, even in current bank
        mode. On the A-Station the destination is then the current bank,
        but the V-Station appears to ignore the bank control byte.
        """
        message_type = self.message_type

        if message_type == MessageType.CURRENT_SOUND:
            return "Current sound (edit buffer) dump"

        if message_type is None:
            return None

        mode = self.bank_mode
        program = self.program
        if mode is None or program is None:
            return None

        if message_type == MessageType.PROGRAM:
            if mode == BankMode.CURRENT_BANK:
                return f"Current selected bank, PROGRAM NUMBER={program}"
            if self.bank is None:
                return None
            return f"PROGRAM BANK={self.bank}, PROGRAM NUMBER={program}"

        # Program pair
        if self.bank is None:
            return None
        return f"PROGRAM BANK={self.bank}, PROGRAM NUMBER={program} and {program + 1}"
