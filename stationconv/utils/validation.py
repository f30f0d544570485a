"""
Error types and header validation for A-Station SysEx frames.

Validation order for a complete frame:
    1. Vendor ID (offsets 1-3)  -> UnknownVendorId
    2. Device type (offset 4)   -> UnknownDeviceType
    3. Device ID (offset 5)     -> AlreadyTargetFormat / UnknownDeviceId
"""

from typing import TYPE_CHECKING, Optional

from stationconv.formats.sysex_parser import (
    ASTATION_ID,
    DEVICE_TYPE,
    KSTATION_ID,
    NOVATION_ID,
    Offsets,
)

if TYPE_CHECKING:
    from stationconv.formats.sysex_parser import SysExFrame


def format_byte(value: Optional[int]) -> str:
    """Format a byte value for error messages ("0x29", or "missing")."""
    if value is None:
        return "missing"
    return f"0x{value:02X}"


class ConversionError(Exception):
    """
    Base class for every error raised while converting a dump.

    Attributes:
        offset: Byte offset inside the frame (or stream, for framing errors)
        actual: Byte found at that offset (None if absent)
        expected: Byte that was expected there
        frame_index: Zero-based index of the frame being processed
        stream_offset: Offset of the frame's start marker in the input
    """

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        actual: Optional[int] = None,
        expected: Optional[int] = None,
        frame_index: Optional[int] = None,
        stream_offset: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.actual = actual
        self.expected = expected
        self.frame_index = frame_index
        self.stream_offset = stream_offset


class FileOpenError(ConversionError):
    """Raised when the input or output file cannot be opened."""

    def __init__(self, path: str, reason: str = ""):
        message = f"File open error ({path})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class NotASysexFile(ConversionError):
    """Raised when the input is not a sequence of SysEx frames."""

    pass


class StrayByte(NotASysexFile):
    """Raised for a byte that sits outside any SysEx frame."""

    pass


class TruncatedMessage(NotASysexFile):
    """Raised when a frame ends (or is interrupted) before its end marker."""

    pass


class MessageTooLong(NotASysexFile):
    """Raised when a frame exceeds the program pair dump size."""

    pass


class ValidationError(ConversionError):
    """Raised when a frame header does not match the A-Station layout."""

    def __init__(
        self,
        offset: int,
        actual: Optional[int],
        expected: int,
        frame_index: Optional[int] = None,
        stream_offset: Optional[int] = None,
        message: Optional[str] = None,
        header: bytes = b"",
    ):
        if message is None:
            message = (
                f"Unknown data ({format_byte(actual)}) at offset {offset}, "
                f"it should be {format_byte(expected)}"
            )
        super().__init__(message, offset, actual, expected, frame_index, stream_offset)
        self.header = header


class UnknownVendorId(ValidationError):
    """Vendor ID bytes are not Novation's (00 20 29)."""

    pass


class UnknownDeviceType(ValidationError):
    """Device type byte is not the A/K/V-Station device type."""

    pass


class UnknownDeviceId(ValidationError):
    """Device ID is neither A-Station nor K/V-Station."""

    pass


class AlreadyTargetFormat(ValidationError):
    """The frame already carries the K/V-Station device ID."""

    def __init__(
        self,
        frame_index: Optional[int] = None,
        stream_offset: Optional[int] = None,
        header: bytes = b"",
    ):
        super().__init__(
            Offsets.DEVICE_ID,
            KSTATION_ID,
            ASTATION_ID,
            frame_index,
            stream_offset,
            message="The input data is V-Station/K-Station dump. No conversion required.",
            header=header,
        )


class WriteError(ConversionError):
    """Raised when a frame cannot be written completely."""

    pass


def validate_vendor_id(frame: "SysExFrame") -> None:
    """
    Check the three Novation manufacturer ID bytes, one at a time.

    Raises:
        UnknownVendorId: On the first mismatching byte
    """
    for i, expected in enumerate(NOVATION_ID):
        offset = Offsets.VENDOR_ID + i
        actual = frame.byte_at(offset)
        if actual != expected:
            raise UnknownVendorId(
                offset,
                actual,
                expected,
                frame.index,
                frame.stream_offset,
                header=frame.header,
            )


def validate_device_type(frame: "SysExFrame") -> None:
    """
    Check the device type byte.

    Raises:
        UnknownDeviceType: If it is not 0x01
    """
    actual = frame.device_type
    if actual != DEVICE_TYPE:
        raise UnknownDeviceType(
            Offsets.DEVICE_TYPE,
            actual,
            DEVICE_TYPE,
            frame.index,
            frame.stream_offset,
            header=frame.header,
        )


def validate_device_id(frame: "SysExFrame") -> None:
    """
    Check that the frame comes from an A-Station.

    Raises:
        AlreadyTargetFormat: If the frame is already a K/V-Station dump
        UnknownDeviceId: For any other device ID
    """
    if frame.is_kstation:
        raise AlreadyTargetFormat(frame.index, frame.stream_offset, header=frame.header)
    if not frame.is_astation:
        raise UnknownDeviceId(
            Offsets.DEVICE_ID,
            frame.device_id,
            ASTATION_ID,
            frame.index,
            frame.stream_offset,
            header=frame.header,
        )


def validate_source_frame(frame: "SysExFrame") -> None:
    """Run all header checks in order. Raises on the first failure."""
    validate_vendor_id(frame)
    validate_device_type(frame)
    validate_device_id(frame)
