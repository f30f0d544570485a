"""Utility functions for stationconv."""

from stationconv.utils.validation import (
    AlreadyTargetFormat,
    ConversionError,
    FileOpenError,
    MessageTooLong,
    NotASysexFile,
    StrayByte,
    TruncatedMessage,
    UnknownDeviceId,
    UnknownDeviceType,
    UnknownVendorId,
    ValidationError,
    WriteError,
    validate_source_frame,
)

__all__ = [
    "AlreadyTargetFormat",
    "ConversionError",
    "FileOpenError",
    "MessageTooLong",
    "NotASysexFile",
    "StrayByte",
    "TruncatedMessage",
    "UnknownDeviceId",
    "UnknownDeviceType",
    "UnknownVendorId",
    "ValidationError",
    "WriteError",
    "validate_source_frame",
]
