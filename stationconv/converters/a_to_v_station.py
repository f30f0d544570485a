"""
A-Station to V-Station dump converter.

The K-Station reads A-Station dumps and the V-Station reads K-Station dumps,
but the V-Station refuses A-Station dumps. The formats differ only in the
device ID byte (offset 5), so conversion rewrites that byte and passes every
other byte through untouched.

Program data byte 126 (EFFECTS SELECT / KEYBOARD OCTAVE) is unused on the
A-Station and left as 0x00. On the V-Station 0x00 selects the Delay effect
on the panel, which makes no audible difference, so it is not modified.

The conversion process:
1. Read the input one byte at a time into a reusable frame buffer
2. On F7, validate the frame header
3. Replace the A-Station ID with the K/V-Station ID
4. Report what kind of dump the frame holds
5. Write the frame, then start over with the next one
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, List, Optional, Union

from stationconv.formats.sysex_parser import (
    KSTATION_ID,
    MAX_FRAME_SIZE,
    SYSEX_END,
    SYSEX_START,
    Offsets,
    SysExFrame,
)
from stationconv.utils.validation import (
    ConversionError,
    FileOpenError,
    MessageTooLong,
    NotASysexFile,
    StrayByte,
    TruncatedMessage,
    WriteError,
    format_byte,
    validate_source_frame,
)

InfoCallback = Callable[[str], None]


@dataclass
class TranscodeResult:
    """Summary of a finished conversion."""

    frames: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    diagnostics: List[str] = field(default_factory=list)


class AStationToVStationConverter:
    """
    Streaming converter from A-Station SysEx dumps to V-Station dumps.

    Any error aborts the whole conversion. Frames already written stay in
    the output stream, so a failed run's output must not be used.

    Example:
        converter = AStationToVStationConverter(on_info=print)
        with open("in.syx", "rb") as src, open("out.syx", "wb") as dst:
            result = converter.transcode(src, dst)
    """

    TARGET_ID = KSTATION_ID
    MAX_FRAME_SIZE = MAX_FRAME_SIZE

    def __init__(self, on_info: Optional[InfoCallback] = None):
        """
        Initialize converter.

        Args:
            on_info: Called with each diagnostic line as frames are converted
        """
        self.on_info = on_info
        self._buffer: bytearray = bytearray()

    def transcode(self, input_stream: BinaryIO, output_stream: BinaryIO) -> TranscodeResult:
        """
        Convert every frame of input_stream and write it to output_stream.

        Args:
            input_stream: Binary stream positioned at the first F0
            output_stream: Binary stream receiving the patched frames

        Returns:
            TranscodeResult with frame and byte counts

        Raises:
            ConversionError: On the first invalid frame or failed write
        """
        result = TranscodeResult()
        buffer = self._buffer
        buffer.clear()
        in_frame = False
        frame_start = 0
        position = 0

        for chunk in iter(lambda: input_stream.read(1), b""):
            byte = chunk[0]

            if position == 0 and byte != SYSEX_START:
                raise NotASysexFile(
                    f"Input is not a SysEx file (first byte {format_byte(byte)}, "
                    f"it should be {format_byte(SYSEX_START)})",
                    offset=0,
                    actual=byte,
                    expected=SYSEX_START,
                )

            if byte == SYSEX_START:
                if in_frame:
                    raise TruncatedMessage(
                        f"SysEx message at offset {frame_start} has no end marker "
                        f"(next message starts at offset {position})",
                        offset=position,
                        actual=byte,
                        expected=SYSEX_END,
                        frame_index=result.frames,
                        stream_offset=frame_start,
                    )
                buffer.clear()
                buffer.append(byte)
                in_frame = True
                frame_start = position
            elif in_frame:
                buffer.append(byte)
                if len(buffer) > self.MAX_FRAME_SIZE:
                    raise MessageTooLong(
                        f"SysEx message at offset {frame_start} exceeds "
                        f"{self.MAX_FRAME_SIZE} bytes",
                        offset=position,
                        actual=byte,
                        frame_index=result.frames,
                        stream_offset=frame_start,
                    )
            else:
                raise StrayByte(
                    f"Unexpected byte ({format_byte(byte)}) outside a SysEx message "
                    f"at offset {position}",
                    offset=position,
                    actual=byte,
                    expected=SYSEX_START,
                )

            position += 1

            if byte == SYSEX_END:
                frame = SysExFrame(buffer, index=result.frames, stream_offset=frame_start)
                self._process_frame(frame, output_stream, result)
                buffer.clear()
                in_frame = False

        result.bytes_read = position

        if in_frame:
            raise TruncatedMessage(
                f"SysEx message at offset {frame_start} has no end marker "
                f"(input ends at offset {position})",
                offset=position,
                expected=SYSEX_END,
                frame_index=result.frames,
                stream_offset=frame_start,
            )

        try:
            output_stream.flush()
        except OSError as e:
            raise WriteError(f"File write error: {e}") from e

        return result

    def _process_frame(
        self, frame: SysExFrame, output_stream: BinaryIO, result: TranscodeResult
    ) -> None:
        """Validate, patch, describe and write one complete frame."""
        validate_source_frame(frame)

        # Replace A-Station ID with V-Station ID
        frame.data[Offsets.DEVICE_ID] = self.TARGET_ID

        description = frame.describe()
        if description is not None:
            result.diagnostics.append(description)
            if self.on_info is not None:
                self.on_info(description)

        self._write_frame(frame, output_stream)
        result.frames += 1
        result.bytes_written += len(frame)

    def _write_frame(self, frame: SysExFrame, output_stream: BinaryIO) -> None:
        """Write the frame in a single call."""
        data = bytes(frame.data)
        try:
            written = output_stream.write(data)
        except OSError as e:
            raise WriteError(
                f"File write error: {e}",
                frame_index=frame.index,
                stream_offset=frame.stream_offset,
            ) from e

        if written is not None and written != len(data):
            raise WriteError(
                f"File write error (wrote {written} of {len(data)} bytes)",
                frame_index=frame.index,
                stream_offset=frame.stream_offset,
            )

    def convert(
        self, source_path: Union[str, Path], output_path: Union[str, Path]
    ) -> TranscodeResult:
        """
        Convert an A-Station .syx file into a V-Station .syx file.

        The output file is removed again if the conversion fails.

        Args:
            source_path: Path to A-Station .syx file
            output_path: Path of the V-Station .syx file to create

        Returns:
            TranscodeResult with frame and byte counts
        """
        source_path = Path(source_path)
        output_path = Path(output_path)

        if source_path.resolve() == output_path.resolve():
            raise FileOpenError(str(output_path), "output would overwrite the input file")

        try:
            src = open(source_path, "rb")
        except OSError as e:
            raise FileOpenError(str(source_path), e.strerror or str(e)) from e

        with src:
            try:
                dst = open(output_path, "wb")
            except OSError as e:
                raise FileOpenError(str(output_path), e.strerror or str(e)) from e

            try:
                try:
                    result = self.transcode(src, dst)
                finally:
                    _close_output(dst, output_path)
            except ConversionError:
                _remove_partial(output_path)
                raise

        return result


def _close_output(dst: BinaryIO, path: Path) -> None:
    """Close the output file, reporting failures as WriteError."""
    try:
        dst.close()
    except OSError as e:
        raise WriteError(f"File write error ({path}): {e}") from e


def _remove_partial(path: Path) -> None:
    """Delete a half-written output file."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def transcode(
    input_stream: BinaryIO,
    output_stream: BinaryIO,
    on_info: Optional[InfoCallback] = None,
) -> TranscodeResult:
    """
    Convenience function to convert an A-Station SysEx stream.

    Args:
        input_stream: Binary stream with A-Station frames
        output_stream: Binary stream receiving V-Station frames
        on_info: Optional callback for diagnostic lines

    Returns:
        TranscodeResult
    """
    converter = AStationToVStationConverter(on_info)
    return converter.transcode(input_stream, output_stream)


def convert_a_to_v_station(
    source_path: Union[str, Path],
    output_path: Union[str, Path],
    on_info: Optional[InfoCallback] = None,
) -> TranscodeResult:
    """
    Convenience function to convert an A-Station .syx file.

    Args:
        source_path: Path to A-Station .syx file
        output_path: Output path for the V-Station .syx file
        on_info: Optional callback for diagnostic lines

    Returns:
        TranscodeResult
    """
    converter = AStationToVStationConverter(on_info)
    return converter.convert(source_path, output_path)
