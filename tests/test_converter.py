"""Tests for the A-Station to V-Station converter."""

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from stationconv.converters import a_to_v_station
from stationconv.converters.a_to_v_station import (
    AStationToVStationConverter,
    convert_a_to_v_station,
    transcode,
)
from stationconv.utils.validation import (
    AlreadyTargetFormat,
    FileOpenError,
    MessageTooLong,
    NotASysexFile,
    StrayByte,
    TruncatedMessage,
    UnknownDeviceId,
    UnknownDeviceType,
    UnknownVendorId,
    WriteError,
)


def run(data):
    """Transcode data and return (result, output bytes)."""
    out = io.BytesIO()
    result = transcode(io.BytesIO(data), out)
    return result, out.getvalue()


class ShortWriter:
    """Output stream that always writes one byte less than asked."""

    def write(self, data):
        return len(data) - 1

    def flush(self):
        pass


class FailingWriter:
    """Output stream whose write fails like a full disk."""

    def write(self, data):
        raise OSError(28, "No space left on device")

    def flush(self):
        pass


class FailingFlushWriter:
    """Output stream that accepts writes but cannot flush."""

    def __init__(self):
        self.data = bytearray()

    def write(self, data):
        self.data.extend(data)
        return len(data)

    def flush(self):
        raise OSError(28, "No space left on device")


class FailingCloseFile(io.FileIO):
    """Output file whose first close reports an error."""

    def close(self):
        was_closed = self.closed
        super().close()
        if not was_closed:
            raise OSError(5, "Input/output error")


class TestTranscode:
    """Test cases for stream conversion."""

    def test_only_device_id_changes(self, program_frame):
        """Test that offset 5 is rewritten and nothing else."""
        result, output = run(program_frame)

        assert len(output) == len(program_frame)
        assert output[5] == 0x41
        assert output[:5] == program_frame[:5]
        assert output[6:] == program_frame[6:]
        assert result.frames == 1
        assert result.bytes_written == len(program_frame)
        assert result.bytes_read == len(program_frame)

    def test_program_data_untouched(self, make_frame):
        """Test that payload bytes pass through, including byte 126."""
        frame = make_frame(fill=0x55, programs=2, message_type=0x02)
        _, output = run(frame)

        assert output[13:-1] == frame[13:-1]

    def test_output_cannot_be_converted_again(self, program_frame):
        """Test that converted output is rejected as already converted."""
        _, output = run(program_frame)

        with pytest.raises(AlreadyTargetFormat) as exc_info:
            run(output)

        assert "No conversion required" in str(exc_info.value)

    @pytest.mark.parametrize("position", [0, 1, 2])
    def test_unknown_vendor_id(self, make_frame, position):
        """Test that any wrong vendor byte is reported and nothing is written."""
        vendor = [0x00, 0x20, 0x29]
        vendor[position] = 0x43
        out = io.BytesIO()

        with pytest.raises(UnknownVendorId) as exc_info:
            transcode(io.BytesIO(make_frame(vendor=tuple(vendor))), out)

        error = exc_info.value
        assert error.offset == 1 + position
        assert error.actual == 0x43
        assert out.getvalue() == b""

    def test_vendor_error_message(self, make_frame):
        with pytest.raises(UnknownVendorId) as exc_info:
            run(make_frame(vendor=(0x00, 0x21, 0x29)))

        assert str(exc_info.value) == "Unknown data (0x21) at offset 2, it should be 0x20"

    def test_unknown_device_type(self, make_frame):
        with pytest.raises(UnknownDeviceType) as exc_info:
            run(make_frame(device_type=0x02))

        assert exc_info.value.offset == 4
        assert exc_info.value.expected == 0x01

    def test_unknown_device_id(self, make_frame):
        with pytest.raises(UnknownDeviceId) as exc_info:
            run(make_frame(device_id=0x42))

        assert exc_info.value.offset == 5
        assert exc_info.value.actual == 0x42
        assert exc_info.value.expected == 0x40

    def test_vendor_checked_before_device_id(self, make_frame):
        """Test validation order: vendor ID first."""
        with pytest.raises(UnknownVendorId):
            run(make_frame(vendor=(0x7E, 0x20, 0x29), device_type=0x09, device_id=0x41))

    def test_error_keeps_header(self, make_frame):
        """Test that header errors carry the unmodified header bytes."""
        frame = make_frame(device_id=0x41)

        with pytest.raises(AlreadyTargetFormat) as exc_info:
            run(frame)

        assert exc_info.value.header == frame[:13]

    def test_multiple_frames_in_order(self, make_frame):
        """Test that N frames produce N patched frames in the same order."""
        frames = [make_frame(program=n, fill=n) for n in range(4)]
        result, output = run(b"".join(frames))

        expected = b"".join(f[:5] + b"\x41" + f[6:] for f in frames)
        assert output == expected
        assert result.frames == 4

    def test_earlier_frames_written_before_error(self, program_frame, make_frame):
        """Test that frames are written one at a time."""
        out = io.BytesIO()
        data = program_frame + make_frame(device_id=0x41)

        with pytest.raises(AlreadyTargetFormat) as exc_info:
            transcode(io.BytesIO(data), out)

        assert len(out.getvalue()) == len(program_frame)
        assert exc_info.value.frame_index == 1
        assert exc_info.value.stream_offset == len(program_frame)

    def test_diagnostics(self, program_frame, pair_frame, make_frame):
        """Test diagnostics for each frame in emission order."""
        raw = make_frame(message_type=0x7F)
        result, _ = run(program_frame + raw + pair_frame)

        assert result.diagnostics == [
            "PROGRAM BANK=3, PROGRAM NUMBER=7",
            "PROGRAM BANK=2, PROGRAM NUMBER=10 and 11",
        ]

    def test_info_callback(self, pair_frame):
        """Test that diagnostics are passed to the callback."""
        lines = []
        transcode(io.BytesIO(pair_frame), io.BytesIO(), on_info=lines.append)

        assert lines == ["PROGRAM BANK=2, PROGRAM NUMBER=10 and 11"]

    def test_empty_input(self):
        """Test that an empty stream converts to an empty stream."""
        result, output = run(b"")

        assert output == b""
        assert result.frames == 0
        assert result.bytes_read == 0

    def test_not_a_sysex_file(self):
        """Test that a Standard MIDI File is rejected at the first byte."""
        with pytest.raises(NotASysexFile) as exc_info:
            run(b"MThd\x00\x00\x00\x06")

        assert exc_info.value.offset == 0
        assert exc_info.value.actual == ord("M")

    def test_stray_byte_between_frames(self, program_frame):
        """Test that bytes outside frames are rejected."""
        with pytest.raises(StrayByte) as exc_info:
            run(program_frame + b"\n" + program_frame)

        assert exc_info.value.offset == len(program_frame)
        assert isinstance(exc_info.value, NotASysexFile)

    def test_truncated_at_end_of_input(self, program_frame):
        """Test that a frame without end marker is an error, not dropped."""
        out = io.BytesIO()

        with pytest.raises(TruncatedMessage):
            transcode(io.BytesIO(program_frame[:-1]), out)

        assert out.getvalue() == b""

    def test_truncated_by_next_start_marker(self, program_frame):
        with pytest.raises(TruncatedMessage) as exc_info:
            run(program_frame[:50] + program_frame)

        assert exc_info.value.stream_offset == 0
        assert exc_info.value.offset == 50

    def test_message_too_long(self):
        data = b"\xf0" + b"\x00" * 300 + b"\xf7"

        with pytest.raises(MessageTooLong):
            run(data)

    def test_short_write(self, program_frame):
        with pytest.raises(WriteError):
            transcode(io.BytesIO(program_frame), ShortWriter())

    def test_write_os_error(self, program_frame, pair_frame):
        """Test that an OSError from write is reported as WriteError."""
        with pytest.raises(WriteError) as exc_info:
            transcode(io.BytesIO(program_frame + pair_frame), FailingWriter())

        assert exc_info.value.frame_index == 0
        assert exc_info.value.stream_offset == 0
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_flush_os_error(self, program_frame):
        """Test that a failed final flush is reported as WriteError."""
        out = FailingFlushWriter()

        with pytest.raises(WriteError) as exc_info:
            transcode(io.BytesIO(program_frame), out)

        assert "No space left on device" in str(exc_info.value)
        assert len(out.data) == len(program_frame)

    def test_buffer_reused_between_runs(self, program_frame):
        """Test that one converter can process several streams."""
        converter = AStationToVStationConverter()

        for _ in range(2):
            out = io.BytesIO()
            result = converter.transcode(io.BytesIO(program_frame), out)
            assert result.frames == 1
            assert out.getvalue()[5] == 0x41


class TestFileConversion:
    """Test cases for converting files on disk."""

    def test_convert_file(self, astation_file, tmp_path):
        output = tmp_path / "vstation.syx"
        result = convert_a_to_v_station(astation_file, output)

        source = astation_file.read_bytes()
        converted = output.read_bytes()
        assert result.frames == 2
        assert len(converted) == len(source)
        assert converted[5] == 0x41
        assert converted[142 + 5] == 0x41

    def test_missing_input(self, tmp_path):
        with pytest.raises(FileOpenError) as exc_info:
            convert_a_to_v_station(tmp_path / "missing.syx", tmp_path / "out.syx")

        assert "missing.syx" in str(exc_info.value)
        assert not (tmp_path / "out.syx").exists()

    def test_unwritable_output(self, astation_file, tmp_path):
        output = tmp_path / "no_such_dir" / "out.syx"

        with pytest.raises(FileOpenError):
            convert_a_to_v_station(astation_file, output)

    def test_same_input_and_output(self, astation_file):
        original = astation_file.read_bytes()

        with pytest.raises(FileOpenError):
            convert_a_to_v_station(astation_file, astation_file)

        assert astation_file.read_bytes() == original

    def test_failed_conversion_removes_output(self, tmp_path, program_frame, make_frame):
        source = tmp_path / "mixed.syx"
        source.write_bytes(program_frame + make_frame(device_id=0x41))
        output = tmp_path / "out.syx"

        with pytest.raises(AlreadyTargetFormat):
            convert_a_to_v_station(source, output)

        assert not output.exists()

    def test_close_error_removes_output(self, astation_file, tmp_path, monkeypatch):
        """Test that a failed close of the output is a WriteError."""
        real_open = open

        def open_with_failing_close(path, mode="r", *args, **kwargs):
            if "w" in mode:
                return FailingCloseFile(path, "w")
            return real_open(path, mode, *args, **kwargs)

        monkeypatch.setattr(a_to_v_station, "open", open_with_failing_close, raising=False)
        output = tmp_path / "out.syx"

        with pytest.raises(WriteError) as exc_info:
            convert_a_to_v_station(astation_file, output)

        assert "out.syx" in str(exc_info.value)
        assert not output.exists()
