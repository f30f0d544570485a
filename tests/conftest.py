"""Test configuration and fixtures."""

import pytest


def build_frame(
    device_id=0x40,
    message_type=0x01,
    bank_mode=0x00,
    bank=0x00,
    program=0x00,
    programs=1,
    vendor=(0x00, 0x20, 0x29),
    device_type=0x01,
    fill=0x00,
):
    """Build an A-Station style SysEx frame with programs * 128 data bytes."""
    header = [0xF0, *vendor, device_type, device_id, 0x00, message_type, bank_mode, 0x00, 0x00]
    header += [bank, program]
    data = bytes([fill]) * (128 * programs)
    return bytes(header) + data + bytes([0xF7])


@pytest.fixture
def make_frame():
    """Return the frame builder."""
    return build_frame


@pytest.fixture
def program_frame():
    """Single program dump, explicit bank 3, program 7."""
    return build_frame(message_type=0x01, bank_mode=0x01, bank=3, program=7)


@pytest.fixture
def pair_frame():
    """Program pair dump, bank 2, programs 10 and 11."""
    return build_frame(message_type=0x02, bank_mode=0x01, bank=2, program=10, programs=2)


@pytest.fixture
def astation_file(tmp_path, program_frame, pair_frame):
    """Write a two-message A-Station dump to disk and return its path."""
    path = tmp_path / "astation.syx"
    path.write_bytes(program_frame + pair_frame)
    return path
