"""Tests for frame building and locating."""

import pytest

from posnet_client.exceptions import ParameterError
from posnet_client.models.result import ResultCode
from posnet_client.protocol.framing import (
    ETX,
    STX,
    Frame,
    build_frame,
    decode_text,
    encode_text,
    find_frame,
)
from posnet_client.utils.crc import crc16_hex


def test_build_frame_layout():
    """STX, payload, ETX, then the CRC of payload + ETX."""
    frame = build_frame("ST")
    assert frame[0] == STX
    assert frame[1:3] == b"ST"
    assert frame[3] == ETX
    assert frame[4:] == crc16_hex(b"ST\x03").encode("ascii")
    assert len(frame) == 8


def test_build_frame_empty_command():
    frame = build_frame("")
    assert frame == b"\x02\x03" + crc16_hex(b"\x03").encode("ascii")


def test_build_frame_crc_is_uppercase_hex():
    crc = build_frame("trline\tna").decode("ascii")[-4:]
    assert crc == crc.upper()
    int(crc, 16)


def test_build_frame_polish_characters():
    """Central European letters are encoded as single cp1250 bytes."""
    frame = build_frame("Zażółć")
    assert frame[1:-5] == "Zażółć".encode("cp1250")
    assert len(frame) == 1 + 6 + 1 + 4


def test_build_frame_passes_control_bytes_through():
    frame = build_frame("a\x00b\x1bc")
    assert frame[1:6] == b"a\x00b\x1bc"


def test_build_frame_rejects_unencodable_command():
    with pytest.raises(ParameterError) as excinfo:
        build_frame("漢字")
    assert excinfo.value.code is ResultCode.ERR_PARAM_COMMAND


def test_encode_text_rejects_unencodable():
    with pytest.raises(ParameterError):
        encode_text("€ ok, ☃ not")


def test_decode_text_strips_whitespace():
    assert decode_text(b"  READY\r\n") == "READY"


def test_decode_text_undefined_byte_is_replaced():
    """0x81 has no cp1250 mapping; decoding must not fail."""
    assert decode_text(b"A\x81B") == "A\ufffdB"


def test_find_frame_complete():
    data = build_frame("READY")
    frame = find_frame(data)
    assert frame is not None
    assert frame.payload == b"READY"
    assert frame.crc_field == data[-4:]
    assert frame.checked_bytes == b"READY\x03"


def test_find_frame_ignores_trailing_bytes():
    data = build_frame("READY")
    frame = find_frame(data + b"\x06junk")
    assert frame is not None
    assert frame.payload == b"READY"
    assert frame.crc_field == data[-4:]


def test_find_frame_partial():
    """No ETX yet, or fewer than 4 CRC bytes, means the frame is incomplete."""
    data = build_frame("READY")
    for cut in range(1, len(data)):
        assert find_frame(data[:cut]) is None


def test_find_frame_requires_stx():
    assert find_frame(b"") is None
    assert find_frame(b"READY\x031234") is None


def test_frame_repr():
    r = repr(Frame(payload=b"OK", crc_field=b"ABCD"))
    assert "ABCD" in r
