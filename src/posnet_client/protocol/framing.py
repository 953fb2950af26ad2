"""Posnet frame builder and frame locator.

Frame layout::

    +------+-------------------+------+-----------------------+
    | STX  |      Payload      | ETX  |          CRC          |
    | 0x02 | cp1250, variable  | 0x03 | 4 ASCII hex, upper    |
    +------+-------------------+------+-----------------------+

- Payload: command or reply text encoded with codepage 1250, unescaped
- CRC: CRC-16/CCITT over (payload + ETX), rendered as 4 uppercase hex digits

The same layout is used in both directions. A device may instead answer
with a single ACK (0x06) or NAK (0x15) byte.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import ParameterError
from ..models.result import ResultCode
from ..utils.crc import crc16_hex

STX = 0x02
ETX = 0x03
ACK = 0x06
NAK = 0x15

ENCODING = "cp1250"
CRC_FIELD_SIZE = 4


@dataclass
class Frame:
    """A complete framed reply located in a receive buffer."""

    payload: bytes
    crc_field: bytes

    @property
    def checked_bytes(self) -> bytes:
        """The bytes covered by the CRC (payload + ETX)."""
        return self.payload + bytes([ETX])

    def __repr__(self) -> str:
        return (
            f"Frame(payload={self.payload!r}, "
            f"crc={self.crc_field.decode('ascii', errors='replace')})"
        )


def encode_text(text: str) -> bytes:
    """Encode ``text`` with codepage 1250.

    Raises:
        ParameterError: If ``text`` holds a character the codepage lacks.
    """
    try:
        return text.encode(ENCODING)
    except UnicodeEncodeError as e:
        raise ParameterError(
            ResultCode.ERR_PARAM_COMMAND,
            f"Command is not encodable as {ENCODING}: {e.reason}",
        ) from e


def decode_text(data: bytes) -> str:
    """Decode reply bytes with codepage 1250 and strip surrounding whitespace."""
    return data.decode(ENCODING, errors="replace").strip()


def build_frame(command: str) -> bytes:
    """Build the outbound frame for ``command``.

    Args:
        command: Command text; control characters are passed through as-is.

    Returns:
        ``STX + payload + ETX + CRC`` ready to write to the socket.
    """
    body = encode_text(command) + bytes([ETX])
    return bytes([STX]) + body + crc16_hex(body).encode("ascii")


def find_frame(buffer: bytes) -> Frame | None:
    """Locate a complete STX-led frame at the start of ``buffer``.

    Returns:
        The located ``Frame``, or ``None`` if ``buffer`` does not start with
        STX or the ETX and all 4 CRC bytes have not arrived yet.
    """
    if not buffer or buffer[0] != STX:
        return None

    etx_index = buffer.find(bytes([ETX]), 1)
    if etx_index < 0:
        return None

    end = etx_index + 1 + CRC_FIELD_SIZE
    if len(buffer) < end:
        return None

    return Frame(
        payload=bytes(buffer[1:etx_index]),
        crc_field=bytes(buffer[etx_index + 1 : end]),
    )
