"""Reply classification for bytes received from the printer.

TCP may deliver a reply in several pieces, so the reader keeps appending
reads to one buffer and re-classifies the whole buffer after each read.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Callable, Union

from ..exceptions import ReceiveTimeoutError
from ..utils.crc import crc16_ccitt
from .framing import ACK, NAK, STX, decode_text, find_frame

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset(string.hexdigits.encode("ascii"))


@dataclass(frozen=True)
class Ack:
    """Device accepted the command."""


@dataclass(frozen=True)
class Nak:
    """Device rejected the command."""


@dataclass(frozen=True)
class FramedText:
    """A framed reply whose CRC checked out."""

    text: str


@dataclass(frozen=True)
class RawText:
    """Bytes that never formed a recognised reply before the stream ended."""

    text: str


@dataclass(frozen=True)
class CrcFormatError:
    """The CRC field of a framed reply is not hexadecimal."""

    field: bytes


@dataclass(frozen=True)
class CrcMismatchError:
    """The CRC field of a framed reply does not match its contents."""

    expected: int
    received: int

    def __repr__(self) -> str:
        return (
            f"CrcMismatchError(expected=0x{self.expected:04X}, "
            f"received=0x{self.received:04X})"
        )


@dataclass(frozen=True)
class NoData:
    """The stream ended before any byte arrived."""


ParsedReply = Union[Ack, Nak, FramedText, RawText, CrcFormatError, CrcMismatchError, NoData]


def parse_crc_field(field: bytes) -> int | None:
    """Parse a 4-byte ASCII hex CRC field, or return None if it is not hex."""
    if not field or any(b not in _HEX_DIGITS for b in field):
        return None
    return int(field, 16)


def classify(buffer: bytes) -> ParsedReply | None:
    """Classify the accumulated reply bytes.

    Returns:
        A terminal ``ParsedReply``, or ``None`` when more bytes are needed.
    """
    if not buffer:
        return None

    first = buffer[0]
    if first == ACK:
        return Ack()
    if first == NAK:
        return Nak()
    if first != STX:
        return None

    frame = find_frame(buffer)
    if frame is None:
        return None

    received = parse_crc_field(frame.crc_field)
    if received is None:
        return CrcFormatError(field=frame.crc_field)

    expected = crc16_ccitt(frame.checked_bytes)
    if expected != received:
        return CrcMismatchError(expected=expected, received=received)

    return FramedText(text=decode_text(frame.payload))


def read_reply(read_chunk: Callable[[], bytes]) -> ParsedReply:
    """Read from ``read_chunk`` until the reply can be classified.

    Args:
        read_chunk: Blocking read returning the next bytes, or ``b""`` once
            the peer has closed the stream.

    Raises:
        ReceiveTimeoutError: If a read times out after some bytes arrived.
    """
    buffer = bytearray()
    while True:
        try:
            chunk = read_chunk()
        except ReceiveTimeoutError:
            if not buffer:
                logger.debug("Receive timed out with nothing read")
                return NoData()
            raise

        if not chunk:
            break

        buffer.extend(chunk)
        reply = classify(bytes(buffer))
        if reply is not None:
            logger.debug("Classified %d byte reply as %r", len(buffer), reply)
            return reply

    if not buffer:
        return NoData()

    # Stream closed on something that never resolved, e.g. plain text or a truncated frame
    logger.debug("Stream ended on unframed reply: %s", bytes(buffer).hex(" "))
    return RawText(text=decode_text(bytes(buffer)))
