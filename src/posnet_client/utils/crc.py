"""CRC-16/CCITT checksum used by Posnet frames.

Parameters: polynomial 0x1021, initial value 0xFFFF, MSB-first, no
reflection, no final XOR. The 256-entry lookup table is built once on
first use and shared read-only by every caller.
"""

from __future__ import annotations

import functools

POLYNOMIAL = 0x1021
INITIAL_VALUE = 0xFFFF


@functools.lru_cache(maxsize=1)
def crc_table() -> tuple[int, ...]:
    """Return the CRC lookup table, building it on the first call."""
    table: list[int] = []
    for i in range(256):
        crc = i << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ POLYNOMIAL
            else:
                crc <<= 1
            crc &= 0xFFFF
        table.append(crc)
    return tuple(table)


def crc16_ccitt(data: bytes) -> int:
    """Compute the CRC of ``data``.

    An empty input yields 0 rather than the initial value.
    """
    if not data:
        return 0

    table = crc_table()
    crc = INITIAL_VALUE
    for byte in data:
        crc = ((crc << 8) & 0xFFFF) ^ table[((crc >> 8) ^ byte) & 0xFF]
    return crc


def crc16_hex(data: bytes) -> str:
    """Render the CRC of ``data`` as 4 uppercase hex digits."""
    return f"{crc16_ccitt(data):04X}"
