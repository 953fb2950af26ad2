"""MCP server entry point for Posnet fiscal printers.

Exposes the command exchange as tools via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import Timeouts
from .exceptions import ParameterError
from .models.result import SendResult
from .protocol.framing import build_frame as _build_frame
from .protocol.framing import encode_text
from .session import send
from .utils.crc import crc16_ccitt

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "posnet",
    instructions="Send Posnet protocol commands to fiscal printers over TCP",
)

# Loaded on first use, or at startup by main()
_timeouts: Timeouts | None = None


def _get_timeouts() -> Timeouts:
    """Get the configured timeouts, reading the environment once."""
    global _timeouts
    if _timeouts is None:
        _timeouts = Timeouts.from_env()
    return _timeouts


# ─── PRINTER TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def send_command(ip: str, port: int, command: str) -> str:
    """Send one command to a Posnet printer and return its answer.

    Returns "OK" when the printer acknowledges, the reply text when it
    answers with a frame, or an ERR_* code.

    Args:
        ip: Printer address.
        port: Printer TCP port (1-65535).
        command: Command text (codepage 1250), without STX/ETX/CRC.
    """
    try:
        timeouts = _get_timeouts()
    except ValueError as e:
        return str(SendResult.system_error(f"Invalid timeout configuration: {e}"))
    return send(ip, port, command, timeouts)


# ─── DIAGNOSTIC TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def build_frame(command: str) -> dict[str, Any]:
    """Show the exact bytes that would be sent for a command.

    Args:
        command: Command text (codepage 1250).
    """
    try:
        frame = _build_frame(command)
    except ParameterError as e:
        return {"error": str(e)}

    return {
        "frame_hex": frame.hex(" "),
        "length": len(frame),
        "crc": frame[-4:].decode("ascii"),
        "payload_hex": encode_text(command).hex(" "),
    }


@mcp.tool()
def compute_crc(data_hex: str) -> dict[str, Any]:
    """Compute the Posnet CRC-16/CCITT of arbitrary bytes.

    Args:
        data_hex: Bytes as hex, spaces allowed (e.g. "50 41 03").
    """
    try:
        data = bytes.fromhex(data_hex)
    except ValueError as e:
        return {"error": f"Invalid hex: {e}"}

    crc = crc16_ccitt(data)
    return {"crc": crc, "crc_hex": f"{crc:04X}", "length": len(data)}


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    timeouts = _get_timeouts()
    logger.info(
        "Timeouts: connect %gs, send %gs, receive %gs",
        timeouts.connect,
        timeouts.send,
        timeouts.receive,
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
