"""Single command exchange with a Posnet printer.

Each call opens its own connection, sends one frame, reads one reply and
closes the connection again. Every failure is reported as a result code;
nothing is raised to the caller and nothing is retried.
"""

from __future__ import annotations

import logging

from .config import Timeouts
from .exceptions import ConnectTimeoutError, ParameterError
from .models.result import ResultCode, SendResult
from .protocol.framing import build_frame
from .protocol.parser import (
    Ack,
    CrcFormatError,
    CrcMismatchError,
    FramedText,
    Nak,
    NoData,
    ParsedReply,
    RawText,
    read_reply,
)
from .transport.tcp_connection import TCPConnection

logger = logging.getLogger(__name__)

MIN_PORT = 1
MAX_PORT = 65535


def validate_params(ip, port, command) -> None:
    """Check the call arguments before any I/O.

    Raises:
        ParameterError: Carrying the code of the first rejected argument.
    """
    if not isinstance(ip, str) or not ip.strip():
        raise ParameterError(ResultCode.ERR_PARAM_IP, f"Invalid address: {ip!r}")
    if isinstance(port, bool) or not isinstance(port, int):
        raise ParameterError(ResultCode.ERR_PARAM_PORT, f"Invalid port: {port!r}")
    if not MIN_PORT <= port <= MAX_PORT:
        raise ParameterError(
            ResultCode.ERR_PARAM_PORT,
            f"Port must be {MIN_PORT}-{MAX_PORT}, got {port}",
        )
    if not isinstance(command, str):
        raise ParameterError(
            ResultCode.ERR_PARAM_COMMAND, f"Invalid command: {command!r}"
        )


def result_from_reply(reply: ParsedReply) -> SendResult:
    """Map a classified reply onto its result code."""
    if isinstance(reply, Ack):
        return SendResult.of(ResultCode.OK)
    if isinstance(reply, Nak):
        return SendResult.of(ResultCode.ERR_CRC)
    if isinstance(reply, (FramedText, RawText)):
        return SendResult.reply_text(reply.text)
    if isinstance(reply, CrcFormatError):
        return SendResult.of(ResultCode.ERR_CRC_FORMAT)
    if isinstance(reply, CrcMismatchError):
        return SendResult.of(ResultCode.ERR_CRC_RESPONSE)
    if isinstance(reply, NoData):
        return SendResult.of(ResultCode.ERR_NO_RESPONSE)
    raise TypeError(f"Unknown reply type: {type(reply).__name__}")


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def send_command(
    ip: str,
    port: int,
    command: str,
    timeouts: Timeouts | None = None,
) -> SendResult:
    """Send ``command`` to the printer at ``ip:port`` and classify the reply.

    Args:
        ip: Printer host name or address.
        port: Printer TCP port (1-65535).
        command: Command text, encodable in codepage 1250.
        timeouts: Connect/send/receive timeouts; defaults to 3s/3s/5s.
    """
    try:
        validate_params(ip, port, command)
        frame = build_frame(command)
    except ParameterError as e:
        logger.warning("Rejected parameters: %s", e)
        return SendResult.of(e.code)

    try:
        with TCPConnection(ip.strip(), port, timeouts) as conn:
            conn.write(frame)
            reply = read_reply(conn.read)
            logger.debug("Reply from %s: %r", conn.endpoint, reply)
    except ConnectTimeoutError as e:
        logger.warning("%s", e)
        return SendResult.of(ResultCode.ERR_TIMEOUT_CONNECT)
    except Exception as e:
        logger.warning("Exchange with %s:%s failed: %s", ip, port, _describe(e))
        return SendResult.system_error(_describe(e))

    result = result_from_reply(reply)
    if not result.ok:
        logger.warning("Printer at %s:%s answered %s", ip, port, result)
    return result


def send(
    ip: str,
    port: int,
    command: str,
    timeouts: Timeouts | None = None,
) -> str:
    """Send ``command`` and return the reply text or a symbolic result code.

    Returns ``"OK"`` for ACK, the decoded text for text replies, or one of
    the ``ERR_*`` codes (``"ERR_SYSTEM: <message>"`` for unexpected failures).
    """
    return str(send_command(ip, port, command, timeouts))
