"""TCP connection to a Posnet fiscal printer.

One connection serves exactly one command exchange. Connect, send and
receive each have their own timeout; the receive timeout applies to every
individual read rather than to the whole reply.
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass

from ..config import READ_CHUNK_SIZE, Timeouts
from ..exceptions import ConnectTimeoutError, ReceiveTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class Endpoint:
    """Printer address."""

    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


class TCPConnection:
    """Manages the TCP connection to the printer.

    Usage::

        with TCPConnection("192.168.1.50", 6666) as conn:
            conn.write(frame_bytes)
            chunk = conn.read()
    """

    def __init__(
        self,
        host: str,
        port: int,
        timeouts: Timeouts | None = None,
        chunk_size: int = READ_CHUNK_SIZE,
    ) -> None:
        self._endpoint = Endpoint(host=host, port=port)
        self._timeouts = timeouts or Timeouts()
        self._chunk_size = chunk_size
        self._sock: socket.socket | None = None

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    def __enter__(self) -> TCPConnection:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """Connect to the printer within the connect timeout.

        Raises:
            ConnectTimeoutError: If the connect timeout elapsed.
            OSError: If the connection was refused or the host is unreachable.
        """
        try:
            self._sock = socket.create_connection(
                (self._endpoint.host, self._endpoint.port),
                timeout=self._timeouts.connect,
            )
        except socket.timeout as e:
            raise ConnectTimeoutError(
                f"Connecting to {self._endpoint} timed out after "
                f"{self._timeouts.connect:g}s"
            ) from e
        logger.info("Connected to %s", self._endpoint)

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._sock is None:
            return

        try:
            self._sock.close()
        except OSError as e:
            logger.warning("Error closing connection to %s: %s", self._endpoint, e)
        finally:
            self._sock = None
            logger.info("Disconnected from %s", self._endpoint)

    def write(self, data: bytes) -> None:
        """Write all of ``data`` within the send timeout.

        Raises:
            ConnectionError: If not connected.
            OSError: If the write fails or times out.
        """
        sock = self._require_socket()
        sock.settimeout(self._timeouts.send)
        sock.sendall(data)
        logger.debug("Sent %d bytes: %s", len(data), data.hex(" "))

    def read(self) -> bytes:
        """Read the next chunk of bytes.

        Returns:
            The bytes received, or ``b""`` if the printer closed the stream.

        Raises:
            ConnectionError: If not connected.
            ReceiveTimeoutError: If nothing arrived within the receive timeout.
        """
        sock = self._require_socket()
        sock.settimeout(self._timeouts.receive)
        try:
            data = sock.recv(self._chunk_size)
        except socket.timeout as e:
            raise ReceiveTimeoutError(
                f"No data from {self._endpoint} within "
                f"{self._timeouts.receive:g}s"
            ) from e
        logger.debug("Received %d bytes: %s", len(data), data.hex(" "))
        return data

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionError("Not connected to printer")
        return self._sock
