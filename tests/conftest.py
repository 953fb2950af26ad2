"""Shared fixtures: a throwaway Posnet device listening on loopback."""

from __future__ import annotations

import socket
import threading
import time

import pytest

from posnet_client.config import Timeouts
from posnet_client.protocol.framing import find_frame


class FakePrinter:
    """Accepts one connection, reads one frame, then plays back ``replies``.

    Each reply chunk is sent after ``delay`` seconds. The connection stays
    open for ``hold_open`` seconds after the last chunk before closing.
    """

    def __init__(self, replies=(), delay: float = 0.0, hold_open: float = 0.0):
        self.replies = list(replies)
        self.delay = delay
        self.hold_open = hold_open
        self.received = bytearray()
        self.connections = 0
        self.done = threading.Event()

        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._server.bind(("127.0.0.1", 0))
        self._server.listen(1)
        self._server.settimeout(5)
        self.port = self._server.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self) -> FakePrinter:
        self._thread.start()
        return self

    def _serve(self) -> None:
        try:
            conn, _ = self._server.accept()
        except OSError:
            self.done.set()
            return

        self.connections += 1
        with conn:
            conn.settimeout(2)
            try:
                while find_frame(bytes(self.received)) is None:
                    data = conn.recv(1024)
                    if not data:
                        break
                    self.received.extend(data)
                for chunk in self.replies:
                    time.sleep(self.delay)
                    conn.sendall(chunk)
                time.sleep(self.hold_open)
            except OSError:
                pass
        self.done.set()

    def close(self) -> None:
        self._server.close()
        self._thread.join(timeout=5)


@pytest.fixture
def fake_printer():
    """Factory for started FakePrinter instances, closed after the test."""
    printers: list[FakePrinter] = []

    def _make(*replies, delay: float = 0.0, hold_open: float = 0.0) -> FakePrinter:
        printer = FakePrinter(replies, delay=delay, hold_open=hold_open).start()
        printers.append(printer)
        return printer

    yield _make

    for printer in printers:
        printer.close()


@pytest.fixture
def fast_timeouts() -> Timeouts:
    """Short timeouts so timeout scenarios finish quickly."""
    return Timeouts(connect=1.0, send=1.0, receive=0.3)
