"""Exceptions raised inside the client.

None of these reach callers of :func:`posnet_client.session.send`; the
session converts them into symbolic result codes.
"""


class PosnetError(Exception):
    """Base class for client errors."""


class ParameterError(PosnetError):
    """An argument was rejected before any I/O took place."""

    def __init__(self, code, message: str = "") -> None:
        super().__init__(message or str(code))
        self.code = code


class ConnectTimeoutError(PosnetError):
    """The TCP connection was not established within the connect timeout."""


class ReceiveTimeoutError(PosnetError):
    """A single read waited longer than the receive timeout."""
