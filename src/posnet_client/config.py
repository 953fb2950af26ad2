"""Timeouts and I/O sizing for printer sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass

CONNECT_TIMEOUT_MS = 3000
SEND_TIMEOUT_MS = 3000
# Printing can take a while before the device answers.
RECEIVE_TIMEOUT_MS = 5000
READ_CHUNK_SIZE = 2048


def _env_ms(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(
            f"{name} must be a whole number of milliseconds, got {value!r}"
        ) from e


@dataclass(frozen=True)
class Timeouts:
    """Per-operation timeouts in seconds."""

    connect: float = CONNECT_TIMEOUT_MS / 1000
    send: float = SEND_TIMEOUT_MS / 1000
    receive: float = RECEIVE_TIMEOUT_MS / 1000

    def __post_init__(self) -> None:
        for name in ("connect", "send", "receive"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} timeout must be positive, got {value!r}")

    @classmethod
    def from_env(cls) -> Timeouts:
        """Build timeouts from ``POSNET_*_TIMEOUT_MS`` environment variables."""
        return cls(
            connect=_env_ms("POSNET_CONNECT_TIMEOUT_MS", CONNECT_TIMEOUT_MS) / 1000,
            send=_env_ms("POSNET_SEND_TIMEOUT_MS", SEND_TIMEOUT_MS) / 1000,
            receive=_env_ms("POSNET_RECEIVE_TIMEOUT_MS", RECEIVE_TIMEOUT_MS) / 1000,
        )
