"""Outcome of a single command exchange."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ResultCode(str, Enum):
    """Symbolic outcomes returned to callers."""

    OK = "OK"
    TEXT = "TEXT"
    ERR_TIMEOUT_CONNECT = "ERR_TIMEOUT_CONNECT"
    ERR_CRC = "ERR_CRC"
    ERR_CRC_FORMAT = "ERR_CRC_FORMAT"
    ERR_CRC_RESPONSE = "ERR_CRC_RESPONSE"
    ERR_NO_RESPONSE = "ERR_NO_RESPONSE"
    ERR_PARAM_IP = "ERR_PARAM_IP"
    ERR_PARAM_PORT = "ERR_PARAM_PORT"
    ERR_PARAM_COMMAND = "ERR_PARAM_COMMAND"
    ERR_SYSTEM = "ERR_SYSTEM"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SendResult:
    """Result of :func:`posnet_client.session.send_command`.

    ``text`` is set for ``TEXT`` results (the decoded reply) and
    ``message`` for ``ERR_SYSTEM`` (the underlying failure).
    """

    code: ResultCode
    text: str | None = None
    message: str | None = None

    @classmethod
    def of(cls, code: ResultCode) -> SendResult:
        return cls(code=code)

    @classmethod
    def reply_text(cls, text: str) -> SendResult:
        return cls(code=ResultCode.TEXT, text=text)

    @classmethod
    def system_error(cls, message: str) -> SendResult:
        return cls(code=ResultCode.ERR_SYSTEM, message=message)

    @property
    def ok(self) -> bool:
        """True when the device accepted the command or answered with text."""
        return self.code in (ResultCode.OK, ResultCode.TEXT)

    def __str__(self) -> str:
        if self.code is ResultCode.TEXT:
            return self.text or ""
        if self.code is ResultCode.ERR_SYSTEM:
            return f"{ResultCode.ERR_SYSTEM.value}: {self.message}"
        return self.code.value
