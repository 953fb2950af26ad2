"""Result types returned by the client."""

from .result import ResultCode, SendResult
