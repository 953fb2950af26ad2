"""Client for Posnet fiscal printers over TCP."""

from .models.result import ResultCode, SendResult
from .session import send, send_command

__version__ = "0.1.0"
