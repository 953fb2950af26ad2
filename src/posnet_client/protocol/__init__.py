"""Protocol layer: frame building, CRC checking, and reply classification."""

from .framing import build_frame, find_frame
from .parser import classify, read_reply
