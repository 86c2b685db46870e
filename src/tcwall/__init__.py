"""Conversions between video timecode, frame index and wall time."""

import logging

from .helpers import ParsedTimecode
from .timecode import (
    InvalidInput,
    TimecodeError,
    TimecodeStandard,
    resolve_standard,
    wall_secs_to_duration_string,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidInput",
    "ParsedTimecode",
    "TimecodeError",
    "TimecodeStandard",
    "resolve_standard",
    "wall_secs_to_duration_string",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
