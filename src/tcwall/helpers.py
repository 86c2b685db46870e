"""Helper tables and value types for timecode standard handling."""

from __future__ import annotations

import re
import sys
from fractions import Fraction
from typing import NamedTuple

if sys.version_info >= (3, 11):
    _raw_tc_type = str | int | float
    _wall_secs_type = Fraction | int | float
else:
    from typing import Union
    _raw_tc_type = Union[str, int, float]
    _wall_secs_type = Union[Fraction, int, float]

_RawTimecode = _raw_tc_type
_WallSecs = _wall_secs_type

# Exactly 2 or 3 decimal digits are required so that "24" is never confused
# between 24.000 and 23.976.
FRAME_RATES: dict[str, tuple[int, int]] = {
    "23.976": (24000, 1001),  # 23.976023976023976...
    "23.98": (24000, 1001),
    "24.000": (24, 1),
    "24.00": (24, 1),
    "25.000": (25, 1),
    "25.00": (25, 1),
    "29.970": (30000, 1001),  # 29.97002997002997...
    "29.97": (30000, 1001),
    "30.000": (30, 1),
    "30.00": (30, 1),
    "47.952": (48000, 1001),  # 47.952047952047952...
    "47.95": (48000, 1001),
    "48.000": (48, 1),
    "48.00": (48, 1),
    "50.000": (50, 1),
    "50.00": (50, 1),
    "59.940": (60000, 1001),  # 59.94005994005994...
    "59.94": (60000, 1001),
    "60.000": (60, 1),
    "60.00": (60, 1),
}

# Frame numbers dropped per 10 minutes of timecode, one block at the start of
# minutes x1, x2, ..., x9.
DROP_FRAMES_PER_10MINS: dict[str, int] = {
    "29.970": 18,  # 2 frames per dropped block
    "29.97": 18,
    "59.940": 36,  # 4 frames per dropped block
    "59.94": 36,
}

FRAME_RATE_STR_FMT = re.compile(r"^[0-9][0-9]\.[0-9][0-9][0-9]?$")

TC_STR_FMT = re.compile(
    r"^([0-9][0-9])[:;]([0-9][0-9])[:;]([0-9][0-9])[:;]([0-9][0-9])$"
)

# Largest packed HHMMSSFF integer timecode.
MAX_PACKED_TC = 99999999

MINS_PER_HR = 60
SECS_PER_MIN = 60
MINS_PER_DROP_BLOCK = 10


class ParsedTimecode(NamedTuple):
    """Numerical fields of a timecode.

    The fields carry no validity on their own: the legal range of ``ff`` and
    the dropped frame numbers both depend on the timecode standard.
    """

    hh: int
    mm: int
    ss: int
    ff: int

    def total_seconds(self) -> int:
        """Return the seconds elapsed up to this timecode, ignoring frames.

        Returns:
            int: ``hh``, ``mm`` and ``ss`` combined into seconds.
        """
        return SECS_PER_MIN * (MINS_PER_HR * self.hh + self.mm) + self.ss
