"""Host functions for working with video timecode and wall time durations.

Each function takes only primitive values (text, integers and floats) and
returns a primitive, so a host such as a spreadsheet custom function runtime
can call it directly. Every function except :func:`tc_error` raises
:class:`~tcwall.timecode.InvalidInput` for bad input.

Examples:
    >>> tc_to_wall_secs("00:00:01:02", "50.00", "non-drop")
    1.04
    >>> wall_secs_to_durstr(3765)
    '1h 02m 45s'
    >>> wall_secs_to_tc_left(1.041, "50.00", "non-drop")
    '00:00:01:02'
    >>> wall_secs_to_tc_right(1.041, "50.00", "non-drop")
    '00:00:01:03'
    >>> frame_idx_to_tc(1800, "29.97", "drop")
    '00:01:00:02'

A ``frame_rate`` argument is plain text with exactly 2 or 3 digits after the
period (e.g. "23.976" or "24.00") and ``drop_type`` is "drop" or "non-drop".
A timecode is "HH:MM:SS:FF" text, which may use semicolons in drop frame
standards, or an integer such as 4332211 for 04:33:22:11.
"""

from __future__ import annotations

import logging
from typing import Callable

from .helpers import _RawTimecode, _WallSecs
from .timecode import (
    InvalidInput,
    TimecodeError,
    TimecodeStandard,
    wall_secs_to_duration_string,
)

logger = logging.getLogger(__name__)


def _as_frame_idx(frame_idx: object) -> int:
    if isinstance(frame_idx, float) and frame_idx.is_integer():
        return int(frame_idx)
    if isinstance(frame_idx, bool) or not isinstance(frame_idx, int):
        raise InvalidInput("frame_idx must be non-negative integer")
    return frame_idx


def tc_error(timecode: _RawTimecode, frame_rate: str, drop_type: str) -> str:
    """Return an empty str if ``timecode`` is valid, or the error message.

    Args:
        timecode (str | int | float): The timecode to check.
        frame_rate (str): Frame rate label.
        drop_type (str): "drop" or "non-drop".

    Returns:
        str: Empty if valid, a non-empty error message otherwise.
    """
    try:
        tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
        tc_std.parse_valid_timecode(timecode)
    except TimecodeError as e:
        logger.debug("Rejected timecode %r: %s", timecode, e)
        return str(e)
    return ""


def tc_to_frame_idx(timecode: _RawTimecode, frame_rate: str, drop_type: str) -> int:
    """Convert a timecode to its frame index (00:00:00:00 is index 0).

    Dropped frame numbers have no index, so in 29.97 drop 00:00:59:29 has
    index 1799 and 00:01:00:02 has index 1800.
    """
    tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
    return tc_std.tc_to_frames(timecode)


def frame_idx_to_tc(frame_idx: int, frame_rate: str, drop_type: str) -> str:
    """Return the timecode string of a non-negative frame index."""
    tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
    frame_idx = _as_frame_idx(frame_idx)
    return tc_std.tc_to_string(tc_std.frames_to_tc(frame_idx))


def frame_idx_to_wall_secs(frame_idx: int, frame_rate: str, drop_type: str) -> float:
    """Convert a frame index to wall seconds from 00:00:00:00."""
    tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
    frame_idx = _as_frame_idx(frame_idx)
    if frame_idx < 0:
        raise InvalidInput("frame_idx must be non-negative integer")
    return float(tc_std.frames_to_wall_secs(frame_idx))


def tc_to_wall_secs(timecode: _RawTimecode, frame_rate: str, drop_type: str) -> float:
    """Convert a timecode to wall seconds from 00:00:00:00."""
    tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
    return float(tc_std.frames_to_wall_secs(tc_std.tc_to_frames(timecode)))


def wall_secs_between_tcs(
    start: _RawTimecode,
    end: _RawTimecode,
    frame_rate: str,
    drop_type: str,
) -> float:
    """Return wall seconds from ``start`` to ``end``, negative if end is first.

    Args:
        start (str | int | float): Start timecode.
        end (str | int | float): End timecode.
        frame_rate (str): Frame rate label.
        drop_type (str): "drop" or "non-drop".

    Returns:
        float: Duration from start to end in wall seconds.
    """
    tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
    return float(tc_std.wall_secs_between(start, end))


def wall_secs_to_durstr(wall_secs: _WallSecs) -> str:
    """Convert wall seconds to a duration string such as "1h 23m 15s"."""
    return wall_secs_to_duration_string(wall_secs)


def wall_secs_to_frame_idx_left(
    wall_secs: _WallSecs, frame_rate: str, drop_type: str
) -> int:
    """Return the index of the closest frame at or before ``wall_secs``.

    Negative ``wall_secs`` yield negative frame indexes.
    """
    tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
    return tc_std.wall_secs_to_frames_left(wall_secs)


def wall_secs_to_frame_idx_right(
    wall_secs: _WallSecs, frame_rate: str, drop_type: str
) -> int:
    """Return the index of the closest frame at or after ``wall_secs``.

    Negative ``wall_secs`` yield negative frame indexes.
    """
    tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
    return tc_std.wall_secs_to_frames_right(wall_secs)


def wall_secs_to_tc_left(wall_secs: _WallSecs, frame_rate: str, drop_type: str) -> str:
    """Return the timecode of the closest frame at or before ``wall_secs``.

    Negative ``wall_secs`` are not supported.
    """
    tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
    frame_idx = tc_std.wall_secs_to_frames_left(wall_secs)
    return tc_std.tc_to_string(tc_std.frames_to_tc(frame_idx))


def wall_secs_to_tc_right(wall_secs: _WallSecs, frame_rate: str, drop_type: str) -> str:
    """Return the timecode of the closest frame at or after ``wall_secs``.

    Negative ``wall_secs`` are not supported.
    """
    tc_std = TimecodeStandard.from_labels(frame_rate, drop_type)
    frame_idx = tc_std.wall_secs_to_frames_right(wall_secs)
    return tc_std.tc_to_string(tc_std.frames_to_tc(frame_idx))


# Host function names, as registered by a spreadsheet adapter.
FUNCTIONS: dict[str, Callable[..., object]] = {
    "FRAMEIDX_TO_TC": frame_idx_to_tc,
    "FRAMEIDX_TO_WALL_SECS": frame_idx_to_wall_secs,
    "TC_ERROR": tc_error,
    "TC_TO_FRAMEIDX": tc_to_frame_idx,
    "TC_TO_WALL_SECS": tc_to_wall_secs,
    "WALL_SECS_BETWEEN_TCS": wall_secs_between_tcs,
    "WALL_SECS_TO_DURSTR": wall_secs_to_durstr,
    "WALL_SECS_TO_FRAMEIDX_LEFT": wall_secs_to_frame_idx_left,
    "WALL_SECS_TO_FRAMEIDX_RIGHT": wall_secs_to_frame_idx_right,
    "WALL_SECS_TO_TC_LEFT": wall_secs_to_tc_left,
    "WALL_SECS_TO_TC_RIGHT": wall_secs_to_tc_right,
}
