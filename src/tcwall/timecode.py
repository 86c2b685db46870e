"""TimecodeStandard class for timecode, frame index and wall time calculations."""

# Standard Library Imports
from __future__ import annotations

import math
import numbers
import sys
from fractions import Fraction

from .helpers import (
    DROP_FRAMES_PER_10MINS,
    FRAME_RATE_STR_FMT,
    FRAME_RATES,
    MAX_PACKED_TC,
    MINS_PER_DROP_BLOCK,
    MINS_PER_HR,
    SECS_PER_MIN,
    TC_STR_FMT,
    ParsedTimecode,
    _RawTimecode,
    _WallSecs,
)

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

#%%
class TimecodeStandard:
    """A fully resolved timecode standard.

    Holds the exact frame rate as two integers, so the rate is never stored as
    a floating point approximation, together with the integer frame count used
    for the FF field and the number of frame numbers dropped per 10 minutes.
    Instances are immutable.

    Args:
        frames (int): Numerator of the exact frame rate.
        per_wall_secs (int): Denominator of the exact frame rate, 1 for
            integer rates or 1001 for NTSC-derived rates.
        drop_frames_per_10mins (int): 0 for non-drop standards, otherwise the
            number of frame numbers skipped per 10 minutes of timecode. Must
            be divisible by 9.
    """

    def __init__(
        self,
        frames: int,
        per_wall_secs: int = 1,
        drop_frames_per_10mins: int = 0,
    ) -> None:
        if frames <= 0 or per_wall_secs <= 0:
            raise InvalidInput("Invalid framerate (zero or negative).")
        if drop_frames_per_10mins < 0 or drop_frames_per_10mins % 9:
            raise InvalidInput(
                "drop_frames_per_10mins must be a non-negative multiple of 9, "
                f"not {drop_frames_per_10mins}"
            )
        self._frames = frames
        self._per_wall_secs = per_wall_secs
        self._int_fps = -(-frames // per_wall_secs)
        self._drop_frames_per_10mins = drop_frames_per_10mins

    @classmethod
    def from_labels(cls, frame_rate: str, drop_type: str) -> Self:
        """Resolve a frame rate label and a drop type into a standard.

        Args:
            frame_rate (str): Frame rate as plain text with exactly 2 or 3
                digits after the period, e.g. "23.976" or "24.00".
            drop_type (str): "drop" or "non-drop", case insensitive.

        Raises:
            InvalidInput: If either value is malformed or unsupported, or if
                "drop" is requested for a rate with no drop frame definition.

        Returns:
            TimecodeStandard: The resolved standard.
        """
        if not isinstance(frame_rate, str):
            raise InvalidInput("frame_rate must be a single plain text value")
        frame_rate = frame_rate.strip()

        if not FRAME_RATE_STR_FMT.match(frame_rate):
            raise InvalidInput(
                "frame_rate must contain 2 or 3 digits after period "
                '(e.g. "23.976" or "24.00")'
            )
        try:
            frames, per_wall_secs = FRAME_RATES[frame_rate]
        except KeyError:
            raise InvalidInput(f'Unsupported frame rate: "{frame_rate}"') from None

        if not isinstance(drop_type, str):
            raise InvalidInput("drop_type must be a single plain text value")
        drop_type = drop_type.strip().lower()
        if drop_type not in ("drop", "non-drop"):
            raise InvalidInput(
                'drop_type value must be "non-drop" or "drop" (without quotes)'
            )

        drop_frames_per_10mins = 0
        if drop_type == "drop":
            if frame_rate not in DROP_FRAMES_PER_10MINS:
                raise InvalidInput(f"frame_rate {frame_rate} must be non-drop")
            drop_frames_per_10mins = DROP_FRAMES_PER_10MINS[frame_rate]

        return cls(frames, per_wall_secs, drop_frames_per_10mins)

    @property
    def frames(self) -> int:
        """Numerator of the exact frame rate."""
        return self._frames

    @property
    def per_wall_secs(self) -> int:
        """Denominator of the exact frame rate."""
        return self._per_wall_secs

    @property
    def int_fps(self) -> int:
        """Number of frame numbers per timecode second (FF field width)."""
        return self._int_fps

    @property
    def drop_frames_per_10mins(self) -> int:
        """Frame numbers skipped per 10 minutes of timecode (0 if non-drop)."""
        return self._drop_frames_per_10mins

    @property
    def frames_per_dropped_block(self) -> int:
        """Return the size of each block of dropped frame numbers.

        A block is dropped from the first second of 9 out of every 10 minutes,
        so at 29.97 fps the 18 frames dropped per 10 minutes come in blocks of
        2.

        Returns:
            int: Frame numbers dropped at the start of each drop minute.
        """
        return self._drop_frames_per_10mins // 9

    @property
    def drop_frame(self) -> bool:
        """True if this is a drop frame standard."""
        return self._drop_frames_per_10mins > 0

    @property
    def framerate(self) -> Fraction:
        """Framerate getter.

        Returns:
            Fraction: The exact frame rate, as a fraction of two integers.
        """
        return Fraction(self._frames, self._per_wall_secs)

    #### Timecode parsing and formatting

    @classmethod
    def parse_timecode(cls, timecode: _RawTimecode) -> ParsedTimecode:
        """Parse the given raw timecode value.

        Args:
            timecode (str | int | float): Either a str in "HH:MM:SS:FF" format,
                where each separator may also be a semicolon, or a number in
                [0, 99999999] read as packed decimal digits, so 4332211 is
                04:33:22:11.

        Raises:
            InvalidInput: If the value is of the wrong type or format.

        Returns:
            ParsedTimecode: The hours, minutes, seconds and frames fields.
        """
        if isinstance(timecode, float) and timecode.is_integer():
            timecode = int(timecode)

        if isinstance(timecode, (int, float)) and not isinstance(timecode, bool):
            if (
                not isinstance(timecode, int)
                or timecode < 0
                or timecode > MAX_PACKED_TC
            ):
                raise InvalidInput(
                    "numerical timecode must be an integer in "
                    f"[0, {MAX_PACKED_TC}] range"
                )
            digits, ff = divmod(timecode, 100)
            digits, ss = divmod(digits, 100)
            hh, mm = divmod(digits, 100)
            return ParsedTimecode(hh, mm, ss, ff)

        if not isinstance(timecode, str):
            raise InvalidInput(
                "timecode must be a single plain text value or custom format number"
            )

        matches = TC_STR_FMT.match(timecode.strip())
        if not matches:
            raise InvalidInput(f'timecode must be in HH:MM:SS:FF format: "{timecode}"')

        return ParsedTimecode(*map(int, matches.groups()))

    def is_drop_sec(self, tc: ParsedTimecode) -> bool:
        """Return True if frame numbers are dropped from the second of ``tc``.

        A block of frames is dropped from the first second (SS=00) of each
        minute not divisible by 10 (MM=x1, x2, ..., x9).

        Args:
            tc (ParsedTimecode): The timecode to check.

        Returns:
            bool: True if ``tc`` lies in a second with dropped frame numbers.
        """
        if not self.drop_frame:
            return False
        return tc.ss == 0 and (tc.mm % MINS_PER_DROP_BLOCK) != 0

    def validate_timecode(self, timecode: _RawTimecode, tc: ParsedTimecode) -> None:
        """Check that a parsed timecode exists in this standard.

        Any HH value (00-99) is valid.

        Args:
            timecode (str | int | float): The raw value ``tc`` was parsed from.
            tc (ParsedTimecode): The parsed fields.

        Raises:
            InvalidInput: If a field is out of range, the timecode is a dropped
                frame number, or semicolons are used in a non-drop standard.
        """
        if tc.mm >= MINS_PER_HR:
            raise InvalidInput(f'timecode MM must be in range 00-59: "{tc.mm}"')

        if tc.ss >= SECS_PER_MIN:
            raise InvalidInput(f'timecode SS must be in range 00-59: "{tc.ss}"')

        if tc.ff >= self._int_fps:
            raise InvalidInput(
                f'timecode FF must be in range 00-{self._int_fps - 1}: "{tc.ff}"'
            )

        if self.is_drop_sec(tc) and tc.ff < self.frames_per_dropped_block:
            raise InvalidInput(
                f'timecode invalid: "{self.tc_to_string(tc)}" is a dropped frame number'
            )

        if isinstance(timecode, str) and ";" in timecode and not self.drop_frame:
            raise InvalidInput(
                f'only drop timecode may use semi-colon separator: "{timecode}"'
            )

    def parse_valid_timecode(self, timecode: _RawTimecode) -> ParsedTimecode:
        """Parse the given raw timecode and validate it against this standard.

        Args:
            timecode (str | int | float): The raw timecode value.

        Returns:
            ParsedTimecode: The validated timecode fields.
        """
        tc = self.parse_timecode(timecode)
        self.validate_timecode(timecode, tc)
        return tc

    @staticmethod
    def tc_to_string(tc: ParsedTimecode) -> str:
        """Return the "HH:MM:SS:FF" string of the given timecode.

        Colons are used for drop frame standards too.

        Args:
            tc (ParsedTimecode): The timecode fields.

        Returns:
            str: The zero padded timecode string.
        """
        return "{:02d}:{:02d}:{:02d}:{:02d}".format(*tc)

    #### Frame index conversion

    def tc_to_frames(self, timecode: ParsedTimecode | _RawTimecode) -> int:
        """Convert the given timecode to a frame index.

        00:00:00:00 has index 0. Dropped frame numbers are not given indexes,
        so in 29.97 drop 00:00:59:29 has index 1799 and 00:01:00:02 has index
        1800.

        Args:
            timecode (ParsedTimecode | str | int | float): Either parsed fields,
                assumed valid, or a raw timecode which is parsed and validated.

        Returns:
            int: The frame index.
        """
        if isinstance(timecode, ParsedTimecode):
            tc = timecode
        else:
            tc = self.parse_valid_timecode(timecode)

        # Calculate first ignoring dropped frames.
        frame_idx = self._int_fps * tc.total_seconds() + tc.ff

        if self.drop_frame:
            # Frames dropped through start of HH.
            frame_idx -= tc.hh * (MINS_PER_HR // MINS_PER_DROP_BLOCK) * (
                self._drop_frames_per_10mins
            )
            # From start of HH to start of this 10 minute block.
            frame_idx -= (tc.mm // MINS_PER_DROP_BLOCK) * self._drop_frames_per_10mins
            # Since start of this 10 minute block.
            frame_idx -= (tc.mm % MINS_PER_DROP_BLOCK) * self.frames_per_dropped_block

        return frame_idx

    def frames_dropped_before(self, frame_idx: int) -> int:
        """Return how many frame numbers were dropped before the given index.

        Args:
            frame_idx (int): A non-negative frame index.

        Returns:
            int: The count of dropped frame numbers preceding ``frame_idx``,
                always 0 for non-drop standards.
        """
        if not self.drop_frame:
            return 0

        frames_per_non_drop_min = self._int_fps * SECS_PER_MIN
        frames_per_dropped_block = self.frames_per_dropped_block
        frames_per_drop_min = frames_per_non_drop_min - frames_per_dropped_block

        # Full blocks of 10 minutes of timecode, not wall time.
        frames_per_10_mins = (
            MINS_PER_DROP_BLOCK * frames_per_non_drop_min
            - self._drop_frames_per_10mins
        )
        num_complete_10min_blocks, frames_remaining = divmod(
            frame_idx, frames_per_10_mins
        )
        num_dropped = num_complete_10min_blocks * self._drop_frames_per_10mins

        if frames_remaining >= frames_per_non_drop_min:
            # The first minute of each 10 minute block keeps all its frames.
            frames_remaining -= frames_per_non_drop_min

            # Each complete drop minute and the current one drop a block.
            num_complete_drop_mins = frames_remaining // frames_per_drop_min
            num_dropped += (num_complete_drop_mins + 1) * frames_per_dropped_block

        return num_dropped

    def frames_to_tc(self, frame_idx: int) -> ParsedTimecode:
        """Convert a frame index back to timecode.

        Args:
            frame_idx (int): The 0-based frame index.

        Raises:
            InvalidInput: If ``frame_idx`` is negative.

        Returns:
            ParsedTimecode: The timecode of the given frame.
        """
        if frame_idx < 0:
            raise InvalidInput("negative timecode values are not supported")

        framerate = self._int_fps
        frames_per_min = framerate * SECS_PER_MIN
        frames_per_hr = frames_per_min * MINS_PER_HR

        frame_number = frame_idx + self.frames_dropped_before(frame_idx)

        hh, frame_number = divmod(frame_number, frames_per_hr)
        mm, frame_number = divmod(frame_number, frames_per_min)
        ss, ff = divmod(frame_number, framerate)

        return ParsedTimecode(hh, mm, ss, ff)

    #### Wall time conversion

    def frames_to_wall_secs(self, frame_idx: int) -> Fraction:
        """Return the wall time of the given frame index.

        Args:
            frame_idx (int): The frame index, offset from 00:00:00:00.

        Returns:
            Fraction: The exact wall time in seconds.
        """
        return Fraction(frame_idx * self._per_wall_secs, self._frames)

    def wall_secs_between(
        self,
        start: ParsedTimecode | _RawTimecode,
        end: ParsedTimecode | _RawTimecode,
    ) -> Fraction:
        """Return the wall time from ``start`` to ``end``.

        Args:
            start (ParsedTimecode | str | int | float): The start timecode.
            end (ParsedTimecode | str | int | float): The end timecode.

        Returns:
            Fraction: Exact wall seconds, negative if ``end`` precedes
                ``start``.
        """
        start_idx = self.tc_to_frames(start)
        end_idx = self.tc_to_frames(end)
        return self.frames_to_wall_secs(end_idx - start_idx)

    def wall_secs_to_fractional_frames(self, wall_secs: _WallSecs) -> _WallSecs:
        """Return the possibly fractional frame index at ``wall_secs``.

        The value is multiplied before it is divided. Float input gives a float
        result and int or Fraction input gives an exact result. Negative input
        yields a negative index.

        Args:
            wall_secs (float | int | Fraction): Wall time in seconds, offset
                from 00:00:00:00.

        Raises:
            InvalidInput: If ``wall_secs`` is not a finite number, or is too
                large for a float frame index.

        Returns:
            float | Fraction: The fractional frame index.
        """
        _check_finite(wall_secs, "wall_secs")
        if isinstance(wall_secs, int):
            wall_secs = Fraction(wall_secs)
        fractional_frames = wall_secs * self._frames / self._per_wall_secs
        if isinstance(fractional_frames, float) and not math.isfinite(
            fractional_frames
        ):
            raise InvalidInput(f"wall_secs is out of range: {wall_secs!r}")
        return fractional_frames

    def wall_secs_to_frames_left(self, wall_secs: _WallSecs) -> int:
        """Return the index of the closest frame at or before ``wall_secs``."""
        return math.floor(self.wall_secs_to_fractional_frames(wall_secs))

    def wall_secs_to_frames_right(self, wall_secs: _WallSecs) -> int:
        """Return the index of the closest frame at or after ``wall_secs``."""
        return math.ceil(self.wall_secs_to_fractional_frames(wall_secs))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimecodeStandard):
            return NotImplemented
        return (
            self._frames == other._frames
            and self._per_wall_secs == other._per_wall_secs
            and self._drop_frames_per_10mins == other._drop_frames_per_10mins
        )

    def __hash__(self) -> int:
        return hash((self._frames, self._per_wall_secs, self._drop_frames_per_10mins))

    def __repr__(self) -> str:
        """Return the string representation of this TimecodeStandard instance.

        Returns:
            str: The string representation of this TimecodeStandard instance.
        """
        return (
            f"{__class__.__name__}({self._frames}, {self._per_wall_secs}, "
            f"drop_frames_per_10mins={self._drop_frames_per_10mins})"
        )
####

def resolve_standard(frame_rate: str, drop_type: str) -> TimecodeStandard:
    """Resolve a frame rate label and drop type, see TimecodeStandard.from_labels."""
    return TimecodeStandard.from_labels(frame_rate, drop_type)


def _check_finite(value: object, name: str) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, numbers.Real)
        or (not isinstance(value, (int, Fraction)) and not math.isfinite(value))
    ):
        raise InvalidInput(f"{name} must be a finite number: {value!r}")


def wall_secs_to_duration_string(wall_secs: _WallSecs) -> str:
    """Convert wall seconds to a human readable duration string.

    Fractional seconds are rounded to the nearest value, with 0.5 rounding up,
    so 4994.5 seconds is "1h 23m 15s" and 125 seconds is "2m 05s".

    Args:
        wall_secs (float | int | Fraction): Duration in wall seconds.

    Raises:
        InvalidInput: If ``wall_secs`` is not a finite number.

    Returns:
        str: The duration string, prefixed with "(-) " if negative.
    """
    _check_finite(wall_secs, "wall_secs")

    is_negative = wall_secs < 0
    total_secs = math.floor(Fraction(abs(wall_secs)) + Fraction(1, 2))

    hh, total_secs = divmod(total_secs, MINS_PER_HR * SECS_PER_MIN)
    mm, ss = divmod(total_secs, SECS_PER_MIN)

    segments = []
    # Hours only if non-zero, without padding.
    if hh > 0:
        segments.append(f"{hh}h")
    # Minutes are zero padded only after hours.
    if hh > 0:
        segments.append(f"{mm:02d}m")
    elif mm > 0:
        segments.append(f"{mm}m")
    segments.append(f"{ss:02d}s")

    output = " ".join(segments)
    if is_negative and (hh or mm or ss):
        output = "(-) " + output
    return output

#%%
class TimecodeError(Exception):
    """Raised when an error occurred in timecode calculation."""


class InvalidInput(TimecodeError, ValueError):
    """Raised when an input value is malformed, unsupported or out of range."""
