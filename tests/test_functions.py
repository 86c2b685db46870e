"""Tests for the host function layer."""

import logging

import pytest

from tcwall import InvalidInput
from tcwall import functions


class TestExamples:
    """The documented host function examples."""

    def test_tc_to_wall_secs(self):
        assert functions.tc_to_wall_secs("00:00:01:02", "50.00", "non-drop") == 1.04

    def test_wall_secs_between_tcs(self):
        result = functions.wall_secs_between_tcs(
            "00:00:01:03", "00:02:05:11", "24.00", "non-drop"
        )
        assert result == pytest.approx(124.3333333)

    def test_wall_secs_between_tcs_is_signed(self):
        result = functions.wall_secs_between_tcs(
            "00:02:05:11", "00:00:01:03", "24.00", "non-drop"
        )
        assert result == pytest.approx(-124.3333333)

    def test_wall_secs_to_durstr(self):
        assert functions.wall_secs_to_durstr(3765) == "1h 02m 45s"

    def test_wall_secs_to_tc(self):
        assert functions.wall_secs_to_tc_left(1.041, "50.00", "non-drop") == "00:00:01:02"
        assert functions.wall_secs_to_tc_right(1.041, "50.00", "non-drop") == "00:00:01:03"

    def test_tc_to_frame_idx(self):
        assert functions.tc_to_frame_idx("00:00:01:02", "50.00", "non-drop") == 52
        assert functions.tc_to_frame_idx(4332211, "25.00", "non-drop") == 410061

    def test_frame_idx_to_tc(self):
        assert functions.frame_idx_to_tc(52, "50.00", "non-drop") == "00:00:01:02"
        assert functions.frame_idx_to_tc(52.0, "50.00", "non-drop") == "00:00:01:02"

    def test_frame_idx_to_wall_secs(self):
        assert functions.frame_idx_to_wall_secs(52, "50.00", "non-drop") == 1.04

    def test_wall_secs_to_frame_idx(self):
        assert functions.wall_secs_to_frame_idx_left(1.041, "50.00", "non-drop") == 52
        assert functions.wall_secs_to_frame_idx_right(1.041, "50.00", "non-drop") == 53

    def test_negative_wall_secs_give_negative_frame_idx(self):
        assert functions.wall_secs_to_frame_idx_left(-1.041, "50.00", "non-drop") == -53
        assert functions.wall_secs_to_frame_idx_right(-1.041, "50.00", "non-drop") == -52


class TestDropFrame:
    """Drop frame behavior through the host functions."""

    def test_dropped_frame_numbers_have_no_index(self):
        assert functions.frame_idx_to_tc(1799, "29.97", "drop") == "00:00:59:29"
        assert functions.frame_idx_to_tc(1800, "29.97", "drop") == "00:01:00:02"
        assert functions.tc_to_frame_idx("00:01:00;02", "29.97", "drop") == 1800

    def test_output_uses_colons(self):
        assert functions.frame_idx_to_tc(17982, "29.970", "drop") == "00:10:00:00"

    def test_one_hour_of_drop_frame_timecode_is_almost_one_hour(self):
        wall_secs = functions.tc_to_wall_secs("01:00:00;00", "29.97", "drop")
        assert wall_secs == pytest.approx(3599.9964, abs=1e-4)

    def test_wall_secs_to_tc_skips_dropped_frames(self):
        wall_secs = functions.frame_idx_to_wall_secs(1800, "29.97", "drop")
        assert functions.wall_secs_to_tc_left(wall_secs, "29.97", "drop") == "00:01:00:02"


class TestTcError:
    """The non-raising validity check."""

    def test_valid_timecode(self):
        assert functions.tc_error("01:02:03:04", "23.976", "non-drop") == ""
        assert functions.tc_error("00:00:00:00", "29.97", "drop") == ""
        assert functions.tc_error(4332211, "25.00", "non-drop") == ""

    @pytest.mark.parametrize(
        "timecode, frame_rate, drop_type, message",
        [
            ("00:01:00:00", "29.97", "drop", "dropped frame number"),
            ("00:00:00:24", "24.00", "non-drop", "FF must be in range 00-23"),
            ("00:00:00;00", "24.00", "non-drop", "semi-colon"),
            ("0:00:00:00", "24.00", "non-drop", "HH:MM:SS:FF"),
            ("00:00:00:00", "24", "non-drop", "2 or 3 digits"),
            ("00:00:00:00", "24.00", "drop", "must be non-drop"),
            ("00:00:00:00", "29.97", "dropframe", "drop_type"),
            (None, "24.00", "non-drop", "plain text value"),
        ],
    )
    def test_invalid_timecode(self, timecode, frame_rate, drop_type, message):
        error = functions.tc_error(timecode, frame_rate, drop_type)
        assert message in error

    def test_rejection_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="tcwall.functions")
        functions.tc_error("00:01:00:00", "29.97", "drop")
        assert "Rejected timecode" in caplog.text


class TestRejections:
    """Every other host function raises InvalidInput."""

    def test_dropped_frame_timecode(self):
        with pytest.raises(InvalidInput):
            functions.tc_to_frame_idx("00:01:00:00", "29.97", "drop")

    @pytest.mark.parametrize("frame_idx", [-1, 1.5, "52", None, True])
    def test_frame_idx_to_wall_secs(self, frame_idx):
        with pytest.raises(InvalidInput, match="frame_idx must be non-negative integer"):
            functions.frame_idx_to_wall_secs(frame_idx, "50.00", "non-drop")

    def test_frame_idx_to_tc_negative(self):
        with pytest.raises(InvalidInput, match="negative timecode"):
            functions.frame_idx_to_tc(-1, "50.00", "non-drop")

    def test_frame_idx_to_tc_not_integer(self):
        with pytest.raises(InvalidInput, match="frame_idx must be non-negative integer"):
            functions.frame_idx_to_tc(1.5, "50.00", "non-drop")

    def test_wall_secs_to_tc_negative(self):
        with pytest.raises(InvalidInput, match="negative timecode"):
            functions.wall_secs_to_tc_left(-0.01, "50.00", "non-drop")
        assert functions.wall_secs_to_tc_right(-0.01, "50.00", "non-drop") == "00:00:00:00"

    @pytest.mark.parametrize("wall_secs", [float("nan"), float("inf"), "1.0"])
    def test_wall_secs_must_be_finite(self, wall_secs):
        with pytest.raises(InvalidInput, match="finite number"):
            functions.wall_secs_to_frame_idx_left(wall_secs, "50.00", "non-drop")
        with pytest.raises(InvalidInput, match="finite number"):
            functions.wall_secs_to_durstr(wall_secs)

    def test_wall_secs_overflowing_the_frame_index(self):
        with pytest.raises(InvalidInput, match="out of range"):
            functions.wall_secs_to_frame_idx_left(1e306, "59.94", "non-drop")
        with pytest.raises(InvalidInput, match="out of range"):
            functions.wall_secs_to_tc_right(1e306, "59.94", "non-drop")

    def test_unsupported_frame_rate(self):
        with pytest.raises(InvalidInput, match="Unsupported frame rate"):
            functions.tc_to_wall_secs("00:00:00:00", "26.00", "non-drop")


def test_functions_registry():
    assert set(functions.FUNCTIONS) == {
        "FRAMEIDX_TO_TC",
        "FRAMEIDX_TO_WALL_SECS",
        "TC_ERROR",
        "TC_TO_FRAMEIDX",
        "TC_TO_WALL_SECS",
        "WALL_SECS_BETWEEN_TCS",
        "WALL_SECS_TO_DURSTR",
        "WALL_SECS_TO_FRAMEIDX_LEFT",
        "WALL_SECS_TO_FRAMEIDX_RIGHT",
        "WALL_SECS_TO_TC_LEFT",
        "WALL_SECS_TO_TC_RIGHT",
    }
    assert functions.FUNCTIONS["TC_TO_FRAMEIDX"]("00:00:01:02", "50.00", "non-drop") == 52
