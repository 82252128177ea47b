"""Tests for timecode <-> frame conversion."""

import math

import pytest

from cuerator.domain.edl.exceptions import MalformedTimecodeError
from cuerator.domain.edl.timecode import (
    frames_to_hms,
    parse_timecode,
    timecode_to_frames,
)


class TestTimecodeToFrames:
    """Tests for timecode_to_frames."""

    @pytest.mark.parametrize(
        "timecode,expected",
        [
            ("00:00:00:00", 0),
            ("00:00:01:00", 25),
            ("00:01:00:00", 1500),
            ("01:00:00:00", 90000),
            ("01:00:04:24", 90124),
            ("10:59:59:24", ((10 * 3600 + 59 * 60 + 59) * 25) + 24),
        ],
    )
    def test_frame_math(self, timecode, expected):
        """Frames are ((h*3600 + m*60 + s) * 25) + f."""
        assert timecode_to_frames(timecode) == expected

    def test_out_of_range_frames_convert_linearly(self):
        """Frame values above the frame rate are not validated."""
        assert timecode_to_frames("00:00:00:30") == 30
        assert timecode_to_frames("00:00:01:30") == 55

    def test_custom_frame_rate(self):
        """Frame rate is a parameter."""
        assert timecode_to_frames("00:00:02:10", frame_rate=30) == 70

    @pytest.mark.parametrize("timecode", ["00:00:00", "01:00:00:00:00", "", "garbage"])
    def test_wrong_field_count_falls_back_to_zero(self, timecode):
        """Malformed timecodes degrade to 0 frames by default."""
        assert timecode_to_frames(timecode) == 0

    def test_non_integer_field_falls_back_to_zero(self):
        """Non-numeric fields count as malformed."""
        assert timecode_to_frames("01:xx:00:00") == 0

    def test_strict_mode_raises(self):
        """Strict decoding signals malformed input."""
        with pytest.raises(MalformedTimecodeError) as exc_info:
            timecode_to_frames("01:00:00", strict=True)
        assert exc_info.value.timecode == "01:00:00"

    def test_parse_timecode_fields(self):
        """parse_timecode returns the four fields as integers."""
        assert parse_timecode("01:02:03:04") == (1, 2, 3, 4)


class TestFramesToHms:
    """Tests for frames_to_hms."""

    def test_zero(self):
        assert frames_to_hms(0) == "00:00:00"

    def test_whole_seconds(self):
        assert frames_to_hms(250) == "00:00:10"

    def test_rounds_to_nearest_second(self):
        """Frame remainders round to the nearest second, halves up."""
        assert frames_to_hms(12) == "00:00:00"
        assert frames_to_hms(12.5) == "00:00:01"
        assert frames_to_hms(13) == "00:00:01"
        assert frames_to_hms(37) == "00:00:01"
        assert frames_to_hms(38) == "00:00:02"

    def test_hours_and_minutes(self):
        frames = ((2 * 3600) + (3 * 60) + 4) * 25
        assert frames_to_hms(frames) == "02:03:04"

    def test_rounding_carries_into_minutes(self):
        """59.6 seconds rounds up to a full minute."""
        assert frames_to_hms(59 * 25 + 15) == "00:01:00"

    @pytest.mark.parametrize("value", [-1, -250, math.nan])
    def test_invalid_input_returns_zero(self, value):
        """Negative and NaN durations are reported as zero."""
        assert frames_to_hms(value) == "00:00:00"

    def test_not_an_inverse_of_decode(self):
        """Encoding drops the frame field."""
        assert frames_to_hms(timecode_to_frames("00:00:10:03")) == "00:00:10"
