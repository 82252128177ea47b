"""
Timecode conversion for EDL clip positions.

Timecodes are `H:M:S:F` strings at a fixed frame rate. Internally every
position is an integer frame count.
"""

import math

from loguru import logger

from .exceptions import MalformedTimecodeError

FRAME_RATE = 25


def parse_timecode(timecode: str) -> tuple[int, int, int, int]:
    """Split a timecode into (hours, minutes, seconds, frames).

    Raises:
        MalformedTimecodeError: If there are not exactly four integer fields
    """
    parts = timecode.split(":")
    if len(parts) != 4:
        raise MalformedTimecodeError(timecode)
    try:
        hours, minutes, seconds, frames = (int(part) for part in parts)
    except ValueError as e:
        raise MalformedTimecodeError(timecode) from e
    return hours, minutes, seconds, frames


def timecode_to_frames(
    timecode: str, frame_rate: int = FRAME_RATE, strict: bool = False
) -> int:
    """Convert an `H:M:S:F` timecode to an absolute frame count.

    Frame values beyond the frame rate are not validated and still convert
    linearly.

    Args:
        timecode: Timecode string, e.g. "01:00:04:24"
        frame_rate: Frames per second of the timeline
        strict: Raise instead of falling back to 0 for malformed input

    Returns:
        Frame count ((h * 3600 + m * 60 + s) * frame_rate) + f. A malformed
        timecode yields 0 unless strict is set.

    Raises:
        MalformedTimecodeError: If strict and the timecode is not four
            integer fields
    """
    try:
        hours, minutes, seconds, frames = parse_timecode(timecode)
    except MalformedTimecodeError:
        if strict:
            raise
        # Known weak spot: a malformed position silently becomes frame 0
        logger.warning(f"Malformed timecode {timecode!r}, using 0 frames")
        return 0

    return (hours * 3600 + minutes * 60 + seconds) * frame_rate + frames


def frames_to_hms(total_frames: float, frame_rate: int = FRAME_RATE) -> str:
    """Format a frame count as `HH:MM:SS` for reports.

    Rounds to the nearest whole second and drops the frame remainder, so
    the result is not a round-trip format.

    Args:
        total_frames: Duration in frames
        frame_rate: Frames per second of the timeline

    Returns:
        Zero-padded "HH:MM:SS" ("00:00:00" for NaN or negative input)
    """
    if total_frames is None or math.isnan(total_frames) or total_frames < 0:
        return "00:00:00"

    # Half-up rounding, not banker's rounding
    total_seconds = math.floor(total_frames / frame_rate + 0.5)
    seconds = total_seconds % 60
    total_minutes = total_seconds // 60
    minutes = total_minutes % 60
    hours = total_minutes // 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
