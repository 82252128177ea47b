"""EDL domain - parsing DAW EDL exports into per-track durations.

This domain handles:
- Timecode <-> frame conversion
- Clip name normalization into canonical track identities
- Clip record extraction from EDL text
- Interval merging and per-track duration aggregation
"""

from .aggregation import aggregate_clips, aggregate_edls, merge_intervals, merged_duration
from .exceptions import EDLError, EmptyResultError, MalformedTimecodeError
from .models import ClipRecord, ParsedEDL, SessionSummary, TrackDuration
from .naming import canonical_identity, clean_display_name
from .parser import parse_edl_text, read_edl_file
from .timecode import FRAME_RATE, frames_to_hms, timecode_to_frames

__all__ = [
    "aggregate_clips",
    "aggregate_edls",
    "merge_intervals",
    "merged_duration",
    "EDLError",
    "EmptyResultError",
    "MalformedTimecodeError",
    "ClipRecord",
    "ParsedEDL",
    "SessionSummary",
    "TrackDuration",
    "canonical_identity",
    "clean_display_name",
    "parse_edl_text",
    "read_edl_file",
    "FRAME_RATE",
    "frames_to_hms",
    "timecode_to_frames",
]
