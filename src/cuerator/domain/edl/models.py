"""
EDL domain models.

Contains data structures for parsed EDL files, clip records and merged
per-track durations.
"""

from dataclasses import dataclass, field

MUTED = "Muted"
UNMUTED = "Unmuted"

UNKNOWN_SESSION = "Unknown Session"


@dataclass(frozen=True)
class ClipRecord:
    """One clip line of an EDL export.

    Start and end are absolute frame counts on the session timeline.
    """

    name: str  # Raw clip name as exported
    start_frames: int
    end_frames: int
    state: str  # 'Muted' | 'Unmuted'

    @property
    def is_muted(self) -> bool:
        return self.state == MUTED


@dataclass(frozen=True)
class SessionSummary:
    """Informational summary of one input file."""

    file_name: str
    session_name: str


@dataclass(frozen=True)
class ParsedEDL:
    """Result of parsing one EDL file."""

    summary: SessionSummary
    clips: list[ClipRecord] = field(default_factory=list)


@dataclass(frozen=True)
class TrackDuration:
    """Merged on-timeline duration of one canonical track identity."""

    identity: str  # Canonical identity (aggregation key)
    display_name: str  # Clean name of the first clip seen for this identity
    total_frames: int
    segment_count: int = 1  # Number of merged regions that make up the total
