"""
Cue sheet record model.

A CueSheetEntry starts as a merged track duration with empty metadata and is
filled in by metadata patches.
"""

from dataclasses import dataclass
from typing import Optional

from cuerator.domain.edl.models import TrackDuration

# Music source categories
PRODUCTION_LIBRARY = "Production Music (library)"
COMMERCIAL_RECORDING = "Commercial Recording"
COMMISSIONED = "Commissioned"

MUSIC_SOURCES = (PRODUCTION_LIBRARY, COMMERCIAL_RECORDING, COMMISSIONED)


@dataclass(frozen=True)
class CueSheetEntry:
    """One distinct music cue on the cue sheet."""

    identity: str  # Canonical identity the durations were merged under
    original_name: str  # Clean display name of the first clip seen
    total_duration_frames: int
    title: str
    music_source: Optional[str] = None  # One of MUSIC_SOURCES once enriched
    composers: tuple[str, ...] = ()
    performers: tuple[str, ...] = ()
    publisher: Optional[str] = None
    catalogue_code: Optional[str] = None
    track_no: Optional[str] = None
    vocal_or_instrumental: str = ""

    @property
    def needs_composers(self) -> bool:
        return not self.composers


def entry_from_duration(duration: TrackDuration) -> CueSheetEntry:
    """Create an un-enriched entry; the title defaults to the display name."""
    return CueSheetEntry(
        identity=duration.identity,
        original_name=duration.display_name,
        total_duration_frames=duration.total_frames,
        title=duration.display_name,
    )
