"""
Cue sheet export.

Sorts entries for presentation and serializes them to CSV with every cell
quoted.
"""

import csv
import io
from pathlib import Path
from typing import Iterable, List, Sequence

from cuerator.domain.edl.timecode import FRAME_RATE, frames_to_hms
from cuerator.domain.enrichment.models import CueSheetEntry

CSV_HEADERS = (
    "Music Title",
    "Music Source",
    "Composer(s)",
    "Performer(s)",
    "Publisher(s)",
    "Catalogue Code",
    "Track No.",
    "Duration",
    "Music Usage",
    "Vocal/Instrumental",
    "Source Filename",
)

DEFAULT_MUSIC_USAGE = "Background"


def sort_entries(entries: Iterable[CueSheetEntry]) -> List[CueSheetEntry]:
    """Sort entries by title, ignoring case."""
    return sorted(entries, key=lambda entry: (entry.title.casefold(), entry.title))


def entry_to_row(
    entry: CueSheetEntry,
    music_usage: str = DEFAULT_MUSIC_USAGE,
    frame_rate: int = FRAME_RATE,
) -> List[str]:
    """Flatten an entry into the CSV column order."""
    return [
        entry.title,
        entry.music_source or "",
        ", ".join(entry.composers),
        ", ".join(entry.performers),
        entry.publisher or "",
        entry.catalogue_code or "",
        entry.track_no or "",
        frames_to_hms(entry.total_duration_frames, frame_rate),
        music_usage,
        entry.vocal_or_instrumental or "",
        entry.original_name,
    ]


def export_csv(
    entries: Sequence[CueSheetEntry],
    music_usage: str = DEFAULT_MUSIC_USAGE,
    frame_rate: int = FRAME_RATE,
) -> str:
    """Serialize entries as CSV text.

    The header row is plain; every data cell is quoted with embedded quotes
    doubled. Rows are joined with newlines, with no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for entry in entries:
        writer.writerow(entry_to_row(entry, music_usage, frame_rate))

    lines = [",".join(CSV_HEADERS)]
    body = buffer.getvalue()
    if body:
        lines.append(body[:-1])
    return "\n".join(lines)


def write_csv(
    entries: Sequence[CueSheetEntry],
    output_path: Path,
    music_usage: str = DEFAULT_MUSIC_USAGE,
    frame_rate: int = FRAME_RATE,
) -> int:
    """Write the cue sheet CSV to a file.

    Returns:
        Number of rows written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(export_csv(entries, music_usage, frame_rate))
    return len(entries)
