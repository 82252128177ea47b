"""
Terminal rendering of EDL summaries and the cue sheet using Rich.
"""

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from cuerator.core.console import get_console
from cuerator.domain.edl.models import SessionSummary
from cuerator.domain.edl.timecode import FRAME_RATE, frames_to_hms
from cuerator.domain.enrichment.models import (
    COMMERCIAL_RECORDING,
    COMMISSIONED,
    CueSheetEntry,
)

from .exporters import DEFAULT_MUSIC_USAGE

# Row highlight per music source
SOURCE_STYLES = {
    COMMERCIAL_RECORDING: "yellow",
    COMMISSIONED: "cyan",
}


def _cell(value: Optional[str]) -> Text:
    # Clip names may contain brackets that Rich would read as markup
    return Text(value or "")


def build_summary_table(summaries: Sequence[SessionSummary]) -> Table:
    """Table of the processed EDL files and their session names."""
    table = Table(title="Processed EDL Summary", title_justify="left")
    table.add_column("Session", style="bold")
    table.add_column("File")
    for summary in summaries:
        table.add_row(_cell(summary.session_name), _cell(summary.file_name))
    return table


def build_cue_sheet_table(
    entries: Sequence[CueSheetEntry],
    music_usage: str = DEFAULT_MUSIC_USAGE,
    frame_rate: int = FRAME_RATE,
) -> Table:
    """Table of the cue sheet, one row per entry in the given order."""
    table = Table(title="Processed Cue Sheet", title_justify="left", show_lines=True)
    table.add_column("Music Title", overflow="fold")
    table.add_column("Music Source")
    table.add_column("Composer(s)", overflow="fold")
    table.add_column("Performer(s)", overflow="fold")
    table.add_column("Publisher(s)", overflow="fold")
    table.add_column("Catalogue Code")
    table.add_column("Track No.")
    table.add_column("Duration", no_wrap=True)
    table.add_column("Music Usage", no_wrap=True)
    table.add_column("Vocal/Instrumental", no_wrap=True)
    table.add_column("Source Filename", overflow="fold")

    for entry in entries:
        table.add_row(
            _cell(entry.title),
            _cell(entry.music_source),
            _cell("\n".join(entry.composers)),
            _cell("\n".join(entry.performers)),
            _cell(entry.publisher),
            _cell(entry.catalogue_code),
            _cell(entry.track_no),
            frames_to_hms(entry.total_duration_frames, frame_rate),
            _cell(music_usage),
            _cell(entry.vocal_or_instrumental),
            _cell(entry.original_name),
            style=SOURCE_STYLES.get(entry.music_source or ""),
        )
    return table


def render_report(
    summaries: Sequence[SessionSummary],
    entries: Sequence[CueSheetEntry],
    music_usage: str = DEFAULT_MUSIC_USAGE,
    frame_rate: int = FRAME_RATE,
    console: Optional[Console] = None,
) -> None:
    """Print the EDL summary and the cue sheet."""
    console = console or get_console()
    if summaries:
        console.print(build_summary_table(summaries))
    console.print(build_cue_sheet_table(entries, music_usage, frame_rate))
