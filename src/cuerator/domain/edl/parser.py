"""
EDL text export parsing.

Extracts the session name and clip records from the tabular text a DAW
writes when exporting session info. Lines that do not match the clip grammar
(headers, comments, blank lines) are ignored.
"""

import re
from pathlib import Path
from typing import Iterable, Iterator, Optional

from loguru import logger

from .models import UNKNOWN_SESSION, UNMUTED, ClipRecord, ParsedEDL, SessionSummary
from .timecode import FRAME_RATE, timecode_to_frames

SESSION_HEADER = "SESSION NAME:"

# <channel> <event> <clip name> <start> <end> <duration> <Muted|Unmuted>
CLIP_LINE_RE = re.compile(
    r"^\d+\s+\d+\s+(?P<name>.+?)\s+"
    r"(?P<start>[\d:]{11})\s+(?P<end>[\d:]{11})\s+(?P<duration>[\d:]{11})\s+"
    r"(?P<state>Muted|Unmuted)$"
)


def parse_session_name(lines: Iterable[str]) -> str:
    """Return the session name from the first `SESSION NAME:` header line.

    Args:
        lines: Raw (untrimmed) lines of the export

    Returns:
        Session name, or "Unknown Session" when no header line exists
    """
    for line in lines:
        if line.startswith(SESSION_HEADER):
            return line.replace(SESSION_HEADER, "", 1).strip()
    return UNKNOWN_SESSION


def parse_clip_line(line: str, frame_rate: int = FRAME_RATE) -> Optional[ClipRecord]:
    """Parse one line of the export into a clip record.

    The duration column is matched but not used; durations come from the
    start and end timecodes.

    Returns:
        ClipRecord, or None if the line is not a clip line
    """
    match = CLIP_LINE_RE.match(line.strip())
    if not match:
        return None

    return ClipRecord(
        name=match.group("name"),
        start_frames=timecode_to_frames(match.group("start"), frame_rate),
        end_frames=timecode_to_frames(match.group("end"), frame_rate),
        state=match.group("state"),
    )


def iter_clip_records(
    lines: Iterable[str], frame_rate: int = FRAME_RATE
) -> Iterator[ClipRecord]:
    """Yield every clip record in line order, muted ones included."""
    for line in lines:
        clip = parse_clip_line(line, frame_rate)
        if clip is not None:
            yield clip


def parse_edl_text(
    text: str, file_name: str = "", frame_rate: int = FRAME_RATE
) -> ParsedEDL:
    """Parse the full text of one EDL export.

    Args:
        text: File contents
        file_name: Name reported in the session summary
        frame_rate: Frames per second of the timeline

    Returns:
        ParsedEDL with the session summary and all clip records
    """
    lines = text.split("\n")
    session_name = parse_session_name(lines)
    clips = list(iter_clip_records(lines, frame_rate))

    unmuted = sum(1 for clip in clips if clip.state == UNMUTED)
    logger.debug(
        f"Parsed {file_name or '<text>'}: session={session_name!r}, "
        f"{len(clips)} clips ({unmuted} unmuted)"
    )

    return ParsedEDL(
        summary=SessionSummary(file_name=file_name, session_name=session_name),
        clips=clips,
    )


def read_edl_file(
    path: Path, frame_rate: int = FRAME_RATE, encoding: str = "utf-8"
) -> ParsedEDL:
    """Read and parse an EDL file as plain text, whatever its extension.

    Undecodable bytes are replaced rather than failing the file.

    Raises:
        OSError: If the file cannot be read
    """
    text = path.read_text(encoding=encoding, errors="replace")
    return parse_edl_text(text, file_name=path.name, frame_rate=frame_rate)
