"""
Per-track duration aggregation.

Groups unmuted clips of every parsed EDL by canonical identity and merges
each group's intervals into one on-timeline duration. Overlapping clips and
clips separated by a gap of at most `tolerance` frames count once.
"""

from typing import Callable, Iterable, Sequence

from loguru import logger

from .exceptions import EmptyResultError
from .models import ClipRecord, ParsedEDL, TrackDuration
from .naming import canonical_identity, clean_display_name

Interval = tuple[int, int]

# EDL exports often split one performance into regions with a one-frame seam
DEFAULT_MERGE_TOLERANCE = 1


def merge_intervals(
    intervals: Iterable[Interval], tolerance: int = DEFAULT_MERGE_TOLERANCE
) -> list[Interval]:
    """Merge overlapping or near-adjacent intervals.

    An interval whose start is at most `tolerance` frames after the end of
    the current window extends that window. Reversed intervals (start after
    end) are swapped before merging.

    Args:
        intervals: (start, end) frame pairs in any order
        tolerance: Largest gap in frames that still joins two intervals

    Returns:
        Disjoint windows sorted by start

    Examples:
        >>> merge_intervals([(100, 199), (0, 99)])
        [(0, 199)]
        >>> merge_intervals([(0, 99), (102, 199)])
        [(0, 99), (102, 199)]
    """
    ordered = sorted(
        (min(start, end), max(start, end)) for start, end in intervals
    )
    if not ordered:
        return []

    windows: list[Interval] = []
    current_start, current_end = ordered[0]
    for start, end in ordered[1:]:
        if start <= current_end + tolerance:
            current_end = max(current_end, end)
        else:
            windows.append((current_start, current_end))
            current_start, current_end = start, end
    windows.append((current_start, current_end))
    return windows


def merged_duration(
    intervals: Iterable[Interval], tolerance: int = DEFAULT_MERGE_TOLERANCE
) -> int:
    """Total length in frames of the merged intervals (end - start per window)."""
    return sum(end - start for start, end in merge_intervals(intervals, tolerance))


def aggregate_clips(
    clips: Iterable[ClipRecord],
    tolerance: int = DEFAULT_MERGE_TOLERANCE,
    identity_func: Callable[[str], str] = canonical_identity,
    display_func: Callable[[str], str] = clean_display_name,
) -> list[TrackDuration]:
    """Aggregate clips into one duration record per canonical identity.

    Muted clips are discarded. The display name of an identity is the clean
    name of the first clip seen for it; records come back in first-seen
    order.

    Args:
        clips: Clip records in processing order (file order, then line order)
        tolerance: Merge tolerance in frames
        identity_func: Raw name -> aggregation key
        display_func: Raw name -> display name

    Returns:
        TrackDuration records, one per identity with at least one unmuted clip
    """
    groups: dict[str, list[Interval]] = {}
    display_names: dict[str, str] = {}

    for clip in clips:
        if clip.is_muted:
            continue

        identity = identity_func(clip.name)
        if identity not in display_names:
            display_names[identity] = display_func(clip.name)
        groups.setdefault(identity, []).append((clip.start_frames, clip.end_frames))

    durations = []
    for identity, intervals in groups.items():
        windows = merge_intervals(intervals, tolerance)
        total = sum(end - start for start, end in windows)
        logger.debug(
            f"{identity!r}: {len(intervals)} clips -> {len(windows)} regions, "
            f"{total} frames"
        )
        durations.append(
            TrackDuration(
                identity=identity,
                display_name=display_names[identity],
                total_frames=total,
                segment_count=len(windows),
            )
        )

    return durations


def aggregate_edls(
    parsed: Sequence[ParsedEDL], tolerance: int = DEFAULT_MERGE_TOLERANCE
) -> list[TrackDuration]:
    """Aggregate the clips of several parsed EDL files as one timeline.

    Raises:
        EmptyResultError: If no unmuted clip exists in any file
    """
    clips = (clip for edl in parsed for clip in edl.clips)
    durations = aggregate_clips(clips, tolerance)

    if not durations:
        raise EmptyResultError()

    logger.info(
        f"Aggregated {len(durations)} tracks from {len(parsed)} EDL file(s)"
    )
    return durations
