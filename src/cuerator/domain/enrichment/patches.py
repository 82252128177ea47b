"""
Metadata patches.

Every enrichment pass returns a patch (identity -> field updates) instead of
mutating entries. apply_patches merges them in pass order, later patches
overriding earlier ones field by field.
"""

from dataclasses import fields, replace
from typing import Any, Iterable, Mapping, Sequence

from loguru import logger

from .models import CueSheetEntry

MetadataPatch = dict[str, dict[str, Any]]

# Fields a patch may set; identity, original name and duration are fixed
PATCHABLE_FIELDS = frozenset(
    f.name
    for f in fields(CueSheetEntry)
    if f.name not in ("identity", "original_name", "total_duration_frames")
)

_TUPLE_FIELDS = ("composers", "performers")


def _coerce(field_name: str, value: Any) -> Any:
    if field_name in _TUPLE_FIELDS:
        return tuple(value or ())
    return value


def validate_patch(patch: Mapping[str, Mapping[str, Any]]) -> None:
    """Check that a patch only touches patchable fields.

    Raises:
        ValueError: If a field is not patchable
    """
    for identity, updates in patch.items():
        unknown = set(updates) - PATCHABLE_FIELDS
        if unknown:
            raise ValueError(
                f"Patch for {identity!r} sets unknown fields: {sorted(unknown)}"
            )


def merge_patches(patches: Iterable[Mapping[str, Mapping[str, Any]]]) -> MetadataPatch:
    """Combine patches into one, later updates winning per field."""
    merged: MetadataPatch = {}
    for patch in patches:
        validate_patch(patch)
        for identity, updates in patch.items():
            merged.setdefault(identity, {}).update(updates)
    return merged


def apply_patches(
    entries: Sequence[CueSheetEntry],
    patches: Iterable[Mapping[str, Mapping[str, Any]]],
) -> list[CueSheetEntry]:
    """Return new entries with the patches applied in order.

    Patch keys that match no entry are ignored.

    Args:
        entries: Current entries
        patches: Patches in pass order

    Returns:
        New list of entries, same order as the input

    Raises:
        ValueError: If a patch sets a field that is not patchable
    """
    merged = merge_patches(patches)
    known = {entry.identity for entry in entries}
    for identity in merged.keys() - known:
        logger.debug(f"Ignoring patch for unknown track {identity!r}")

    result = []
    for entry in entries:
        updates = merged.get(entry.identity)
        if updates:
            entry = replace(
                entry,
                **{name: _coerce(name, value) for name, value in updates.items()},
            )
        result.append(entry)
    return result
