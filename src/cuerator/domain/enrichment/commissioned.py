"""
Post-processing for commissioned cues.

Commissioned cue filenames follow a fixed convention, e.g.
`MKR11_COOK_A_BREEZE_811_MS_FULL`. Their report title is derived from the
filename, and composer names from the database ("Last First") are flipped
to "First Last".
"""

import re
from typing import Sequence

from .models import COMMISSIONED, CueSheetEntry
from .patches import MetadataPatch

DEFAULT_PREFIX = "MKR"

# Composer initials suffix with optional full-mix marker
_SUFFIX_RE = re.compile(r"_(MS|CT|AA)(_FULL)?$", re.IGNORECASE)

# Words kept upper-case in derived titles
UPPERCASE_WORDS = frozenset({"POS"})


def parse_commissioned_title(filename: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Derive a report title from a commissioned cue filename.

    Examples:
        >>> parse_commissioned_title("MKR11_COOK_A_BREEZE_811_MS_FULL")
        'Cook A Breeze 811'
        >>> parse_commissioned_title("MKR3_POS_REVEAL_CT")
        'POS Reveal'
    """
    core = re.sub(rf"^{re.escape(prefix)}\d+_", "", filename, count=1, flags=re.IGNORECASE)
    core = _SUFFIX_RE.sub("", core, count=1)

    words = []
    for word in core.replace("_", " ").lower().split(" "):
        if word.upper() in UPPERCASE_WORDS:
            words.append(word.upper())
        else:
            words.append(word[:1].upper() + word[1:])
    return " ".join(words)


def format_composer_name(name: str) -> str:
    """Reorder "Last First" to "First Last" when there are exactly two names.

    Examples:
        >>> format_composer_name("Smith John")
        'John Smith'
        >>> format_composer_name("Mary Ann Jones")
        'Mary Ann Jones'
    """
    parts = name.strip().split()
    if len(parts) == 2:
        return f"{parts[1]} {parts[0]}"
    return name


def commissioned_patch(
    entries: Sequence[CueSheetEntry], prefix: str = DEFAULT_PREFIX
) -> MetadataPatch:
    """Build the title/composer fix-ups for every commissioned entry."""
    patch: MetadataPatch = {}
    for entry in entries:
        if entry.music_source != COMMISSIONED:
            continue
        updates = {"title": parse_commissioned_title(entry.original_name, prefix)}
        if entry.composers:
            updates["composers"] = tuple(
                format_composer_name(name) for name in entry.composers
            )
        patch[entry.identity] = updates
    return patch
