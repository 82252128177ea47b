"""
Clip name normalization.

Two transforms over a raw clip name:
- clean_display_name: light cleanup, used as the human-facing source filename
- canonical_identity: aggressive stripping of version/stem/format noise so that
  takes and renders of one cue collapse to a single aggregation key

The identity rules are data (an ordered list of pattern -> replacement) and are
re-applied until the name stops changing.
"""

import re
from typing import NamedTuple, Optional

# Render suffix appended by the DAW when a region is re-rendered
RENDER_SUFFIX_MARKER = ".new."

AUDIO_EXTENSIONS = (".wav", ".mp3", ".aif", ".aiff")

# Trailing version/stem/mix descriptors (anchored at the end of the name)
DESCRIPTOR_SUFFIXES = (
    "INSTRUMENTAL",
    "INST",
    "UNDERSCORE",
    r"NO[\s_]?VOX",
    "VOCALS?",
    "REMIX",
    "ALT",
    "LITE",
    "FULL",
    "KEYS",
    "FX",
    "DRUMS",
    "BASS",
    "SFX",
    "CHOIR",
    "PNO",
    "STRINGS",
    "LEAD",
    "MIX",
    "FULLMIX",
    "LITEMIX",
    "DRUMnBASS",
    "BIGnSPARSEmix",
    "STEM",
    "VERSION",
    "EDIT",
    "ATMOS",
    "DRM",
    "GTR",
    "PIANO",
    "SYNTH",
    "STRIP",
)

# " - <Descriptor>" phrases at the end of the name
DESCRIPTOR_PHRASES = (
    "Instrumental",
    "Vocal",
    "Remix",
    "Underscore",
    "Lite",
    "Full",
    "Stem",
    "Edit",
)

# Descriptors removed anywhere in the name when they stand alone as words
STANDALONE_DESCRIPTORS = (r"full", r"lite", r"only\w+", r"alt", r"stems", r"drums", r"bass")

_FLAGS = re.IGNORECASE


class RewriteRule(NamedTuple):
    """One step of the identity pipeline."""

    name: str
    pattern: re.Pattern
    replacement: str = ""
    count: int = 0  # 0 replaces every match

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text, count=self.count)


IDENTITY_RULES: tuple[RewriteRule, ...] = (
    RewriteRule("render_suffix", re.compile(r"\.new\..*"), count=1),
    RewriteRule(
        "audio_extension",
        re.compile(r"\.(wav|mp3|aif|aiff)$", _FLAGS),
        count=1,
    ),
    RewriteRule("copy_marker", re.compile(r"\.Copy\.\d+")),
    RewriteRule("annotation", re.compile(r"\s*[\(\[].*?[\)\]]")),
    RewriteRule(
        "descriptor_suffix",
        re.compile(r"_(" + "|".join(DESCRIPTOR_SUFFIXES) + r")$", _FLAGS),
        count=1,
    ),
    RewriteRule("only_suffix", re.compile(r"_only[a-zA-Z0-9_]+$", _FLAGS), count=1),
    RewriteRule(
        "descriptor_phrase",
        re.compile(r"\s+-\s+(" + "|".join(DESCRIPTOR_PHRASES) + r")$", _FLAGS),
        count=1,
    ),
    RewriteRule("version_number", re.compile(r"v\d+$", _FLAGS), count=1),
    RewriteRule(
        "standalone_descriptor",
        re.compile(r"\b(" + "|".join(STANDALONE_DESCRIPTORS) + r")\b", _FLAGS),
        count=1,
    ),
    RewriteRule("trailing_punctuation", re.compile(r"[\W_]+$"), count=1),
)


def clean_display_name(name: str) -> str:
    """Lightly clean a raw clip name for display.

    Cuts everything from the render suffix marker onwards, removes one audio
    file extension (case-insensitive) and trims whitespace.

    Examples:
        >>> clean_display_name("Theme_v2.wav")
        'Theme_v2'
        >>> clean_display_name("Theme.new.01.L.WAV ")
        'Theme'
    """
    cleaned = name
    marker_index = cleaned.find(RENDER_SUFFIX_MARKER)
    if marker_index != -1:
        cleaned = cleaned[:marker_index]

    lowered = cleaned.lower()
    for extension in AUDIO_EXTENSIONS:
        if lowered.endswith(extension):
            cleaned = cleaned[: -len(extension)]
            break

    return cleaned.strip()


def apply_identity_rules(
    name: str, rules: tuple[RewriteRule, ...] = IDENTITY_RULES
) -> str:
    """Run every rule once, in order, then trim."""
    for rule in rules:
        name = rule.apply(name)
    return name.strip()


def canonical_identity(
    name: str, rules: Optional[tuple[RewriteRule, ...]] = None
) -> str:
    """Derive the canonical track identity of a raw clip name.

    Repeats the rule pipeline until the name reaches a fixed point, so layered
    suffixes such as `_FULL_INST_v2` are all removed and the result is
    idempotent.

    Examples:
        >>> canonical_identity("Theme_FULL_INST_v2.wav")
        'Theme'
        >>> canonical_identity("Chase (Instrumental) - Remix")
        'Chase'
    """
    rules = IDENTITY_RULES if rules is None else rules
    # Every rule only deletes text, so the loop terminates
    current = name
    while True:
        rewritten = apply_identity_rules(current, rules)
        if rewritten == current:
            return current
        current = rewritten
