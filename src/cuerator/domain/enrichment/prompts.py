"""
Prompt and schema builders for metadata lookups.
"""

from typing import Any, Dict, Optional, Sequence

from .models import MUSIC_SOURCES

BATCH_INSTRUCTIONS = (
    "You are a musicologist and expert in music licensing for the APRA AMCOS "
    "framework in Australia. Extract cue sheet metadata for music track "
    "filenames from an EDL, based ONLY on the filename and the provided "
    "databases."
)

# Non-exhaustive list of production music libraries active in Australia
PRODUCTION_LIBRARIES = (
    "101 Music",
    "Adrenalin Sounds Pty Ltd / Adrenalin Production Music Libraries P/L",
    "Amphibious Zoo Music",
    "Audio Network",
    "Beatbox Music Pty Ltd",
    "Beats Fresh",
    "Blonde Beats",
    "BMG Production Music",
    "Extreme Music",
    "Fable Music Pty Ltd",
    "Fold Music Australia",
    "Motion Focus Music",
    "Mushroom Production Music",
    "Off The Shelf Music",
    "Primerchord Music",
    "Red Music Publishing Pty Ltd",
    "Standard Music Library",
    "Universal Production Music (UPM)",
    "West One Music Group Pty Ltd",
    "Woodcut Productions Ltd",
)

# Parent publisher -> catalogue prefixes
PUBLISHER_PREFIXES = {
    "Beatbox Music": "`CRB`, `DBX`, `NLM`, `BAM`, `HML`, `ALSO`, `RSM`, `BKM`, "
    "`THH`, `MNM`, `ALL`, `LVM`, `MSU`, `BXMT`, `PMOL`, `FFM`, `AUMT`",
    "Extreme Music": "`ATN`, `KPM`, `XCD`, `TRC`, `FA162`, `MX456`, `XRC`, `KTC`, `TRL`",
    "Universal Production Music (UPM)": "`UPM_` prefix",
    "BMG Production Music": "`BMGPM_` prefix",
    "West One Music": "`WESTONE_` prefix",
}

COMPOSER_SEARCH_INSTRUCTIONS = (
    "You are a highly efficient music data retrieval agent. Your sole purpose "
    "is to find composer names for a given music track and return them in a "
    "specific format. You MUST NOT output any conversational text, "
    "explanations, reasoning, or apologies. Your entire response will be "
    "parsed by a machine, so it must be exact. If you cannot find the "
    "composer, return an empty string."
)

SONGWRITER_SEARCH_INSTRUCTIONS = (
    "You are a highly efficient music data retrieval agent. Your sole purpose "
    "is to find the songwriters/composers for a given commercial music track "
    "and return them in a specific format. You MUST NOT output any "
    "conversational text, explanations, reasoning, or apologies. Your entire "
    "response will be parsed by a machine, so it must be exact. If you cannot "
    "find the writers, return an empty string."
)


def _nullable(json_type: str, **extra: Any) -> Dict[str, Any]:
    return {"type": [json_type, "null"], **extra}


def build_batch_schema() -> Dict[str, Any]:
    """JSON schema of the batched structured response.

    Strict structured output requires every property to be listed as
    required, so optional fields are nullable instead.
    """
    track = {
        "type": "object",
        "properties": {
            "originalName": {
                "type": "string",
                "description": "The original, representative track filename from the input list.",
            },
            "title": {
                "type": "string",
                "description": "The final, reportable title of the music track.",
            },
            "composers": _nullable("array", items={"type": "string"}),
            "performers": _nullable("array", items={"type": "string"}),
            "publisher": _nullable(
                "string",
                description="The PARENT publisher (e.g., Beatbox, Extreme Music, Universal Production Music).",
            ),
            "catalogueCode": _nullable(
                "string",
                description="The combined library prefix and catalogue number (e.g., 'CRB1234', 'KPM567').",
            ),
            "musicSource": {"type": "string", "enum": list(MUSIC_SOURCES)},
            "trackNo": _nullable("string"),
            "vocalOrInstrumental": {
                "type": "string",
                "description": "The version (e.g., Instrumental, Vocal). Default to 'Vocal' if not specified.",
            },
        },
        "required": [
            "originalName",
            "title",
            "composers",
            "performers",
            "publisher",
            "catalogueCode",
            "musicSource",
            "trackNo",
            "vocalOrInstrumental",
        ],
        "additionalProperties": False,
    }
    return {
        "type": "object",
        "properties": {"tracks": {"type": "array", "items": track}},
        "required": ["tracks"],
        "additionalProperties": False,
    }


def build_batch_prompt(
    track_names: Sequence[str], reference_text: str, prefix: str = "MKR"
) -> str:
    """Build the batched enrichment prompt.

    Args:
        track_names: Display names to enrich, in report order
        reference_text: Commissioned music database text
        prefix: Filename prefix of commissioned cues

    Returns:
        Prompt text
    """
    libraries = "\n".join(f"- {name}" for name in PRODUCTION_LIBRARIES)
    publishers = "\n".join(
        f"    *   **{publisher}**: {prefixes}."
        for publisher, prefixes in PUBLISHER_PREFIXES.items()
    )
    names = "\n".join(track_names)

    return f"""**CRITICAL RULE: {prefix} Commissioned Music Database**
The following is your PRIMARY SOURCE OF TRUTH for any filename starting with "{prefix}". You MUST use this data to populate the fields.
- 'FILENAME' maps to 'originalName'.
- 'TRACK TITLE FOR REPORTING' maps to 'title'.
- 'COMPOSER/S' maps to 'composers'.
- 'PUBLISHER' maps to 'publisher'.
- Set 'musicSource' to 'Commissioned'.
- The catalogueCode should be the SERIES value (e.g., 'SERIES 11').
---
{reference_text}
---

**APRA AMCOS Production Music Libraries Reference**
This is a non-exhaustive list of production music libraries and publishers active in Australia. Use this list to help identify if a track is from a production library.
{libraries}

**Instructions for NON-{prefix} Tracks:**

1.  **Identify Music Source**: Categorize as 'Production Music (library)' or 'Commercial Recording' (e.g., Katy Perry, The Weeknd). Use the reference list above to identify production music.
2.  **Determine Publisher**: Identify the PARENT publisher from the catalogue prefix.
{publishers}
    *   If a publisher can't be determined, use null.
3.  **Extract Details from Filename**:
    *   **Title**: The clean title of the track. Remove file extensions, catalogue prefixes, composer names/initials, and versioning info (e.g., '_INST', '_FULL', 'V2'). Replace underscores with spaces.
    *   **Composer(s)/Performer(s)**: For Production Music, list **Composers**. For Commercial Recordings, list **Performers/Artists**. Common patterns include `TITLE_ComposerName`, `TITLE_Composer1_Composer2`, `TITLE - C_FirstnameLastname`, `TITLE_CI` (composer initials) and `Title (Composer Name)`. Do not populate both for the same track. If none is in the filename, use null.
    *   **Catalogue Code**: Combine the library prefix and the record number into one string (e.g., 'CRB' and '1234' becomes 'CRB1234').
    *   **Track No.**: Extract if present in the filename.

Return one entry per filename, with 'originalName' exactly as given.

**Filenames to process:**
{names}"""


def build_composer_search_prompt(title: str, publisher: Optional[str]) -> str:
    """Prompt for the composers of a production library track."""
    return f"""Using web search, find the composer(s) for the following track. Prioritize searching `portal.apraamcos.com.au` first, then other official publisher websites.

**Track Information:**
- Title: "{title}"
- Publisher / Library: "{publisher or ''}"

**MANDATORY OUTPUT FORMAT:**
- Return ONLY a comma-separated list of composer names.
- Example: `John Williams, Hans Zimmer`
- DO NOT add any other text."""


def build_songwriter_search_prompt(title: str, performer: Optional[str]) -> str:
    """Prompt for the songwriters of a commercial recording."""
    return f"""Using web search, find the official songwriter(s)/composer(s) for the following commercial music track. Prioritize official sources like Wikipedia, ASCAP, BMI, APRA AMCOS, or official artist websites.

**Track Information:**
- Title: "{title}"
- Artist/Performer: "{performer or ''}"

**MANDATORY OUTPUT FORMAT:**
- Return ONLY a comma-separated list of full composer/songwriter names.
- Example: `Max Martin, Shellback, Taylor Swift`
- DO NOT add any other text."""
