"""Enrichment domain - licensing metadata for merged music cues.

This domain handles:
- Loading the commissioned music reference database
- Batched metadata lookup and composer backfill via OpenAI
- Commissioned cue title/composer post-processing
- Metadata patches and their ordered merge
"""

from .client import (
    backfill_composers,
    clean_composer_response,
    create_client,
    enrich_entries,
    get_api_key,
    request_batch_metadata,
)
from .commissioned import commissioned_patch, format_composer_name, parse_commissioned_title
from .exceptions import EnrichmentError, ReferenceDataError
from .models import (
    COMMERCIAL_RECORDING,
    COMMISSIONED,
    MUSIC_SOURCES,
    PRODUCTION_LIBRARY,
    CueSheetEntry,
    entry_from_duration,
)
from .patches import MetadataPatch, apply_patches, merge_patches
from .reference import ReferenceData, load_reference_data

__all__ = [
    "backfill_composers",
    "clean_composer_response",
    "create_client",
    "enrich_entries",
    "get_api_key",
    "request_batch_metadata",
    "commissioned_patch",
    "format_composer_name",
    "parse_commissioned_title",
    "EnrichmentError",
    "ReferenceDataError",
    "COMMERCIAL_RECORDING",
    "COMMISSIONED",
    "MUSIC_SOURCES",
    "PRODUCTION_LIBRARY",
    "CueSheetEntry",
    "entry_from_duration",
    "MetadataPatch",
    "apply_patches",
    "merge_patches",
    "ReferenceData",
    "load_reference_data",
]
