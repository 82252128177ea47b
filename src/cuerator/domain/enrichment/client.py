"""
Metadata enrichment using the OpenAI Responses API.

One batched structured-output request fills in title/source/publisher for
every cue, then two best-effort web-search passes backfill missing
composers. Each pass produces a MetadataPatch; entries are never mutated.
"""

import asyncio
import json
import os
import re
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import openai
from loguru import logger

from cuerator.core.config import get_config_dir

from .commissioned import DEFAULT_PREFIX, commissioned_patch
from .exceptions import EnrichmentError
from .models import (
    COMMERCIAL_RECORDING,
    MUSIC_SOURCES,
    PRODUCTION_LIBRARY,
    CueSheetEntry,
)
from .patches import MetadataPatch, apply_patches
from .prompts import (
    BATCH_INSTRUCTIONS,
    COMPOSER_SEARCH_INSTRUCTIONS,
    SONGWRITER_SEARCH_INSTRUCTIONS,
    build_batch_prompt,
    build_batch_schema,
    build_composer_search_prompt,
    build_songwriter_search_prompt,
)
from .reference import ReferenceData

DEFAULT_MODEL = "gpt-4o-mini"

# Responses longer than this with several lines are assumed to contain reasoning
MAX_PLAIN_RESPONSE_CHARS = 150

_LABEL_PREFIX_RE = re.compile(r"^.*?: ?")


def get_api_key(configured_key: Optional[str] = None) -> Optional[str]:
    """Get OpenAI API key from environment variable, .env file or config."""
    api_key = os.getenv("OPENAI_API_KEY")
    if api_key:
        return api_key

    from dotenv import load_dotenv

    # Project root .env first, then config directory
    for env_file in (Path.cwd() / ".env", get_config_dir() / ".env"):
        if env_file.exists():
            load_dotenv(env_file)
            api_key = os.getenv("OPENAI_API_KEY")
            if api_key:
                return api_key

    return configured_key


def create_client(api_key: Optional[str] = None) -> openai.AsyncOpenAI:
    """Create an async OpenAI client.

    Raises:
        EnrichmentError: If no API key is available
    """
    api_key = get_api_key(api_key)
    if not api_key:
        raise EnrichmentError(
            "No OpenAI API key found. Set OPENAI_API_KEY or [ai] openai_api_key."
        )
    return openai.AsyncOpenAI(api_key=api_key)


def parse_batch_response(output_text: str) -> List[Dict[str, Any]]:
    """Parse the structured batch response into a list of track dicts.

    Accepts `{"tracks": [...]}`, a bare list, or either wrapped in a
    markdown code block.

    Raises:
        EnrichmentError: If no JSON can be extracted
    """
    text = output_text.strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # Fallback: extract JSON from a markdown code block
        starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
        end = max(text.rfind("}"), text.rfind("]")) + 1
        if not starts or end <= min(starts):
            raise EnrichmentError(f"Failed to parse JSON from AI response: {text[:200]}")
        try:
            data = json.loads(text[min(starts):end])
        except json.JSONDecodeError as e:
            raise EnrichmentError(
                f"Failed to parse JSON from AI response: {text[:200]}"
            ) from e

    if isinstance(data, dict):
        data = data.get("tracks", [])
    if not isinstance(data, list):
        raise EnrichmentError("AI response is not a list of tracks")
    return [item for item in data if isinstance(item, dict)]


def _clean_names(values: Any) -> tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(str(v).strip() for v in values if v and str(v).strip())


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def batch_patch(
    tracks: Sequence[Dict[str, Any]], entries: Sequence[CueSheetEntry]
) -> MetadataPatch:
    """Turn batch response records into a patch keyed by identity.

    Records are matched to entries by original name (exact, then
    case-insensitive). Records naming unknown tracks are dropped.
    """
    by_name: Dict[str, List[str]] = {}
    by_folded: Dict[str, List[str]] = {}
    for entry in entries:
        by_name.setdefault(entry.original_name, []).append(entry.identity)
        by_folded.setdefault(entry.original_name.strip().casefold(), []).append(
            entry.identity
        )

    patch: MetadataPatch = {}
    for track in tracks:
        name = str(track.get("originalName") or "")
        identities = by_name.get(name) or by_folded.get(name.strip().casefold())
        if not identities:
            logger.warning(f"AI returned metadata for unknown track {name!r}, skipping")
            continue

        music_source = track.get("musicSource")
        if music_source not in MUSIC_SOURCES:
            logger.warning(f"Unknown music source {music_source!r} for {name!r}")
            music_source = None

        updates: Dict[str, Any] = {
            "music_source": music_source,
            "composers": _clean_names(track.get("composers")),
            "performers": _clean_names(track.get("performers")),
            "publisher": _optional_text(track.get("publisher")),
            "catalogue_code": _optional_text(track.get("catalogueCode")),
            "track_no": _optional_text(track.get("trackNo")),
            "vocal_or_instrumental": _optional_text(track.get("vocalOrInstrumental"))
            or "Vocal",
        }
        title = _optional_text(track.get("title"))
        if title:
            updates["title"] = title

        for identity in identities:
            patch[identity] = dict(updates)

    return patch


async def request_batch_metadata(
    client: openai.AsyncOpenAI,
    entries: Sequence[CueSheetEntry],
    reference: ReferenceData,
    model: str = DEFAULT_MODEL,
    prefix: str = DEFAULT_PREFIX,
) -> MetadataPatch:
    """Request metadata for every entry in one structured-output call.

    Raises:
        EnrichmentError: If the request fails or the response is unusable
    """
    prompt = build_batch_prompt(
        [entry.original_name for entry in entries], reference.text, prefix
    )
    start_time = time.time()

    try:
        response = await client.responses.create(
            model=model,
            instructions=BATCH_INSTRUCTIONS,
            input=prompt,
            text={
                "format": {
                    "type": "json_schema",
                    "name": "cue_sheet_tracks",
                    "schema": build_batch_schema(),
                    "strict": True,
                }
            },
        )
    except openai.APIError as e:
        raise EnrichmentError(f"OpenAI API error: {e}") from e

    response_time_ms = int((time.time() - start_time) * 1000)
    logger.info(
        f"Batch metadata lookup for {len(entries)} tracks took {response_time_ms}ms"
    )

    tracks = parse_batch_response(response.output_text or "")
    return batch_patch(tracks, entries)


def clean_composer_response(text: str) -> List[str]:
    """Extract a name list from a plain-text lookup response.

    Long multi-line answers keep only their last non-blank line, a leading
    "label:" is dropped, and the rest is split on commas.

    Examples:
        >>> clean_composer_response("Composers: John Williams, Hans Zimmer")
        ['John Williams', 'Hans Zimmer']
    """
    text = text.strip()

    if len(text) > MAX_PLAIN_RESPONSE_CHARS and "\n" in text:
        lines = [line for line in text.split("\n") if line.strip()]
        if lines:
            text = lines[-1].strip()

    text = _LABEL_PREFIX_RE.sub("", text, count=1).strip()
    if not text:
        return []
    return [name.strip() for name in text.split(",") if name.strip()]


async def lookup_composers(
    client: openai.AsyncOpenAI, instructions: str, prompt: str, model: str = DEFAULT_MODEL
) -> List[str]:
    """Run one web-search lookup and return the composer names found."""
    response = await client.responses.create(
        model=model,
        instructions=instructions,
        input=prompt,
        tools=[{"type": "web_search_preview"}],
    )
    return clean_composer_response(response.output_text or "")


def _search_request(entry: CueSheetEntry) -> tuple[str, str]:
    if entry.music_source == COMMERCIAL_RECORDING:
        performer = entry.performers[0] if entry.performers else ""
        return SONGWRITER_SEARCH_INSTRUCTIONS, build_songwriter_search_prompt(
            entry.title, performer
        )
    return COMPOSER_SEARCH_INSTRUCTIONS, build_composer_search_prompt(
        entry.title, entry.publisher or entry.catalogue_code
    )


async def backfill_composers(
    client: openai.AsyncOpenAI,
    entries: Sequence[CueSheetEntry],
    music_source: str,
    model: str = DEFAULT_MODEL,
) -> MetadataPatch:
    """Look up composers for entries of one source that have none.

    Lookups run concurrently; a failed lookup is logged and leaves its entry
    untouched.

    Args:
        client: OpenAI client
        entries: Current entries
        music_source: PRODUCTION_LIBRARY or COMMERCIAL_RECORDING
        model: Model to use

    Returns:
        Patch with the composers that were found
    """
    targets = [
        entry
        for entry in entries
        if entry.music_source == music_source and entry.needs_composers
    ]
    if not targets:
        return {}

    logger.info(f"Searching composers for {len(targets)} {music_source} track(s)")

    lookups = [
        lookup_composers(client, *_search_request(entry), model=model)
        for entry in targets
    ]
    results = await asyncio.gather(*lookups, return_exceptions=True)

    patch: MetadataPatch = {}
    for entry, result in zip(targets, results):
        if isinstance(result, BaseException):
            logger.warning(f"Could not fetch composers for {entry.title!r}: {result}")
            continue
        if result:
            patch[entry.identity] = {"composers": tuple(result)}
    return patch


async def enrich_entries(
    entries: Sequence[CueSheetEntry],
    reference: ReferenceData,
    client: openai.AsyncOpenAI,
    model: str = DEFAULT_MODEL,
    prefix: str = DEFAULT_PREFIX,
) -> List[CueSheetEntry]:
    """Run every enrichment pass and return the enriched entries.

    A failed batch lookup is logged and leaves the entries un-enriched.
    """
    entries = list(entries)
    if not entries:
        return entries

    try:
        initial = await request_batch_metadata(client, entries, reference, model, prefix)
    except EnrichmentError as e:
        logger.error(f"Metadata lookup failed, reporting un-enriched tracks: {e}")
        return entries

    entries = apply_patches(entries, [initial])
    entries = apply_patches(entries, [commissioned_patch(entries, prefix)])

    for music_source in (PRODUCTION_LIBRARY, COMMERCIAL_RECORDING):
        found = await backfill_composers(client, entries, music_source, model)
        entries = apply_patches(entries, [found])

    return entries
