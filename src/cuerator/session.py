"""
Cue sheet processing session.

Ties the domains together: parse every input EDL, aggregate per-track
durations, enrich with metadata and sort for the report. The session tracks
an idle/processing/success/error status so every failure leaves it ready
for another attempt.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import openai
from loguru import logger

from cuerator.core.config import Config
from cuerator.domain.edl import EDLError, SessionSummary, aggregate_edls, parse_edl_text
from cuerator.domain.enrichment import (
    CueSheetEntry,
    EnrichmentError,
    ReferenceData,
    ReferenceDataError,
    create_client,
    enrich_entries,
    entry_from_duration,
    load_reference_data,
)
from cuerator.domain.report import sort_entries

IDLE = "idle"
PROCESSING = "processing"
SUCCESS = "success"
ERROR = "error"


class SessionNotReadyError(Exception):
    """Raised when processing is requested before the reference data is loaded."""

    def __init__(self, message: str = None):
        super().__init__(
            message
            or "The Commissioned Music Database has not loaded yet. "
            "Please wait a moment and try again."
        )


@dataclass(frozen=True)
class InputFile:
    """An input EDL as plain text."""

    name: str
    text: str


@dataclass(frozen=True)
class CueSheetResult:
    """Outcome of a successful run."""

    summaries: list[SessionSummary]
    entries: list[CueSheetEntry]  # Sorted by title


def read_input_files(paths: Sequence[Path], encoding: str = "utf-8") -> list[InputFile]:
    """Read input files as text regardless of their extension.

    Raises:
        OSError: If a file cannot be read
    """
    return [
        InputFile(name=path.name, text=path.read_text(encoding=encoding, errors="replace"))
        for path in paths
    ]


@dataclass
class CueSheetSession:
    """One user session: reference data plus the state of the last run."""

    config: Config
    reference: Optional[ReferenceData] = None
    status: str = IDLE
    error_message: str = ""
    fatal: bool = False
    result: Optional[CueSheetResult] = None
    enrich: bool = True
    summaries: list[SessionSummary] = field(default_factory=list)

    def start(self, reference_path: Optional[Path] = None) -> bool:
        """Load the reference database.

        A failure is fatal for the session: every later run is refused.

        Returns:
            True if the session is ready to process files
        """
        path = reference_path or Path(self.config.reference.database_path)
        try:
            self.reference = load_reference_data(path)
        except ReferenceDataError as e:
            self.reference = None
            self.fatal = True
            self._fail(str(e))
            return False
        return True

    def reset(self) -> None:
        """Return to idle after a success or a recoverable error.

        A session whose reference data failed to load stays in error.
        """
        self.result = None
        self.summaries = []
        if self.fatal:
            return
        self.status = IDLE
        self.error_message = ""

    def process(
        self,
        inputs: Sequence[InputFile],
        client: Optional[openai.AsyncOpenAI] = None,
    ) -> Optional[CueSheetResult]:
        """Run the whole pipeline synchronously.

        Returns:
            The result, or None if the run failed (see error_message)
        """
        return asyncio.run(self.process_async(inputs, client))

    async def process_async(
        self,
        inputs: Sequence[InputFile],
        client: Optional[openai.AsyncOpenAI] = None,
    ) -> Optional[CueSheetResult]:
        """Run the whole pipeline.

        Args:
            inputs: EDL files in processing order
            client: OpenAI client (created from config when enrichment is on)

        Returns:
            The result, or None if the run failed (see error_message)
        """
        self.status = PROCESSING
        self.result = None
        self.summaries = []
        self.error_message = ""

        try:
            entries = await self._run(inputs, client)
        except (SessionNotReadyError, EDLError) as e:
            self._fail(str(e))
            return None

        self.result = CueSheetResult(summaries=self.summaries, entries=entries)
        self.status = SUCCESS
        logger.info(f"Cue sheet ready: {len(entries)} tracks")
        return self.result

    async def _run(
        self, inputs: Sequence[InputFile], client: Optional[openai.AsyncOpenAI]
    ) -> list[CueSheetEntry]:
        if self.reference is None:
            raise SessionNotReadyError()

        edl_config = self.config.edl
        parsed = [
            parse_edl_text(item.text, file_name=item.name, frame_rate=edl_config.frame_rate)
            for item in inputs
        ]
        self.summaries = [edl.summary for edl in parsed]

        durations = aggregate_edls(parsed, tolerance=edl_config.merge_tolerance_frames)
        entries = [entry_from_duration(duration) for duration in durations]

        if self.enrich and self.config.ai.enabled:
            entries = await self._enrich(entries, client)

        return sort_entries(entries)

    async def _enrich(
        self, entries: list[CueSheetEntry], client: Optional[openai.AsyncOpenAI]
    ) -> list[CueSheetEntry]:
        if client is None:
            try:
                client = create_client(self.config.ai.openai_api_key)
            except EnrichmentError as e:
                logger.warning(f"Skipping metadata enrichment: {e}")
                return entries

        return await enrich_entries(
            entries,
            self.reference,
            client,
            model=self.config.ai.model,
            prefix=self.config.reference.commissioned_prefix,
        )

    def _fail(self, message: str) -> None:
        logger.error(message)
        self.status = ERROR
        self.error_message = message
