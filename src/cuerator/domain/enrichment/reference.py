"""
Commissioned music reference database.

A plain-text export of the commissioned music catalogue, loaded once at
startup and passed read-only to the lookups that quote it.
"""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .exceptions import ReferenceDataError


@dataclass(frozen=True)
class ReferenceData:
    """Read-only reference text and where it came from."""

    text: str
    source: Path


def load_reference_data(path: Path, encoding: str = "utf-8") -> ReferenceData:
    """Load the reference database text.

    Args:
        path: Path to the database file
        encoding: Text encoding of the file

    Returns:
        ReferenceData with the full file text

    Raises:
        ReferenceDataError: If the file is missing, unreadable or empty
    """
    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error loading reference database {path}: {e}")
        raise ReferenceDataError(path) from e

    if not text.strip():
        raise ReferenceDataError(path, f"Commissioned music database is empty: {path}")

    logger.info(f"Loaded reference database: {path} ({len(text)} chars)")
    return ReferenceData(text=text, source=path)
