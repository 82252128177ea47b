"""
Unified output system using Loguru.
User-facing messages go to the terminal and the log file through log().
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .console import safe_print

# When quiet, log() only writes to the log file
_quiet_mode = False

_LEVEL_STYLES = {
    "debug": "cyan",
    "info": None,
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


def setup_loguru(
    log_file: Optional[Path],
    level: str = "INFO",
    console_output: bool = False,
) -> None:
    """
    Configure loguru with a rotating file sink and an optional stderr sink.

    Args:
        log_file: Path to log file (None disables the file sink)
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Also emit log records on stderr
    """
    # Remove default handler
    logger.remove()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention=5,  # Keep 5 backup files
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
            enqueue=False,
        )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def set_quiet_mode(quiet: bool) -> None:
    """Suppress terminal echo of log() messages (file logging continues)."""
    global _quiet_mode
    _quiet_mode = quiet


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to the log file AND prints to the terminal.

    Use this instead of print() for user-facing messages that should also be logged.

    Args:
        message: User-facing message
        level: Log level (debug, info, success, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    if _quiet_mode or level == "debug":
        return

    safe_print(message, style=_LEVEL_STYLES.get(level), markup=False)
