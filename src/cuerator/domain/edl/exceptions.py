"""EDL-specific exceptions for error handling."""


class EDLError(Exception):
    """Base exception for EDL processing."""

    pass


class MalformedTimecodeError(EDLError):
    """Raised when a timecode does not split into four integer fields."""

    def __init__(self, timecode: str, message: str = None):
        self.timecode = timecode
        super().__init__(message or f"Malformed timecode: {timecode!r}")


class EmptyResultError(EDLError):
    """Raised when no unmuted clips were found across all input files."""

    def __init__(self, message: str = None):
        super().__init__(
            message or "No valid unmuted music clips found in the provided files."
        )
