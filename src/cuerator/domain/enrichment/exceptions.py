"""Enrichment-specific exceptions for error handling."""


class EnrichmentError(Exception):
    """Raised when a metadata lookup fails or returns unusable data."""

    pass


class ReferenceDataError(EnrichmentError):
    """Raised when the commissioned music reference database cannot be loaded."""

    def __init__(self, path, message: str = None):
        self.path = path
        super().__init__(
            message
            or f"Could not load the commissioned music database from {path}. "
            "Please check the file path."
        )
