# apps/impressions/exceptions.py


class ImpressionError(Exception):
    """Base class for impression ingestion and retrieval failures."""


class ImpressionValidationError(ImpressionError):
    """Raised before any store is touched when an event is malformed."""

    def __init__(self, errors):
        self.errors = errors
        fields = ", ".join(sorted(errors)) if isinstance(errors, dict) else "payload"
        super().__init__(f"Invalid impression fields: {fields}")


class ArchiveError(ImpressionError):
    """The object archive write failed; nothing was persisted."""


class MetadataIndexError(ImpressionError):
    """The metadata index could not be written.

    When raised from ingestion the archive copy already exists, so the
    impression is archived but not listed.
    """


class ScanError(MetadataIndexError):
    """A page of the index scan could not be read or decoded."""
