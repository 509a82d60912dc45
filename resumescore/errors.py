"""
Typed failures raised by the scoring pipeline.

Every error carries the tenant, opening and filename it was raised for so
callers can log and report it without re-deriving context.
"""

from typing import Optional


class PipelineError(Exception):
    """Base class for all pipeline failures."""

    retryable = False

    def __init__(
        self,
        message: str,
        tenant_id: Optional[str] = None,
        opening_id: Optional[str] = None,
        filename: Optional[str] = None,
    ):
        super().__init__(message)
        self.tenant_id = tenant_id
        self.opening_id = opening_id
        self.filename = filename

    def context(self) -> dict:
        return {
            "error_type": type(self).__name__,
            "tenant_id": self.tenant_id,
            "opening_id": self.opening_id,
            "filename": self.filename,
        }


class UnsupportedFormat(PipelineError):
    """Declared content type is neither PDF nor plain text."""


class ParseFailure(PipelineError):
    """The document could not be read (corrupt or truncated stream)."""


class EmptyExtraction(PipelineError):
    """The document parsed but yielded no text (image-only PDF, blank file)."""


class OpeningNotFound(PipelineError):
    """The opening does not exist or belongs to another tenant."""


class PersistenceFailure(PipelineError):
    """A storage lookup or the atomic profile write failed; nothing was committed."""

    retryable = True


class ImmutableProfileError(Exception):
    """Raised when code tries to modify a finalized candidate profile."""
