"""
Error types for the icon pipeline.

Every per-item failure carries a FailureReason so batches can count and
report what was skipped without aborting.
"""

from enum import Enum


class FailureReason(Enum):
    """Why a single item was left out of a batch."""
    UNSUPPORTED_REFERENCE = "unsupported-reference"
    RESOLUTION_FAILED = "resolution-failed"
    EXTRACTION_UNAVAILABLE = "extraction-unavailable"
    INVALID_DIMENSIONS = "invalid-dimensions"
    COMPOSITING_FAILED = "compositing-failed"
    WRITE_FAILED = "write-failed"


class IconCopierError(Exception):
    """Base exception for all icon pipeline errors."""

    default_reason = FailureReason.RESOLUTION_FAILED

    def __init__(self, message: str, reason: FailureReason = None):
        super().__init__(message)
        self.reason = reason or self.default_reason


class ReferenceResolutionError(IconCopierError):
    """
    A dropped item could not be turned into a local file path.

    Raised when:
    - The item's loader failed
    - The payload is not convertible to a URL
    - The URL is not a local file, or the file does not exist
    """

    default_reason = FailureReason.RESOLUTION_FAILED


class IconExtractionError(IconCopierError):
    """No icon representation could be obtained for a resolved file."""

    default_reason = FailureReason.EXTRACTION_UNAVAILABLE


class RenderError(IconCopierError):
    """An icon could not be rasterized into a fixed-size bitmap."""

    default_reason = FailureReason.INVALID_DIMENSIONS


class ExportWriteError(IconCopierError):
    """A rendered icon could not be written to disk."""

    default_reason = FailureReason.WRITE_FAILED
