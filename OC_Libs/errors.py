"""
Error kinds raised by Open Cutout.

Each error also derives from the built-in exception callers would expect for
the same situation, so code catching ``ValueError`` or ``OSError`` keeps
working.

Classes:
    CutoutError: Base class for all editor errors
    InvalidInputImage: Unsupported, oversized, missing or unreadable image
    SegmentationFailure: The segmentation collaborator failed
    ExportFailure: Background loading, encoding or file writing failed
"""


class CutoutError(Exception):
    """Base class for Open Cutout errors."""


class InvalidInputImage(CutoutError, ValueError):
    """Raised when an input image cannot be accepted by the editor."""


class SegmentationFailure(CutoutError, RuntimeError):
    """Raised when the segmentation collaborator fails to produce a cutout."""


class ExportFailure(CutoutError, OSError):
    """Raised when a composited image cannot be produced or written."""
