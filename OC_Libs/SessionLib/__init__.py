"""
SessionLib - Edit session orchestration

This module provides image import/validation, the segmentation
collaborator contract and the session controller driving an edit.
"""

from OC_Libs.SessionLib.image_import import (
    get_supported_image_formats,
    is_supported_format,
    load_image_bytes,
    load_source_image,
    validate_upload,
)
from OC_Libs.SessionLib.segmentation import Segmenter, run_segmentation
from OC_Libs.SessionLib.session_controller import EditSession

__all__ = [
    "get_supported_image_formats",
    "is_supported_format",
    "load_image_bytes",
    "load_source_image",
    "validate_upload",
    "Segmenter",
    "run_segmentation",
    "EditSession",
]
