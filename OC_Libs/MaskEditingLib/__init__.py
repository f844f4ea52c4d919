"""
MaskEditingLib - Raster mask editing

This module provides the pixel buffer, brush tips, stroke interpolation,
coordinate mapping and undo/redo history used while refining a cutout.
"""

from OC_Libs.MaskEditingLib.image_models import (
    BrushSettings,
    PixelBuffer,
    RgbaColor,
    SourceImage,
)
from OC_Libs.MaskEditingLib.brush_tip import BrushTipCache, build_brush_tip
from OC_Libs.MaskEditingLib.coordinate_mapper import (
    DisplayRect,
    ViewTransform,
    map_to_buffer,
)
from OC_Libs.MaskEditingLib.image_editing_ops import (
    apply_erase_stamp,
    apply_restore_stamp,
    stamp_region,
)
from OC_Libs.MaskEditingLib.history_manager import HistoryEntry, HistoryManager
from OC_Libs.MaskEditingLib.stroke_engine import StrokeEngine

__all__ = [
    "BrushSettings",
    "PixelBuffer",
    "RgbaColor",
    "SourceImage",
    "BrushTipCache",
    "build_brush_tip",
    "DisplayRect",
    "ViewTransform",
    "map_to_buffer",
    "apply_erase_stamp",
    "apply_restore_stamp",
    "stamp_region",
    "HistoryEntry",
    "HistoryManager",
    "StrokeEngine",
]
