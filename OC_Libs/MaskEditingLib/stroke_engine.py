"""
Stroke engine: turns pointer paths into brush stamps on a PixelBuffer.

A stroke starts with one stamp at the pointer-down position. Every move
stamps along the segment from the previous position at a spacing of 10% of
the brush size, then stamps once more at the new position, so fast pointer
motion leaves no gaps. Stamps are applied strictly in call order; at partial
opacity overlapping stamps accumulate.

Example:
    >>> engine = StrokeEngine(buffer, source, BrushSettings(size=20))
    >>> engine.begin_stroke((10, 10))
    >>> engine.continue_stroke((40, 12))
    >>> engine.end_stroke()
    True
"""

from typing import Any, Callable, Optional
import logging
import math

import numpy as np

from OC_Libs.constants import STROKE_SPACING_FACTOR, TOOL_ERASE, TOOL_RESTORE
from OC_Libs.MaskEditingLib.brush_tip import BrushTipCache
from OC_Libs.MaskEditingLib.image_editing_ops import (
    apply_erase_stamp,
    apply_restore_stamp,
)
from OC_Libs.MaskEditingLib.image_models import (
    BrushSettings,
    PixelBuffer,
    Point,
    SourceImage,
)

logger = logging.getLogger(__name__)

CommitCallback = Callable[[PixelBuffer], Any]


class StrokeEngine:
    """
    Applies erase/restore stamps along pointer strokes.

    Attributes:
        buffer: The PixelBuffer being edited
        settings: Current BrushSettings; replacing them only affects later
                  stamps
        on_commit: Called with the buffer when a stroke ends (normally
                   ``HistoryManager.commit``)
        stamp_count: Stamps applied during the current or last stroke
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        source: Optional[SourceImage] = None,
        settings: Optional[BrushSettings] = None,
        tip_cache: Optional[BrushTipCache] = None,
        on_commit: Optional[CommitCallback] = None,
    ):
        if not isinstance(buffer, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")
        self.buffer = buffer
        self.settings = settings if settings is not None else BrushSettings()
        self.tip_cache = tip_cache if tip_cache is not None else BrushTipCache()
        self.on_commit = on_commit
        self.stamp_count = 0
        self._source_pixels: Optional[np.ndarray] = None
        self._last_point: Optional[Point] = None
        self._active = False
        self.set_source(source)

    @property
    def is_stroking(self) -> bool:
        return self._active

    @property
    def last_point(self) -> Optional[Point]:
        return self._last_point

    def set_source(self, source: Optional[SourceImage]) -> None:
        """Set the restore source, resampled to the buffer's size."""
        if source is None:
            self._source_pixels = None
            return
        if not isinstance(source, SourceImage):
            raise TypeError(f"Expected SourceImage, got {type(source)}")
        self._source_pixels = source.aligned_to(self.buffer.size)

    def stamp_brush(self, x: float, y: float) -> bool:
        """
        Apply one stamp of the current brush centered at (x, y).

        Returns:
            True if the stamp covered any buffer pixel
        """
        settings = self.settings
        tip = self.tip_cache.get(settings.size, settings.hardness)
        opacity = settings.opacity_fraction
        self.stamp_count += 1

        if settings.tool == TOOL_ERASE:
            return apply_erase_stamp(self.buffer.pixels, tip, x, y, opacity)

        if settings.tool == TOOL_RESTORE:
            if self._source_pixels is None:
                logger.warning("Restore stamp ignored: no source image set")
                return False
            return apply_restore_stamp(
                self.buffer.pixels, self._source_pixels, tip, x, y, opacity
            )

        raise ValueError(f"Unknown tool: {settings.tool}")

    def begin_stroke(self, point: Point) -> None:
        """Start a stroke at ``point`` and stamp once there."""
        self._active = True
        self.stamp_count = 0
        self._last_point = (float(point[0]), float(point[1]))
        self.stamp_brush(*self._last_point)

    def continue_stroke(self, point: Point) -> None:
        """Stamp from the last position to ``point``. Ignored outside a stroke."""
        if not self._active or self._last_point is None:
            return

        x, y = float(point[0]), float(point[1])
        last_x, last_y = self._last_point
        distance = math.hypot(x - last_x, y - last_y)
        step = self.settings.size * STROKE_SPACING_FACTOR

        if distance > step:
            angle = math.atan2(y - last_y, x - last_x)
            cos_a = math.cos(angle)
            sin_a = math.sin(angle)
            offset = 0.0
            while offset < distance:
                self.stamp_brush(last_x + cos_a * offset, last_y + sin_a * offset)
                offset += step

        self.stamp_brush(x, y)
        self._last_point = (x, y)

    def end_stroke(self) -> bool:
        """
        Finish the stroke and hand the buffer to ``on_commit``.

        Returns:
            True if a stroke was active, False if this was a no-op
        """
        if not self._active:
            return False
        self._active = False
        self._last_point = None
        logger.debug(f"Stroke finished with {self.stamp_count} stamps ({self.settings.tool})")
        if self.on_commit is not None:
            self.on_commit(self.buffer)
        return True
