"""
Edit session controller.

Coordinates the buffer, stroke engine, history, view transform and
compositor in response to user intents. A session is either viewing the
committed cutout or editing a working copy of it:

    viewing --enter_edit--> editing --apply_edited_result--> viewing
                                    --cancel_edit---------> viewing

Edits are only persisted into the committed cutout on apply; cancelling
throws the working copy and its history away.

Example:
    >>> session = EditSession()
    >>> session.load(photo, cutout)
    >>> session.enter_edit()
    >>> rect = session.display_rect((800, 600))
    >>> session.pointer_down((120, 80), rect)
    >>> session.pointer_move((160, 90), rect)
    >>> session.pointer_up()
    >>> session.undo()
    True
    >>> session.apply_edited_result()
    True
"""

from dataclasses import replace
from typing import Any, Optional, Tuple
import logging

from OC_Libs.constants import (
    DEFAULT_BRUSH_HARDNESS,
    DEFAULT_BRUSH_OPACITY,
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_TOOL,
    PHASE_EDITING,
    PHASE_VIEWING,
)
from OC_Libs.CompositingLib.backgrounds import BackgroundSpec, TransparentBackground
from OC_Libs.CompositingLib.compositor import Compositor
from OC_Libs.CompositingLib.export import ExportConfig, export_image, save_export
from OC_Libs.MaskEditingLib.brush_tip import BrushTipCache
from OC_Libs.MaskEditingLib.coordinate_mapper import DisplayRect, ViewTransform, map_to_buffer
from OC_Libs.MaskEditingLib.history_manager import HistoryManager
from OC_Libs.MaskEditingLib.image_models import (
    BrushSettings,
    PixelBuffer,
    Point,
    SourceImage,
)
from OC_Libs.MaskEditingLib.stroke_engine import StrokeEngine
from OC_Libs.SessionLib.segmentation import Segmenter, run_segmentation

logger = logging.getLogger(__name__)


class EditSession:
    """
    State and intents of one cutout-refinement session.

    Attributes:
        phase: 'viewing' or 'editing'
        source: Original photo (restore source), None before loading
        cutout: Committed cutout as an RGBA PIL Image
        buffer: Working PixelBuffer while editing, else None
        history: Undo/redo history of the working buffer
        view: Zoom state
        brush: Current BrushSettings
        background: Background spec used for preview and export
    """

    def __init__(
        self,
        history_capacity: int = DEFAULT_HISTORY_CAPACITY,
        compositor: Optional[Compositor] = None,
    ):
        self.phase = PHASE_VIEWING
        self.source: Optional[SourceImage] = None
        self.cutout: Optional[Any] = None
        self.buffer: Optional[PixelBuffer] = None
        self.history = HistoryManager(capacity=history_capacity)
        self.view = ViewTransform()
        self.brush = BrushSettings()
        self.background: BackgroundSpec = TransparentBackground()
        self.compositor = compositor if compositor is not None else Compositor()
        self._tip_cache = BrushTipCache()
        self._engine: Optional[StrokeEngine] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @property
    def has_image(self) -> bool:
        return self.cutout is not None

    @property
    def is_editing(self) -> bool:
        return self.phase == PHASE_EDITING

    def load(self, source: Any, cutout: Any) -> None:
        """
        Start over with a new photo and its cutout.

        History, zoom, tool and background never carry over from a previous
        image.
        """
        if not hasattr(source, "convert"):
            raise TypeError(f"Expected PIL Image for source, got {type(source)}")
        if not hasattr(cutout, "convert"):
            raise TypeError(f"Expected PIL Image for cutout, got {type(cutout)}")

        self._discard_edit()
        self.source = SourceImage(source)
        self.cutout = cutout.convert("RGBA")
        self.background = TransparentBackground()
        self.brush = replace(self.brush, tool=DEFAULT_TOOL)
        logger.info(f"Loaded {self.cutout.size[0]}x{self.cutout.size[1]} cutout")

    def load_from_segmenter(self, source: Any, segmenter: Segmenter) -> None:
        """
        Segment ``source`` and load the result.

        On failure the session is left empty so another photo can be tried.

        Raises:
            SegmentationFailure: If the segmenter fails
        """
        try:
            cutout = run_segmentation(source, segmenter)
        except Exception:
            self.clear()
            raise
        self.load(source, cutout)

    def clear(self) -> None:
        """Forget the current photo and cutout."""
        self._discard_edit()
        self.source = None
        self.cutout = None
        self.background = TransparentBackground()
        self.brush = replace(self.brush, tool=DEFAULT_TOOL)

    # ------------------------------------------------------------------
    # Edit mode transitions
    # ------------------------------------------------------------------

    def enter_edit(self) -> None:
        """
        Switch to editing a working copy of the committed cutout.

        Raises:
            RuntimeError: If no cutout is loaded
        """
        if self.cutout is None:
            raise RuntimeError("No cutout loaded; load an image before editing")
        if self.is_editing:
            return

        self.buffer = PixelBuffer.from_image(self.cutout)
        self._engine = StrokeEngine(
            self.buffer,
            source=self.source,
            settings=self.brush,
            tip_cache=self._tip_cache,
            on_commit=self.history.commit,
        )
        if len(self.history) == 0:
            self.history.commit(self.buffer)
        self.view.fit()
        self.phase = PHASE_EDITING
        logger.info("Entered edit mode")

    def apply_edited_result(self) -> bool:
        """Commit the working buffer as the new cutout and stop editing."""
        if not self.is_editing:
            return False
        self.pointer_up()
        self.cutout = self.buffer.to_image()
        self._discard_edit()
        logger.info("Applied edited cutout")
        return True

    def cancel_edit(self) -> bool:
        """Stop editing without touching the committed cutout."""
        if not self.is_editing:
            return False
        self._discard_edit()
        logger.info("Cancelled edit; changes discarded")
        return True

    def _discard_edit(self) -> None:
        was_editing = self.is_editing
        self.phase = PHASE_VIEWING
        self.buffer = None
        self._engine = None
        self.history.reset()
        self.view.fit()
        if was_editing:
            self.brush = replace(
                self.brush,
                tool=DEFAULT_TOOL,
                hardness=DEFAULT_BRUSH_HARDNESS,
                opacity=DEFAULT_BRUSH_OPACITY,
            )

    # ------------------------------------------------------------------
    # Pointer intents
    # ------------------------------------------------------------------

    def display_rect(self, container_size: Tuple[float, float]) -> DisplayRect:
        """Rectangle the image occupies in a container of the given size."""
        if self.cutout is None:
            raise RuntimeError("No cutout loaded")
        return self.view.display_rect(container_size, self.cutout.size)

    def to_buffer_point(self, display_point: Point, rect: DisplayRect) -> Point:
        if self.cutout is None:
            raise RuntimeError("No cutout loaded")
        return map_to_buffer(display_point, rect, self.cutout.size)

    def pointer_down(self, display_point: Point, rect: DisplayRect) -> bool:
        """Begin a stroke, ending any active one first. Ignored unless editing."""
        if not self.is_editing:
            return False
        if self._engine.is_stroking:
            self._engine.end_stroke()
        self._engine.settings = self.brush
        self._engine.begin_stroke(self.to_buffer_point(display_point, rect))
        return True

    def pointer_move(self, display_point: Point, rect: DisplayRect) -> bool:
        """Continue the active stroke. Ignored without one."""
        if not self.is_editing or not self._engine.is_stroking:
            return False
        self._engine.continue_stroke(self.to_buffer_point(display_point, rect))
        return True

    def pointer_up(self) -> bool:
        """End the active stroke and record it in history."""
        if not self.is_editing:
            return False
        return self._engine.end_stroke()

    def pointer_leave(self) -> bool:
        """Leaving the canvas ends the stroke like releasing the pointer."""
        return self.pointer_up()

    def brush_cursor_diameter(self, rect: DisplayRect) -> float:
        """On-screen diameter of the brush outline."""
        if self.cutout is None:
            raise RuntimeError("No cutout loaded")
        return self.view.brush_display_diameter(self.brush.size, rect, self.cutout.size)

    # ------------------------------------------------------------------
    # Tool, brush and background
    # ------------------------------------------------------------------

    def _update_brush(self, **changes: Any) -> None:
        self.brush = replace(self.brush, **changes)
        if self._engine is not None:
            self._engine.settings = self.brush

    def set_tool(self, tool: str) -> None:
        self._update_brush(tool=tool)

    def set_brush_size(self, size: int) -> None:
        self._update_brush(size=size)

    def set_brush_hardness(self, hardness: int) -> None:
        self._update_brush(hardness=hardness)

    def set_brush_opacity(self, opacity: int) -> None:
        self._update_brush(opacity=opacity)

    def set_background(self, spec: Optional[BackgroundSpec]) -> None:
        if spec is None:
            spec = TransparentBackground()
        if not hasattr(spec, "kind"):
            raise TypeError(f"Expected a background spec, got {type(spec)}")
        self.background = spec

    # ------------------------------------------------------------------
    # History and zoom
    # ------------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return self.is_editing and self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.is_editing and self.history.can_redo

    def undo(self) -> bool:
        """Restore the previous snapshot. False when there is nothing to undo."""
        if not self.is_editing:
            return False
        entry = self.history.undo()
        if entry is None:
            return False
        entry.apply_to(self.buffer)
        return True

    def redo(self) -> bool:
        """Reapply the next snapshot. False when there is nothing to redo."""
        if not self.is_editing:
            return False
        entry = self.history.redo()
        if entry is None:
            return False
        entry.apply_to(self.buffer)
        return True

    def zoom_in(self) -> None:
        self.view.zoom_in()

    def zoom_out(self) -> None:
        self.view.zoom_out()

    def fit_to_screen(self) -> None:
        self.view.fit()

    # ------------------------------------------------------------------
    # Rendering and export
    # ------------------------------------------------------------------

    def current_image(self) -> Any:
        """
        Point-in-time copy of what the user sees: the working buffer while
        editing, else the committed cutout.
        """
        if self.is_editing:
            return self.buffer.to_image()
        if self.cutout is None:
            raise RuntimeError("No cutout loaded")
        return self.cutout.copy()

    def render(self, fallback_on_error: bool = True) -> Any:
        """Composite the current image over the background."""
        return self.compositor.render(
            self.current_image(), self.background, fallback_on_error=fallback_on_error
        )

    def render_preview(self) -> Any:
        return self.compositor.render_preview(self.current_image(), self.background)

    def export(self, config: Optional[ExportConfig] = None, fallback_on_error: bool = True) -> bytes:
        """
        Render and encode the current image.

        With ``fallback_on_error`` a background that fails to load is
        skipped (and logged) instead of failing the export.
        """
        return export_image(self.render(fallback_on_error=fallback_on_error), config)

    def export_to_path(
        self,
        output_path: Any,
        config: Optional[ExportConfig] = None,
        fallback_on_error: bool = True,
    ) -> Any:
        """Render the current image and write it to ``output_path``."""
        return save_export(self.render(fallback_on_error=fallback_on_error), output_path, config)
