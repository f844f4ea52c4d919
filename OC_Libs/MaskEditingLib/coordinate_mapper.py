"""
Display-to-buffer coordinate mapping and the editor's zoom state.

Pointer events arrive in display coordinates. The buffer is drawn into an
on-screen rectangle whose size depends on the view mode (fit to the
container, or an explicit zoom factor). Mapping only needs that rectangle,
so it holds for both modes.

Classes:
    DisplayRect: On-screen rectangle the buffer is rendered into
    ViewTransform: Fit/custom zoom state with the editor's zoom controls

Functions:
    map_to_buffer: Convert a display point to buffer pixel coordinates
"""

from dataclasses import dataclass
from typing import Tuple

from OC_Libs.constants import (
    DEFAULT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
    VIEW_MODE_CUSTOM,
    VIEW_MODE_FIT,
    ZOOM_STEP,
)
from OC_Libs.MaskEditingLib.image_models import Point, clamp


@dataclass(frozen=True)
class DisplayRect:
    """On-screen rectangle, in display coordinates."""
    left: float
    top: float
    width: float
    height: float


def map_to_buffer(
    pointer: Point,
    rect: DisplayRect,
    buffer_size: Tuple[int, int],
) -> Point:
    """
    Map a display-space point into buffer pixel coordinates.

    ``pixel = (pointer - rect_origin) * (buffer_size / rect_size)`` on each
    axis independently, so a display aspect that differs from the buffer's
    still maps correctly.

    Args:
        pointer: (x, y) pointer position in display coordinates
        rect: Rectangle the buffer is currently rendered into
        buffer_size: Buffer (width, height) in pixels

    Returns:
        (x, y) in buffer pixel coordinates (may fall outside the buffer)

    Raises:
        ValueError: If the rectangle has zero or negative size
    """
    if rect.width <= 0 or rect.height <= 0:
        raise ValueError(f"Display rect must have a positive size, got {rect}")

    buffer_width, buffer_height = buffer_size
    scale_x = buffer_width / rect.width
    scale_y = buffer_height / rect.height
    return (
        (pointer[0] - rect.left) * scale_x,
        (pointer[1] - rect.top) * scale_y,
    )


@dataclass
class ViewTransform:
    """Zoom state of the editor view.

    Attributes:
        mode: 'fit' to shrink the buffer into the container, or 'custom'
        zoom_factor: Scale applied in custom mode (0.25-3.0)
    """
    mode: str = VIEW_MODE_FIT
    zoom_factor: float = DEFAULT_ZOOM

    def __post_init__(self):
        if self.mode not in (VIEW_MODE_FIT, VIEW_MODE_CUSTOM):
            raise ValueError(f"Unknown view mode: {self.mode}")
        self.zoom_factor = clamp(float(self.zoom_factor), MIN_ZOOM, MAX_ZOOM)

    def zoom_in(self) -> None:
        self.mode = VIEW_MODE_CUSTOM
        self.zoom_factor = min(self.zoom_factor + ZOOM_STEP, MAX_ZOOM)

    def zoom_out(self) -> None:
        self.mode = VIEW_MODE_CUSTOM
        self.zoom_factor = max(self.zoom_factor - ZOOM_STEP, MIN_ZOOM)

    def fit(self) -> None:
        self.mode = VIEW_MODE_FIT
        self.zoom_factor = DEFAULT_ZOOM

    def label(self) -> str:
        """Text shown between the zoom buttons."""
        if self.mode == VIEW_MODE_FIT:
            return "Fit"
        return f"{round(self.zoom_factor * 100)}%"

    def display_rect(
        self,
        container_size: Tuple[float, float],
        buffer_size: Tuple[int, int],
    ) -> DisplayRect:
        """
        Compute the rectangle the buffer occupies inside the container.

        Fit mode scales uniformly so the whole buffer fits without being
        enlarged past its natural size. Custom mode scales by the zoom
        factor. The result is centered on any axis where it is smaller than
        the container, otherwise anchored at the container origin.
        """
        container_width, container_height = container_size
        buffer_width, buffer_height = buffer_size
        if buffer_width <= 0 or buffer_height <= 0:
            raise ValueError(f"Buffer size must be positive, got {buffer_size}")

        if self.mode == VIEW_MODE_FIT:
            scale = min(
                container_width / buffer_width,
                container_height / buffer_height,
                1.0,
            )
        else:
            scale = self.zoom_factor

        width = buffer_width * scale
        height = buffer_height * scale
        return DisplayRect(
            left=max(0.0, (container_width - width) / 2.0),
            top=max(0.0, (container_height - height) / 2.0),
            width=width,
            height=height,
        )

    @staticmethod
    def brush_display_diameter(
        brush_size: int,
        rect: DisplayRect,
        buffer_size: Tuple[int, int],
    ) -> float:
        """On-screen diameter of the brush cursor for the given rect."""
        return brush_size * (rect.width / buffer_size[0])
