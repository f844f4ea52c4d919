"""
Cutout Compositor.

Paints a background behind the edited cutout and flattens the two into a
single RGBA image the size of the cutout. Used for both the on-screen
preview and file export. Uses standard alpha compositing:

    out_rgb = fg_rgb * fg_a + bg_rgb * (1 - fg_a)

Example:
    >>> compositor = Compositor()
    >>> cutout = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
    >>> result = compositor.render(cutout, ColorBackground("#ff0000"))
    >>> result.getpixel((0, 0))
    (255, 0, 0, 255)
"""

from typing import Any, Optional, Tuple
import logging

import numpy as np
from PIL import Image

from OC_Libs.constants import (
    CHECKER_DARK_COLOR,
    CHECKER_LIGHT_COLOR,
    CHECKER_SQUARE_SIZE,
    DEFAULT_FLATTEN_COLOR,
)
from OC_Libs.errors import ExportFailure
from OC_Libs.CompositingLib.backgrounds import (
    BackgroundSpec,
    TransparentBackground,
    parse_color,
)
from OC_Libs.CompositingLib.background_registry import (
    BackgroundPainterRegistry,
    get_default_registry,
)
from OC_Libs.MaskEditingLib.image_models import PixelBuffer

logger = logging.getLogger(__name__)


def _as_rgba_image(cutout: Any) -> Any:
    """Return a point-in-time RGBA PIL Image copy of a buffer or image."""
    if isinstance(cutout, PixelBuffer):
        return cutout.to_image()
    if not hasattr(cutout, "convert"):
        raise TypeError(f"Expected PixelBuffer or PIL Image, got {type(cutout)}")
    return cutout.convert("RGBA")


def make_checkerboard(
    size: Tuple[int, int],
    square: int = CHECKER_SQUARE_SIZE,
    light: str = CHECKER_LIGHT_COLOR,
    dark: str = CHECKER_DARK_COLOR,
) -> Any:
    """Opaque checkerboard used to show transparency on screen."""
    if square < 1:
        raise ValueError(f"square must be >= 1, got {square}")
    width, height = size
    cols = (np.arange(width) // square)[np.newaxis, :]
    rows = (np.arange(height) // square)[:, np.newaxis]
    is_dark = (rows + cols) % 2 == 1

    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :] = parse_color(light)
    pixels[is_dark] = parse_color(dark)
    return Image.fromarray(pixels)


def flatten_for_opaque_export(image: Any, color: str = DEFAULT_FLATTEN_COLOR) -> Any:
    """
    Flatten an RGBA image onto a solid color for formats without alpha.

    Args:
        image: PIL Image (converted to RGBA)
        color: Background color, white by default

    Returns:
        RGB PIL Image of the same size
    """
    rgba = _as_rgba_image(image)
    background = Image.new("RGBA", rgba.size, parse_color(color))
    return Image.alpha_composite(background, rgba).convert("RGB")


class Compositor:
    """Composites a cutout over a background spec."""

    def __init__(self, registry: Optional[BackgroundPainterRegistry] = None):
        self.registry = registry if registry is not None else get_default_registry()

    @staticmethod
    def composite_over(background: Any, cutout: Any) -> Any:
        """
        Alpha-composite ``cutout`` over ``background``.

        Args:
            background: RGBA PIL Image, same size as the cutout
            cutout: RGBA PIL Image

        Returns:
            Composited RGBA PIL Image

        Raises:
            ValueError: If the sizes differ
        """
        if background.size != cutout.size:
            raise ValueError(
                f"Background size {background.size} does not match cutout size {cutout.size}"
            )
        return Image.alpha_composite(background.convert("RGBA"), cutout.convert("RGBA"))

    def render(
        self,
        cutout: Any,
        spec: Optional[BackgroundSpec] = None,
        fallback_on_error: bool = False,
    ) -> Any:
        """
        Render the cutout over the background described by ``spec``.

        Args:
            cutout: PixelBuffer or PIL Image; read once, never modified
            spec: Background spec, transparent when None
            fallback_on_error: Log background failures and return the
                               transparent result instead of raising

        Returns:
            RGBA PIL Image with the cutout's dimensions. For a transparent
            spec this is an unchanged copy of the cutout.

        Raises:
            ExportFailure: If the background cannot be painted and
                           fallback_on_error is False
        """
        foreground = _as_rgba_image(cutout)
        if spec is None:
            spec = TransparentBackground()

        try:
            background = self.registry.paint(spec, foreground.size)
        except ExportFailure as e:
            if not fallback_on_error:
                raise
            logger.warning(f"Background failed, exporting without it: {e}")
            return foreground

        if background is None:
            return foreground

        if background.size != foreground.size:
            raise ExportFailure(
                f"Painter for '{spec.kind}' returned {background.size}, expected {foreground.size}"
            )

        return self.composite_over(background, foreground)

    def render_preview(
        self,
        cutout: Any,
        spec: Optional[BackgroundSpec] = None,
        checker_size: int = CHECKER_SQUARE_SIZE,
    ) -> Any:
        """
        Render for on-screen display.

        Transparent backgrounds are shown over a checkerboard; the
        checkerboard is display-only and never part of exported pixels.
        Background failures fall back to the checkerboard view.
        """
        try:
            result = self.render(cutout, spec)
        except ExportFailure as e:
            logger.warning(f"Background failed, previewing without it: {e}")
            spec = None
            result = self.render(cutout)

        if spec is not None and spec.kind != TransparentBackground.kind:
            return result
        checkerboard = make_checkerboard(result.size, square=checker_size)
        return self.composite_over(checkerboard, result)
