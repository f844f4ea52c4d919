"""
Background Painter Registry.

This module provides a registry of background painters keyed by background
type. A painter receives a background spec and the output size and returns
the RGBA background image to composite the cutout over, or None when the
cutout should be returned unchanged (transparent background).

Classes:
    BackgroundPainterRegistry: Registry for background painters

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_painters: Register the built-in background painters
    paint_color / paint_gradient / paint_image: Built-in painters
"""

from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import math

import numpy as np
from PIL import Image, ImageOps

from OC_Libs.constants import (
    BACKGROUND_COLOR,
    BACKGROUND_GRADIENT,
    BACKGROUND_IMAGE,
    BACKGROUND_TRANSPARENT,
)

logger = logging.getLogger(__name__)

# Type alias for painter function
PainterFunction = Callable[[Any, Tuple[int, int]], Optional[Any]]


class BackgroundPainterRegistry:
    """
    Registry for background painters.

    Example:
        >>> registry = BackgroundPainterRegistry()
        >>> registry.register("color", paint_color)
        >>> background = registry.paint(ColorBackground("#ff0000"), (100, 100))
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._painters: Dict[str, PainterFunction] = {}
        self._descriptions: Dict[str, str] = {}

    def register(
        self,
        kind: str,
        painter: PainterFunction,
        description: str = "",
    ) -> None:
        """
        Register a background painter.

        Args:
            kind: Background type handled by the painter (e.g., "color")
            painter: Callable accepting (spec, (width, height))
            description: Human-readable description

        Raises:
            ValueError: If kind is empty or painter is not callable
            RuntimeError: If kind is already registered
        """
        kind = str(kind).strip().lower()

        if not kind:
            raise ValueError("kind cannot be empty")

        if not callable(painter):
            raise ValueError(f"painter must be callable, got {type(painter)}")

        if kind in self._painters:
            raise RuntimeError(
                f"Background type '{kind}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._painters[kind] = painter
        self._descriptions[kind] = str(description)
        logger.debug(f"Registered painter for background type: {kind}")

    def unregister(self, kind: str) -> bool:
        """
        Unregister a background painter.

        Returns:
            True if unregistered, False if kind was not registered
        """
        kind = str(kind).strip().lower()

        if kind in self._painters:
            del self._painters[kind]
            del self._descriptions[kind]
            logger.debug(f"Unregistered painter for background type: {kind}")
            return True

        return False

    def get_painter(self, kind: str) -> PainterFunction:
        """
        Get the painter for a background type.

        Raises:
            KeyError: If kind is not registered
        """
        kind = str(kind).strip().lower()

        if kind not in self._painters:
            available = ", ".join(self.list_kinds())
            raise KeyError(
                f"No painter registered for background type '{kind}'. "
                f"Available types: {available}"
            )

        return self._painters[kind]

    def has_painter(self, kind: str) -> bool:
        return str(kind).strip().lower() in self._painters

    def list_kinds(self) -> List[str]:
        """Sorted list of registered background types."""
        return sorted(self._painters.keys())

    def get_description(self, kind: str) -> str:
        kind = str(kind).strip().lower()
        if kind not in self._descriptions:
            raise KeyError(f"No description for background type: {kind}")
        return self._descriptions[kind]

    def paint(self, spec: Any, size: Tuple[int, int]) -> Optional[Any]:
        """
        Paint the background for ``spec`` at ``size`` (width, height).

        Returns:
            RGBA PIL Image, or None for a transparent background

        Raises:
            KeyError: If the spec's type is not registered
            Exception: Any exception raised by the painter
        """
        kind = getattr(spec, "kind", None)
        if kind is None:
            raise TypeError(f"Expected a background spec, got {type(spec)}")
        painter = self.get_painter(kind)
        return painter(spec, size)


def paint_transparent(spec: Any, size: Tuple[int, int]) -> None:
    """Transparent backgrounds paint nothing."""
    return None


def paint_color(spec: Any, size: Tuple[int, int]) -> Any:
    """Fill the whole output with the spec's solid color, always opaque."""
    red, green, blue, _ = spec.rgba
    return Image.new("RGBA", size, (red, green, blue, 255))


def paint_gradient(spec: Any, size: Tuple[int, int]) -> Any:
    """
    Paint a linear gradient through the spec's stops.

    The gradient line passes through the center of the output at the spec's
    angle (0 = up, clockwise) and is long enough for the first and last
    stops to touch opposite corners, so 'to right' runs from the left edge
    to the right edge. Stops are spaced evenly along the line. The result is
    opaque; any alpha in the stop colors is ignored.
    """
    width, height = size
    angle = math.radians(spec.angle)
    dx = math.sin(angle)
    dy = -math.cos(angle)
    length = abs(width * dx) + abs(height * dy)

    xs = np.arange(width, dtype=np.float64) + 0.5 - width / 2.0
    ys = np.arange(height, dtype=np.float64) + 0.5 - height / 2.0
    t = (xs[np.newaxis, :] * dx + ys[:, np.newaxis] * dy) / length + 0.5
    t = np.clip(t, 0.0, 1.0)

    stops = np.array(spec.rgba_stops, dtype=np.float64)
    positions = np.linspace(0.0, 1.0, len(stops))

    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    for channel in range(3):
        values = np.interp(t, positions, stops[:, channel])
        pixels[:, :, channel] = np.clip(np.rint(values), 0, 255).astype(np.uint8)

    return Image.fromarray(pixels)


def paint_image(spec: Any, size: Tuple[int, int]) -> Any:
    """
    Scale the spec's image to cover the output, centered and cropped.

    The scale factor is ``max(out_w / img_w, out_h / img_h)`` so the output
    is always completely filled, whatever the image's aspect ratio.
    """
    image = spec.load()
    return ImageOps.fit(
        image,
        size,
        method=Image.Resampling.LANCZOS,
        centering=(0.5, 0.5),
    )


# Global singleton registry
_default_registry: Optional[BackgroundPainterRegistry] = None


def get_default_registry() -> BackgroundPainterRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers default painters.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = BackgroundPainterRegistry()
        register_default_painters(_default_registry)

    return _default_registry


def register_default_painters(registry: BackgroundPainterRegistry) -> None:
    """
    Register the built-in painters: transparent, color, gradient and image.

    Args:
        registry: The registry to register painters with
    """
    registry.register(
        kind=BACKGROUND_TRANSPARENT,
        painter=paint_transparent,
        description="Keep the cutout's transparency",
    )
    registry.register(
        kind=BACKGROUND_COLOR,
        painter=paint_color,
        description="Solid color fill",
    )
    registry.register(
        kind=BACKGROUND_GRADIENT,
        painter=paint_gradient,
        description="Linear gradient through evenly spaced color stops",
    )
    registry.register(
        kind=BACKGROUND_IMAGE,
        painter=paint_image,
        description="Image scaled to cover the output, centered",
    )

    logger.info("Registered default background painters")
