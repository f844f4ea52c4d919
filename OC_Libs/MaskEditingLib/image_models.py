"""
Mask editing data models for Open Cutout.

This module defines the core data structures shared by the brush, stroke,
history and compositing code.

Classes:
    PixelBuffer: The mutable RGBA cutout being edited
    SourceImage: The read-only original photo used as the restore source
    BrushSettings: Brush size, hardness, opacity and tool

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    Point: An (x, y) position in float coordinates
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np
from PIL import Image

from OC_Libs.constants import (
    DEFAULT_BRUSH_HARDNESS,
    DEFAULT_BRUSH_OPACITY,
    DEFAULT_BRUSH_SIZE,
    DEFAULT_TOOL,
    MAX_BRUSH_HARDNESS,
    MAX_BRUSH_OPACITY,
    MAX_BRUSH_SIZE,
    MIN_BRUSH_HARDNESS,
    MIN_BRUSH_OPACITY,
    MIN_BRUSH_SIZE,
    SUPPORTED_TOOLS,
)

RgbaColor = Tuple[int, int, int, int]
Point = Tuple[float, float]


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into the closed range [lower, upper]."""
    return max(lower, min(upper, value))


def _validate_rgba_array(pixels: Any) -> np.ndarray:
    array = np.asarray(pixels)
    if array.ndim != 3 or array.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {array.shape}")
    if array.shape[0] == 0 or array.shape[1] == 0:
        raise ValueError(f"Pixel array must not be empty, got shape {array.shape}")
    if array.dtype != np.uint8:
        raise ValueError(f"Expected uint8 pixels, got {array.dtype}")
    return array


class PixelBuffer:
    """
    Mutable RGBA pixel grid holding the cutout being edited.

    Pixels are stored as a ``(height, width, 4)`` uint8 array with straight
    (non-premultiplied) alpha. The dimensions are fixed at construction and
    never change; every write goes through the array in place.

    Example:
        >>> buffer = PixelBuffer.from_image(Image.new("RGBA", (4, 3)))
        >>> buffer.size
        (4, 3)
    """

    def __init__(self, pixels: Any):
        self._pixels = _validate_rgba_array(pixels).copy()

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Create a buffer from a PIL Image (converted to RGBA)."""
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        return cls(np.array(image.convert("RGBA"), dtype=np.uint8))

    @classmethod
    def blank(cls, width: int, height: int, color: RgbaColor = (0, 0, 0, 0)) -> "PixelBuffer":
        """Create a buffer filled with a single color."""
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def alpha(self) -> np.ndarray:
        return self._pixels[:, :, 3]

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """Buffer size as (width, height), matching PIL's convention."""
        return self.width, self.height

    def copy_pixels(self) -> np.ndarray:
        """Return an independent copy of the pixel array."""
        return self._pixels.copy()

    def overwrite(self, pixels: Any) -> None:
        """
        Replace every pixel with the given array by direct copy.

        Raises:
            ValueError: If the array shape differs from the buffer's
        """
        array = _validate_rgba_array(pixels)
        if array.shape != self._pixels.shape:
            raise ValueError(
                f"Cannot overwrite {self._pixels.shape} buffer with {array.shape} pixels"
            )
        np.copyto(self._pixels, array)

    def to_image(self) -> Any:
        """Return a point-in-time RGBA PIL Image of the buffer."""
        return Image.fromarray(self._pixels.copy())


@dataclass(frozen=True)
class SourceImage:
    """
    Read-only original photo used as the restore source.

    Attributes:
        image: The photo as an RGBA PIL Image
    """
    image: Any

    def __post_init__(self):
        if not hasattr(self.image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(self.image)}")
        object.__setattr__(self, "image", self.image.convert("RGBA"))

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def aligned_to(self, size: Tuple[int, int]) -> np.ndarray:
        """
        Return the photo's pixels resampled to ``size`` (width, height).

        The returned array is read-only and lines up pixel-for-pixel with a
        cutout buffer of the same size.
        """
        image = self.image
        if image.size != tuple(size):
            image = image.resize(tuple(size), Image.Resampling.LANCZOS)
        pixels = np.array(image, dtype=np.uint8)
        pixels.setflags(write=False)
        return pixels


@dataclass
class BrushSettings:
    """Brush configuration for subsequent stamps.

    Out-of-range numbers are clamped into their documented ranges rather
    than rejected, so a zero-sized or negative brush can never reach the
    stamping code.

    Attributes:
        size: Brush diameter in buffer pixels (5-100)
        hardness: Percentage of the radius painted at full strength (0-100)
        opacity: Percentage applied per stamp (1-100)
        tool: 'erase' or 'restore'
    """
    size: int = DEFAULT_BRUSH_SIZE
    hardness: int = DEFAULT_BRUSH_HARDNESS
    opacity: int = DEFAULT_BRUSH_OPACITY
    tool: str = DEFAULT_TOOL

    def __post_init__(self):
        self.size = int(round(clamp(float(self.size), MIN_BRUSH_SIZE, MAX_BRUSH_SIZE)))
        self.hardness = int(round(
            clamp(float(self.hardness), MIN_BRUSH_HARDNESS, MAX_BRUSH_HARDNESS)
        ))
        self.opacity = int(round(
            clamp(float(self.opacity), MIN_BRUSH_OPACITY, MAX_BRUSH_OPACITY)
        ))
        self.tool = str(self.tool).strip().lower()
        if self.tool not in SUPPORTED_TOOLS:
            raise ValueError(
                f"Unknown tool: {self.tool}. Use one of {', '.join(SUPPORTED_TOOLS)}."
            )

    @property
    def opacity_fraction(self) -> float:
        return self.opacity / 100.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "size": self.size,
            "hardness": self.hardness,
            "opacity": self.opacity,
            "tool": self.tool,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrushSettings":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)
