"""
Background spec types consumed by the compositor.

A background spec describes what is painted behind the cutout. It never
touches the cutout's pixels.

Classes:
    TransparentBackground: No background, alpha is preserved
    ColorBackground: Solid color from a hex string
    GradientBackground: Linear gradient through two or more color stops
    ImageBackground: User-supplied image, scaled to cover the output

Functions:
    background_from_dict: Rebuild a spec from its ``to_dict()`` form
    parse_background_spec: Parse the command-line form of a spec

Example:
    >>> parse_background_spec("color:#ff0000")
    ColorBackground(color='#ff0000')
    >>> parse_background_spec("gradient:#43e97b,#38f9d7@to bottom")
    GradientBackground(stops=('#43e97b', '#38f9d7'), direction='to bottom')
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from PIL import Image, ImageColor, UnidentifiedImageError

from OC_Libs.constants import (
    BACKGROUND_COLOR,
    BACKGROUND_GRADIENT,
    BACKGROUND_IMAGE,
    BACKGROUND_TRANSPARENT,
    DEFAULT_GRADIENT_DIRECTION,
    GRADIENT_DIRECTION_ANGLES,
    GRADIENT_PRESETS,
)
from OC_Libs.errors import ExportFailure
from OC_Libs.MaskEditingLib.image_models import RgbaColor


def parse_color(value: str) -> RgbaColor:
    """
    Parse a color string (``#rgb``, ``#rrggbb``, ``#rrggbbaa`` or a CSS name).

    Raises:
        ValueError: If the string is not a color
    """
    try:
        return ImageColor.getcolor(str(value).strip(), "RGBA")
    except ValueError as e:
        raise ValueError(f"Invalid color '{value}': {str(e)}")


def gradient_angle(direction: Union[str, float]) -> float:
    """
    Convert a gradient direction to an angle in degrees.

    Accepts 'to top', 'to right', 'to bottom', 'to left', a number, or a
    string such as '45deg'. 0 points up and angles grow clockwise.
    """
    if isinstance(direction, (int, float)):
        return float(direction) % 360

    text = str(direction).strip().lower()
    if text in GRADIENT_DIRECTION_ANGLES:
        return GRADIENT_DIRECTION_ANGLES[text]
    if text.endswith("deg"):
        text = text[:-3]
    try:
        return float(text) % 360
    except ValueError:
        raise ValueError(
            f"Invalid gradient direction: {direction}. Use "
            f"{', '.join(GRADIENT_DIRECTION_ANGLES)} or an angle in degrees."
        )


@dataclass(frozen=True)
class TransparentBackground:
    """No background: the cutout is exported with its alpha intact."""
    kind: ClassVar[str] = BACKGROUND_TRANSPARENT

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind}


@dataclass(frozen=True)
class ColorBackground:
    """Solid color background.

    Attributes:
        color: Hex color string, e.g. '#ffffff'
    """
    color: str = "#ffffff"
    kind: ClassVar[str] = BACKGROUND_COLOR

    def __post_init__(self):
        parse_color(self.color)

    @property
    def rgba(self) -> RgbaColor:
        return parse_color(self.color)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "color": self.color}


@dataclass(frozen=True)
class GradientBackground:
    """Linear gradient background.

    Attributes:
        stops: Two or more color strings, spread evenly along the gradient
        direction: 'to right' (default), 'to left', 'to top', 'to bottom',
                   or an angle in degrees
    """
    stops: Tuple[str, ...] = GRADIENT_PRESETS["sunset"]
    direction: Union[str, float] = DEFAULT_GRADIENT_DIRECTION
    kind: ClassVar[str] = BACKGROUND_GRADIENT

    def __post_init__(self):
        object.__setattr__(self, "stops", tuple(self.stops))
        if len(self.stops) < 2:
            raise ValueError(f"Gradient needs at least 2 color stops, got {len(self.stops)}")
        for stop in self.stops:
            parse_color(stop)
        gradient_angle(self.direction)

    @classmethod
    def from_preset(cls, name: str, direction: Union[str, float] = DEFAULT_GRADIENT_DIRECTION) -> "GradientBackground":
        """Create one of the built-in gradients ('sunset', 'mint', 'ocean', 'fire')."""
        key = str(name).strip().lower()
        if key not in GRADIENT_PRESETS:
            raise ValueError(
                f"Unknown gradient preset: {name}. Available: {', '.join(sorted(GRADIENT_PRESETS))}"
            )
        return cls(stops=GRADIENT_PRESETS[key], direction=direction)

    @property
    def angle(self) -> float:
        return gradient_angle(self.direction)

    @property
    def rgba_stops(self) -> Tuple[RgbaColor, ...]:
        return tuple(parse_color(stop) for stop in self.stops)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "stops": list(self.stops), "direction": self.direction}


@dataclass(frozen=True)
class ImageBackground:
    """Image background, scaled with a "cover" fit behind the cutout.

    Attributes:
        image: PIL Image (None if loading from path)
        image_path: Path to an image file (used if image is None)
    """
    image: Optional[Any] = field(default=None, compare=False)
    image_path: Optional[str] = None
    kind: ClassVar[str] = BACKGROUND_IMAGE

    def __post_init__(self):
        if self.image is None and self.image_path is None:
            raise ValueError("ImageBackground must have either image or image_path")
        if self.image is not None and not hasattr(self.image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(self.image)}")

    def load(self) -> Any:
        """
        Return the background as an RGBA PIL Image.

        Raises:
            ExportFailure: If the image file cannot be loaded
        """
        if self.image is not None:
            return self.image.convert("RGBA")

        path = Path(self.image_path)
        try:
            with Image.open(path) as img:
                return img.convert("RGBA")
        except (OSError, UnidentifiedImageError) as e:
            raise ExportFailure(f"Failed to load background image {path}: {str(e)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (excludes the image object)."""
        return {"type": self.kind, "image_path": self.image_path}


BackgroundSpec = Union[
    TransparentBackground,
    ColorBackground,
    GradientBackground,
    ImageBackground,
]


def background_from_dict(data: Dict[str, Any]) -> BackgroundSpec:
    """
    Create a background spec from its dictionary form.

    Raises:
        ValueError: If the type is unknown or fields are invalid
    """
    kind = str(data.get("type", BACKGROUND_TRANSPARENT)).strip().lower()

    if kind == BACKGROUND_TRANSPARENT:
        return TransparentBackground()
    if kind == BACKGROUND_COLOR:
        return ColorBackground(color=data.get("color", "#ffffff"))
    if kind == BACKGROUND_GRADIENT:
        return GradientBackground(
            stops=tuple(data.get("stops", GRADIENT_PRESETS["sunset"])),
            direction=data.get("direction", DEFAULT_GRADIENT_DIRECTION),
        )
    if kind == BACKGROUND_IMAGE:
        return ImageBackground(image=data.get("image"), image_path=data.get("image_path"))

    raise ValueError(f"Unknown background type: {kind}")


def parse_background_spec(text: str) -> BackgroundSpec:
    """
    Parse the command-line form of a background spec.

    Forms:
        transparent
        color:#rrggbb
        gradient:<preset>[@direction]
        gradient:#aaaaaa,#bbbbbb[,...][@direction]
        image:/path/to/file.jpg

    Raises:
        ValueError: If the text cannot be parsed
    """
    text = str(text).strip()
    kind, _, value = text.partition(":")
    kind = kind.strip().lower()
    value = value.strip()

    if kind == BACKGROUND_TRANSPARENT and not value:
        return TransparentBackground()

    if kind == BACKGROUND_COLOR and value:
        return ColorBackground(color=value)

    if kind == BACKGROUND_GRADIENT and value:
        colors, _, direction = value.partition("@")
        direction = direction.strip() or DEFAULT_GRADIENT_DIRECTION
        stops = [c.strip() for c in colors.split(",") if c.strip()]
        if len(stops) == 1 and not stops[0].startswith("#"):
            return GradientBackground.from_preset(stops[0], direction=direction)
        return GradientBackground(stops=tuple(stops), direction=direction)

    if kind == BACKGROUND_IMAGE and value:
        return ImageBackground(image_path=value)

    raise ValueError(f"Invalid background spec: '{text}'")
