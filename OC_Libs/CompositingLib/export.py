"""
Export of composited cutouts.

Encodes a rendered image as PNG (alpha preserved) or JPEG (flattened onto
white first, since JPEG cannot store alpha), either to bytes or to a file.

Classes:
    ExportConfig: Export format and file options

Functions:
    normalize_format: Map 'png'/'jpg'/'jpeg' to PIL format names
    default_export_filename: Default download name for a format
    prepare_for_format: Convert an image for the target format
    export_image: Encode an image to bytes
    save_export: Write an image to disk
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional
import io
import logging

from OC_Libs.constants import (
    DEFAULT_EXPORT_BASENAME,
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_FLATTEN_COLOR,
    DEFAULT_JPEG_QUALITY,
    EXPORT_FORMAT_ALIASES,
    EXPORT_FORMAT_EXTENSIONS,
)
from OC_Libs.errors import ExportFailure
from OC_Libs.CompositingLib.compositor import flatten_for_opaque_export

logger = logging.getLogger(__name__)


def normalize_format(save_format: str) -> str:
    """
    Map a user-facing format name to the PIL format name.

    Raises:
        ValueError: If the format is not PNG or JPEG
    """
    key = str(save_format).strip().lstrip(".").upper()
    if key not in EXPORT_FORMAT_ALIASES:
        raise ValueError(
            f"Unsupported export format: {save_format}. Use PNG or JPEG."
        )
    return EXPORT_FORMAT_ALIASES[key]


def default_export_filename(save_format: str = DEFAULT_EXPORT_FORMAT) -> str:
    """Default download name, e.g. 'removed-bg.png'."""
    fmt = normalize_format(save_format)
    return f"{DEFAULT_EXPORT_BASENAME}{EXPORT_FORMAT_EXTENSIONS[fmt]}"


@dataclass
class ExportConfig:
    """Configuration for exporting a composited image.

    Attributes:
        save_format: PNG or JPEG (JPG accepted)
        quality: JPEG quality 1-100 (default: 95, only for JPEG)
        flatten_color: Color JPEG exports are flattened onto
        create_directories: Create output directories if they don't exist
        overwrite: Overwrite existing files
    """
    save_format: str = DEFAULT_EXPORT_FORMAT
    quality: int = DEFAULT_JPEG_QUALITY
    flatten_color: str = DEFAULT_FLATTEN_COLOR
    create_directories: bool = True
    overwrite: bool = False

    def __post_init__(self):
        self.save_format = normalize_format(self.save_format)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)

    def get_save_kwargs(self) -> Dict[str, Any]:
        """Get PIL Image.save() kwargs based on format."""
        kwargs: Dict[str, Any] = {"format": self.save_format}
        if self.save_format == "JPEG":
            kwargs["quality"] = max(1, min(100, int(self.quality)))
        return kwargs


def prepare_for_format(image: Any, config: ExportConfig) -> Any:
    """Flatten images with alpha for JPEG, ensure RGBA for PNG."""
    if not hasattr(image, "mode"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if config.save_format == "JPEG":
        if image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info:
            return flatten_for_opaque_export(image, config.flatten_color)
        return image.convert("RGB")

    return image.convert("RGBA")


def export_image(image: Any, config: Optional[ExportConfig] = None) -> bytes:
    """
    Encode a composited image.

    Args:
        image: PIL Image, typically ``Compositor.render(...)`` output
        config: Export configuration (PNG by default)

    Returns:
        Encoded image bytes

    Raises:
        ExportFailure: If encoding fails
    """
    if config is None:
        config = ExportConfig()

    prepared = prepare_for_format(image, config)
    stream = io.BytesIO()
    try:
        prepared.save(stream, **config.get_save_kwargs())
    except (OSError, ValueError) as e:
        raise ExportFailure(f"Failed to encode {config.save_format} image: {str(e)}")

    data = stream.getvalue()
    logger.info(f"Exported {prepared.size[0]}x{prepared.size[1]} {config.save_format} ({len(data)} bytes)")
    return data


def save_export(image: Any, output_path: Any, config: Optional[ExportConfig] = None) -> Path:
    """
    Encode and write a composited image to disk.

    Args:
        image: PIL Image to save
        output_path: Target file path
        config: Export configuration (PNG by default)

    Returns:
        Path where the image was saved

    Raises:
        ExportFailure: If the file exists and overwrite=False, or writing fails
    """
    if config is None:
        config = ExportConfig()

    output_file = Path(output_path)

    if output_file.exists() and not config.overwrite:
        raise ExportFailure(
            f"Output file already exists: {output_file}. "
            f"Set overwrite=True to replace."
        )

    data = export_image(image, config)
    try:
        if config.create_directories:
            output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_bytes(data)
    except OSError as e:
        raise ExportFailure(f"Failed to save image to {output_file}: {str(e)}")

    return output_file
