"""
Image import and upload validation for Open Cutout.

Accepts PNG, JPEG and WEBP files up to 10 MB, the same rules the upload
area enforces, and returns them as RGBA PIL Images.

Functions:
    get_supported_image_formats: Supported file extensions
    is_supported_format: Check a path's extension
    validate_upload: Check extension, size and decodability of a file
    load_source_image: Validate and load a photo
    load_image_bytes: Validate and load an in-memory upload
"""

from pathlib import Path
from typing import Any, List
import io

from PIL import Image, UnidentifiedImageError

from OC_Libs.constants import (
    MAX_UPLOAD_BYTES,
    SUPPORTED_UPLOAD_FORMATS,
    SUPPORTED_UPLOAD_IMAGES,
)
from OC_Libs.errors import InvalidInputImage


def get_supported_image_formats() -> List[str]:
    """
    Get list of supported upload formats.

    Returns:
        List of file extensions (e.g., ['.jpeg', '.jpg', '.png', '.webp'])
    """
    return sorted(SUPPORTED_UPLOAD_IMAGES)


def is_supported_format(file_path: Path) -> bool:
    """True if the file extension is an accepted upload type."""
    return Path(file_path).suffix.lower() in SUPPORTED_UPLOAD_IMAGES


def _check_size(size_bytes: int, label: str, max_bytes: int) -> None:
    if size_bytes > max_bytes:
        raise InvalidInputImage(
            f"File too large: {label} is {size_bytes} bytes, "
            f"maximum is {max_bytes} bytes."
        )


def _decode(stream: Any, label: str) -> Any:
    try:
        with Image.open(stream) as img:
            if img.format not in SUPPORTED_UPLOAD_FORMATS:
                raise InvalidInputImage(
                    f"Unsupported image type {img.format} in {label}. "
                    f"Please upload JPG, PNG, or WEBP."
                )
            return img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidInputImage(f"File is not a readable image: {label}") from e


def validate_upload(file_path: Any, max_bytes: int = MAX_UPLOAD_BYTES) -> Path:
    """
    Validate an upload by path without decoding it.

    Args:
        file_path: Path to the uploaded file
        max_bytes: Size limit in bytes

    Returns:
        The path as a Path object

    Raises:
        InvalidInputImage: If the file is missing, has an unsupported
                           extension, or is too large
    """
    path = Path(file_path)
    if not path.exists() or not path.is_file():
        raise InvalidInputImage(f"Image file not found: {path}")

    if not is_supported_format(path):
        raise InvalidInputImage(
            f"Unsupported file type: {path.suffix or '(none)'}. "
            f"Please upload JPG, PNG, or WEBP."
        )

    _check_size(path.stat().st_size, str(path), max_bytes)
    return path


def load_source_image(file_path: Any, max_bytes: int = MAX_UPLOAD_BYTES) -> Any:
    """
    Validate and load an image file.

    Returns:
        RGBA PIL Image

    Raises:
        InvalidInputImage: If validation or decoding fails
    """
    path = validate_upload(file_path, max_bytes)
    return _decode(path, str(path))


def load_image_bytes(data: bytes, label: str = "upload", max_bytes: int = MAX_UPLOAD_BYTES) -> Any:
    """
    Validate and load an in-memory upload.

    Returns:
        RGBA PIL Image

    Raises:
        InvalidInputImage: If the data is too large, not an image, or of an
                           unsupported type
    """
    _check_size(len(data), label, max_bytes)
    return _decode(io.BytesIO(data), label)
