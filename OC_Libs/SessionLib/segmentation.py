"""
Segmentation collaborator contract.

The editor does not remove backgrounds itself. Any callable that takes the
source photo and returns the cutout can be plugged in: a local model, a
remote service client, or a test double. The cutout may be returned as a
PIL Image or as encoded image bytes (e.g. a PNG response body).

Functions:
    run_segmentation: Call a segmenter and normalize its result
"""

from typing import Any, Callable
import io
import logging

from PIL import Image, UnidentifiedImageError

from OC_Libs.errors import SegmentationFailure

logger = logging.getLogger(__name__)

# Type alias for segmenter callables
Segmenter = Callable[[Any], Any]


def run_segmentation(source: Any, segmenter: Segmenter) -> Any:
    """
    Produce a cutout for ``source`` using ``segmenter``.

    Args:
        source: RGBA PIL Image of the original photo
        segmenter: Callable returning a PIL Image or encoded image bytes

    Returns:
        RGBA PIL Image of the cutout

    Raises:
        SegmentationFailure: If the segmenter raises or returns something
                             that is not an image
    """
    if not callable(segmenter):
        raise TypeError(f"segmenter must be callable, got {type(segmenter)}")

    try:
        result = segmenter(source)
    except Exception as e:
        logger.warning(f"Segmentation failed: {e}")
        raise SegmentationFailure(
            "Failed to remove background. The image might be too complex or not supported."
        ) from e

    if isinstance(result, (bytes, bytearray)):
        try:
            with Image.open(io.BytesIO(result)) as img:
                result = img.convert("RGBA")
        except (UnidentifiedImageError, OSError) as e:
            raise SegmentationFailure("Segmenter returned data that is not an image") from e

    if not hasattr(result, "convert"):
        raise SegmentationFailure(
            f"Segmenter must return a PIL Image or image bytes, got {type(result)}"
        )

    return result.convert("RGBA")
