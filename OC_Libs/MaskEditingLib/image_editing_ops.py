"""
Core pixel operations for Open Cutout.

This module provides the low-level stamp operations that write a brush tip
into an RGBA pixel array. All arrays are ``(height, width, 4)`` uint8 with
straight alpha; the tip is a float32 mask in [0, 1].

Functions:
    stamp_region: Compute the buffer/tip slices covered by a stamp
    apply_erase_stamp: Reduce alpha under the tip
    apply_restore_stamp: Composite source pixels under the tip
"""

import math
from typing import Optional, Tuple

import numpy as np

Region = Tuple[Tuple[slice, slice], Tuple[slice, slice]]


def stamp_region(
    buffer_shape: Tuple[int, ...],
    tip_size: int,
    x: float,
    y: float,
) -> Optional[Region]:
    """
    Compute which buffer pixels a stamp at (x, y) covers.

    The tip's middle pixel ``tip_size // 2`` lands on buffer pixel
    ``(floor(x), floor(y))``. The covered area is clipped to the buffer.

    Args:
        buffer_shape: Shape of the destination array (height, width, ...)
        tip_size: Side of the square tip
        x, y: Stamp position in buffer pixel coordinates

    Returns:
        ((buffer_rows, buffer_cols), (tip_rows, tip_cols)) slices, or None if
        the stamp lies completely outside the buffer
    """
    height, width = buffer_shape[0], buffer_shape[1]
    center = tip_size // 2
    left = int(math.floor(x)) - center
    top = int(math.floor(y)) - center

    x0 = max(left, 0)
    y0 = max(top, 0)
    x1 = min(left + tip_size, width)
    y1 = min(top + tip_size, height)
    if x0 >= x1 or y0 >= y1:
        return None

    return (
        (slice(y0, y1), slice(x0, x1)),
        (slice(y0 - top, y1 - top), slice(x0 - left, x1 - left)),
    )


def apply_erase_stamp(
    pixels: np.ndarray,
    tip: np.ndarray,
    x: float,
    y: float,
    opacity: float,
) -> bool:
    """
    Erase under the tip: ``alpha *= 1 - tip * opacity``. RGB is unchanged.

    Args:
        pixels: Destination RGBA array, modified in place
        tip: Brush tip mask
        x, y: Stamp position in buffer pixel coordinates
        opacity: Stamp opacity (0.0-1.0)

    Returns:
        True if any pixel was covered
    """
    region = stamp_region(pixels.shape, tip.shape[0], x, y)
    if region is None:
        return False
    (rows, cols), (tip_rows, tip_cols) = region

    weight = tip[tip_rows, tip_cols] * opacity
    alpha = pixels[rows, cols, 3].astype(np.float32)
    alpha *= 1.0 - weight
    pixels[rows, cols, 3] = np.clip(np.rint(alpha), 0, 255).astype(np.uint8)
    return True


def apply_restore_stamp(
    pixels: np.ndarray,
    source: np.ndarray,
    tip: np.ndarray,
    x: float,
    y: float,
    opacity: float,
) -> bool:
    """
    Restore under the tip by compositing the source photo over the buffer.

    The source pixel at the same location is treated as the foreground with
    alpha ``source_alpha * tip * opacity`` and composited with the standard
    straight-alpha "over" operator.

    Args:
        pixels: Destination RGBA array, modified in place
        source: Source RGBA array aligned with ``pixels`` (same shape)
        tip: Brush tip mask
        x, y: Stamp position in buffer pixel coordinates
        opacity: Stamp opacity (0.0-1.0)

    Returns:
        True if any pixel was covered

    Raises:
        ValueError: If source and destination shapes differ
    """
    if source.shape != pixels.shape:
        raise ValueError(
            f"Source shape {source.shape} does not match buffer shape {pixels.shape}"
        )

    region = stamp_region(pixels.shape, tip.shape[0], x, y)
    if region is None:
        return False
    (rows, cols), (tip_rows, tip_cols) = region

    src = source[rows, cols].astype(np.float32)
    dst = pixels[rows, cols].astype(np.float32)

    src_alpha = (src[:, :, 3] / 255.0) * (tip[tip_rows, tip_cols] * opacity)
    dst_alpha = dst[:, :, 3] / 255.0
    dst_weight = dst_alpha * (1.0 - src_alpha)
    out_alpha = src_alpha + dst_weight

    rgb = (
        src[:, :, :3] * src_alpha[:, :, np.newaxis]
        + dst[:, :, :3] * dst_weight[:, :, np.newaxis]
    )
    covered = out_alpha > 0
    safe_alpha = np.where(covered, out_alpha, 1.0)
    rgb = np.where(
        covered[:, :, np.newaxis],
        rgb / safe_alpha[:, :, np.newaxis],
        dst[:, :, :3],
    )

    pixels[rows, cols, :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
    pixels[rows, cols, 3] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)
    return True
