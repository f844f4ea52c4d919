"""
Brush tip generation.

A brush tip is a square float32 alpha mask in [0, 1] with a radial falloff.
The falloff starts at ``radius * hardness / 100`` and reaches zero at the
outer radius ``size / 2``. Distances are measured from the tip's middle
pixel ``(size // 2, size // 2)``, which is where the tip lands on the stamp
position, so that pixel is always fully opaque.

Example:
    >>> cache = BrushTipCache()
    >>> tip = cache.get(20, 50)
    >>> tip.shape
    (20, 20)
"""

from typing import Optional, Tuple

import numpy as np


def build_brush_tip(size: int, hardness: float) -> np.ndarray:
    """
    Build a circular alpha mask for the given brush size and hardness.

    Args:
        size: Side of the square mask in pixels (>= 1)
        hardness: 0-100. 100 gives a hard step edge (strictly inside the
                  radius), 0 a linear falloff all the way from the center

    Returns:
        Read-only (size, size) float32 array with values in [0, 1]

    Raises:
        ValueError: If size < 1 or hardness outside 0-100
    """
    size = int(size)
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    if not (0 <= hardness <= 100):
        raise ValueError(f"hardness must be 0-100, got {hardness}")

    radius = size / 2.0
    inner_radius = radius * (hardness / 100.0)
    center = size // 2

    offsets = np.arange(size, dtype=np.float32) - center
    distance = np.hypot(offsets[np.newaxis, :], offsets[:, np.newaxis])

    if hardness >= 100:
        # Zero-width falloff band, use a step edge instead. Even sizes only
        # reach distance == radius on the top and left, so compare strictly.
        tip = (distance < radius).astype(np.float32)
    else:
        falloff = (radius - distance) / (radius - inner_radius)
        tip = np.clip(falloff, 0.0, 1.0).astype(np.float32)

    tip.setflags(write=False)
    return tip


class BrushTipCache:
    """
    Caches the last brush tip, keyed by (size, hardness).

    The tip only changes when the user changes size or hardness, so a
    single-entry cache is enough for interactive painting.
    """

    def __init__(self):
        self._key: Optional[Tuple[int, float]] = None
        self._tip: Optional[np.ndarray] = None
        self.builds = 0

    def get(self, size: int, hardness: float) -> np.ndarray:
        """Return the tip for (size, hardness), rebuilding only on change."""
        key = (int(size), float(hardness))
        if self._tip is None or key != self._key:
            self._tip = build_brush_tip(size, hardness)
            self._key = key
            self.builds += 1
        return self._tip

    def clear(self) -> None:
        self._key = None
        self._tip = None
