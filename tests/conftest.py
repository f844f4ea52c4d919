"""
Pytest configuration and shared fixtures for Open Cutout tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest
from PIL import Image

from OC_Libs.MaskEditingLib.image_models import PixelBuffer


@pytest.fixture
def temp_output_dir(tmp_path):
    """
    Provide a temporary directory for exported files.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to a temporary directory
    """
    return tmp_path


@pytest.fixture
def opaque_buffer():
    """100x100 fully opaque gray buffer."""
    return PixelBuffer.blank(100, 100, (128, 128, 128, 255))


@pytest.fixture
def gradient_photo():
    """
    100x100 opaque photo where every pixel has a distinct color.

    Returns:
        RGBA PIL Image with R = x * 2, G = y * 2, B = 77
    """
    xs = np.arange(100, dtype=np.uint8)
    pixels = np.zeros((100, 100, 4), dtype=np.uint8)
    pixels[:, :, 0] = xs[np.newaxis, :] * 2
    pixels[:, :, 1] = xs[:, np.newaxis] * 2
    pixels[:, :, 2] = 77
    pixels[:, :, 3] = 255
    return Image.fromarray(pixels)

