"""
Unit tests for image_models module.

Tests PixelBuffer construction and in-place overwrite, SourceImage
alignment and BrushSettings clamping.
"""

import numpy as np
import pytest
from PIL import Image

from OC_Libs.MaskEditingLib.image_models import (
    BrushSettings,
    PixelBuffer,
    SourceImage,
)


class TestPixelBuffer:
    """Tests for PixelBuffer."""

    def test_from_image_converts_to_rgba(self):
        buffer = PixelBuffer.from_image(Image.new("RGB", (30, 20), (1, 2, 3)))

        assert buffer.size == (30, 20)
        assert buffer.pixels.shape == (20, 30, 4)
        assert tuple(buffer.pixels[0, 0]) == (1, 2, 3, 255)

    def test_constructor_copies(self):
        pixels = np.zeros((5, 5, 4), dtype=np.uint8)
        buffer = PixelBuffer(pixels)

        pixels[0, 0, 3] = 255

        assert buffer.alpha[0, 0] == 0

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((5, 5, 3), dtype=np.uint8))

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((0, 5, 4), dtype=np.uint8))

    def test_rejects_wrong_dtype(self):
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((5, 5, 4), dtype=np.float32))

    def test_overwrite_keeps_array_identity(self, opaque_buffer):
        array = opaque_buffer.pixels

        opaque_buffer.overwrite(np.zeros((100, 100, 4), dtype=np.uint8))

        assert opaque_buffer.pixels is array
        assert np.all(opaque_buffer.alpha == 0)

    def test_overwrite_shape_mismatch(self, opaque_buffer):
        with pytest.raises(ValueError):
            opaque_buffer.overwrite(np.zeros((50, 50, 4), dtype=np.uint8))

    def test_to_image_is_snapshot(self, opaque_buffer):
        image = opaque_buffer.to_image()
        opaque_buffer.pixels[:, :, 3] = 0

        assert image.mode == "RGBA"
        assert image.getpixel((0, 0)) == (128, 128, 128, 255)


class TestSourceImage:
    """Tests for SourceImage."""

    def test_converts_to_rgba(self):
        source = SourceImage(Image.new("RGB", (10, 10), (9, 8, 7)))

        assert source.image.mode == "RGBA"
        assert source.size == (10, 10)

    def test_aligned_same_size(self, gradient_photo):
        source = SourceImage(gradient_photo)

        aligned = source.aligned_to((100, 100))

        assert np.array_equal(aligned, np.array(gradient_photo))
        assert not aligned.flags.writeable

    def test_aligned_resamples(self):
        source = SourceImage(Image.new("RGBA", (10, 10), (0, 0, 255, 255)))

        aligned = source.aligned_to((40, 20))

        assert aligned.shape == (20, 40, 4)

    def test_rejects_non_image(self):
        with pytest.raises(TypeError):
            SourceImage("photo.png")


class TestBrushSettings:
    """Tests for BrushSettings."""

    def test_defaults(self):
        settings = BrushSettings()

        assert settings.size == 20
        assert settings.hardness == 100
        assert settings.opacity == 100
        assert settings.tool == "erase"
        assert settings.opacity_fraction == 1.0

    @pytest.mark.parametrize("field,value,expected", [
        ("size", 0, 5),
        ("size", 500, 100),
        ("hardness", -10, 0),
        ("hardness", 150, 100),
        ("opacity", 0, 1),
        ("opacity", 101, 100),
    ])
    def test_clamping(self, field, value, expected):
        settings = BrushSettings(**{field: value})

        assert getattr(settings, field) == expected

    def test_unknown_tool(self):
        with pytest.raises(ValueError):
            BrushSettings(tool="smudge")

    def test_dict_round_trip_ignores_unknown_keys(self):
        settings = BrushSettings(size=33, hardness=40, opacity=70, tool="restore")

        restored = BrushSettings.from_dict({**settings.to_dict(), "extra": 1})

        assert restored == settings
