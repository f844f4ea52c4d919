"""
Tests for the background painter registry and built-in painters.

Tests cover:
- Registration, lookup and removal of painters
- Default painters and the global registry
- Solid color, gradient and cover-fit image painting
"""

import unittest

import numpy as np
from PIL import Image

from OC_Libs.CompositingLib.background_registry import (
    BackgroundPainterRegistry,
    get_default_registry,
    paint_color,
    paint_gradient,
    paint_image,
    register_default_painters,
)
from OC_Libs.CompositingLib.backgrounds import (
    ColorBackground,
    GradientBackground,
    ImageBackground,
    TransparentBackground,
)


class TestBackgroundPainterRegistry(unittest.TestCase):
    """Test BackgroundPainterRegistry."""

    def setUp(self):
        self.registry = BackgroundPainterRegistry()

    def test_register_and_get(self):
        self.registry.register("color", paint_color, "Solid")

        self.assertIs(self.registry.get_painter("color"), paint_color)
        self.assertTrue(self.registry.has_painter("COLOR"))
        self.assertEqual(self.registry.get_description("color"), "Solid")

    def test_duplicate_registration(self):
        self.registry.register("color", paint_color)

        with self.assertRaises(RuntimeError):
            self.registry.register("color", paint_color)

    def test_invalid_registration(self):
        with self.assertRaises(ValueError):
            self.registry.register("", paint_color)
        with self.assertRaises(ValueError):
            self.registry.register("color", "not callable")

    def test_unregister(self):
        self.registry.register("color", paint_color)

        self.assertTrue(self.registry.unregister("color"))
        self.assertFalse(self.registry.unregister("color"))
        self.assertFalse(self.registry.has_painter("color"))

    def test_unknown_kind(self):
        with self.assertRaises(KeyError):
            self.registry.get_painter("video")

    def test_paint_requires_spec(self):
        register_default_painters(self.registry)

        with self.assertRaises(TypeError):
            self.registry.paint("#ff0000", (10, 10))

    def test_default_painters(self):
        register_default_painters(self.registry)

        self.assertEqual(
            self.registry.list_kinds(),
            ["color", "gradient", "image", "transparent"],
        )

    def test_custom_painter(self):
        calls = []

        def painter(spec, size):
            calls.append(size)
            return Image.new("RGBA", size, (1, 2, 3, 255))

        self.registry.register("color", painter)
        result = self.registry.paint(ColorBackground("#000000"), (7, 5))

        self.assertEqual(calls, [(7, 5)])
        self.assertEqual(result.getpixel((0, 0)), (1, 2, 3, 255))

    def test_default_registry_is_singleton(self):
        first = get_default_registry()

        self.assertIs(first, get_default_registry())
        self.assertTrue(first.has_painter("gradient"))


class TestBuiltinPainters(unittest.TestCase):
    """Test the built-in painters."""

    def test_transparent_paints_nothing(self):
        registry = BackgroundPainterRegistry()
        register_default_painters(registry)

        self.assertIsNone(registry.paint(TransparentBackground(), (10, 10)))

    def test_color_fills_output(self):
        image = paint_color(ColorBackground("#00ff00"), (20, 10))

        self.assertEqual(image.size, (20, 10))
        pixels = np.array(image)
        self.assertTrue(np.all(pixels == (0, 255, 0, 255)))

    def test_color_alpha_is_ignored(self):
        image = paint_color(ColorBackground("#ff000080"), (6, 4))

        self.assertTrue(np.all(np.array(image) == (255, 0, 0, 255)))

    def test_gradient_stop_alpha_is_ignored(self):
        spec = GradientBackground(stops=("#00000000", "#ffffff40"))
        pixels = np.array(paint_gradient(spec, (50, 5)))

        self.assertTrue(np.all(pixels[:, :, 3] == 255))
        self.assertGreater(pixels[2, -1, 0], 240)

    def test_gradient_left_to_right(self):
        spec = GradientBackground(stops=("#000000", "#ffffff"), direction="to right")
        pixels = np.array(paint_gradient(spec, (100, 10)))
        row = pixels[5, :, 0].astype(int)

        self.assertLess(row[0], 5)
        self.assertGreater(row[-1], 250)
        self.assertTrue(np.all(np.diff(row) >= 0))
        self.assertTrue(np.all(pixels[:, :, 3] == 255))

    def test_gradient_top_to_bottom(self):
        spec = GradientBackground(stops=("#ff0000", "#0000ff"), direction="to bottom")
        pixels = np.array(paint_gradient(spec, (10, 100)))

        self.assertGreater(pixels[0, 5, 0], 250)
        self.assertGreater(pixels[-1, 5, 2], 250)

    def test_gradient_middle_stop(self):
        spec = GradientBackground(stops=("#000000", "#ffffff", "#000000"))
        pixels = np.array(paint_gradient(spec, (101, 1)))

        self.assertGreater(pixels[0, 50, 0], 250)
        self.assertLess(pixels[0, 0, 0], 10)
        self.assertLess(pixels[0, 100, 0], 10)

    def test_image_cover_fit(self):
        """Wide background is scaled to full height and cropped at the sides."""
        background = Image.new("RGBA", (200, 100), (255, 0, 0, 255))
        background.paste((0, 0, 255, 255), (100, 0, 200, 100))

        result = paint_image(ImageBackground(image=background), (100, 100))

        self.assertEqual(result.size, (100, 100))
        left = result.getpixel((10, 50))
        right = result.getpixel((90, 50))
        self.assertGreater(left[0], 240)
        self.assertLess(left[2], 15)
        self.assertGreater(right[2], 240)
        self.assertLess(right[0], 15)

    def test_image_cover_fit_small_image_is_enlarged(self):
        background = Image.new("RGB", (10, 20), (5, 6, 7))

        result = paint_image(ImageBackground(image=background), (80, 40))

        self.assertEqual(result.size, (80, 40))
        self.assertEqual(result.mode, "RGBA")
        center = np.array(result.getpixel((40, 20)), dtype=int)
        self.assertTrue(np.all(np.abs(center - (5, 6, 7, 255)) <= 1))


if __name__ == "__main__":
    unittest.main()
