"""
Tests for PNG/JPEG export.

Tests cover:
- Format normalization and default filenames
- ExportConfig validation and save kwargs
- Alpha preserved in PNG, flattened onto white in JPEG
- File output, directory creation and overwrite protection
"""

import io
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from OC_Libs.CompositingLib.export import (
    ExportConfig,
    default_export_filename,
    export_image,
    normalize_format,
    prepare_for_format,
    save_export,
)
from OC_Libs.errors import ExportFailure


def _cutout():
    image = Image.new("RGBA", (20, 20), (0, 0, 0, 0))
    image.paste((200, 30, 30, 255), (0, 0, 10, 20))
    return image


class TestFormatHelpers(unittest.TestCase):
    """Test normalize_format and default_export_filename."""

    def test_normalize(self):
        self.assertEqual(normalize_format("png"), "PNG")
        self.assertEqual(normalize_format("jpg"), "JPEG")
        self.assertEqual(normalize_format(".JPEG"), "JPEG")

    def test_unsupported_format(self):
        with self.assertRaises(ValueError):
            normalize_format("gif")

    def test_default_filename(self):
        self.assertEqual(default_export_filename(), "removed-bg.png")
        self.assertEqual(default_export_filename("jpg"), "removed-bg.jpg")


class TestExportConfig(unittest.TestCase):
    """Test ExportConfig."""

    def test_defaults(self):
        config = ExportConfig()

        self.assertEqual(config.save_format, "PNG")
        self.assertEqual(config.get_save_kwargs(), {"format": "PNG"})

    def test_jpeg_quality_clamped(self):
        config = ExportConfig(save_format="jpg", quality=150)

        self.assertEqual(config.save_format, "JPEG")
        self.assertEqual(config.get_save_kwargs(), {"format": "JPEG", "quality": 100})

    def test_invalid_format(self):
        with self.assertRaises(ValueError):
            ExportConfig(save_format="bmp")

    def test_dict_round_trip(self):
        config = ExportConfig(save_format="JPEG", quality=80, overwrite=True)

        self.assertEqual(ExportConfig.from_dict(config.to_dict()), config)


class TestExportImage(unittest.TestCase):
    """Test export_image and prepare_for_format."""

    def test_png_keeps_alpha(self):
        data = export_image(_cutout())

        with Image.open(io.BytesIO(data)) as decoded:
            self.assertEqual(decoded.format, "PNG")
            self.assertEqual(decoded.mode, "RGBA")
            self.assertEqual(decoded.getpixel((15, 5)), (0, 0, 0, 0))
            self.assertEqual(decoded.getpixel((5, 5)), (200, 30, 30, 255))

    def test_jpeg_flattens_onto_white(self):
        data = export_image(_cutout(), ExportConfig(save_format="JPEG"))

        with Image.open(io.BytesIO(data)) as decoded:
            self.assertEqual(decoded.format, "JPEG")
            self.assertEqual(decoded.mode, "RGB")
            r, g, b = decoded.getpixel((17, 10))
            self.assertGreater(min(r, g, b), 245)

    def test_prepare_jpeg_from_rgb(self):
        prepared = prepare_for_format(
            Image.new("RGB", (4, 4), (1, 2, 3)), ExportConfig(save_format="JPEG")
        )

        self.assertEqual(prepared.mode, "RGB")
        self.assertEqual(prepared.getpixel((0, 0)), (1, 2, 3))

    def test_prepare_rejects_non_image(self):
        with self.assertRaises(TypeError):
            prepare_for_format(b"png", ExportConfig())


class TestSaveExport(unittest.TestCase):
    """Test save_export."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.output_dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_save_png(self):
        path = save_export(_cutout(), self.output_dir / "removed-bg.png")

        self.assertTrue(path.exists())
        with Image.open(path) as saved:
            self.assertEqual(saved.size, (20, 20))

    def test_creates_directories(self):
        path = save_export(_cutout(), self.output_dir / "nested" / "out.png")

        self.assertTrue(path.exists())

    def test_failed_export_creates_no_directories(self):
        with self.assertRaises(TypeError):
            save_export(b"png", self.output_dir / "nested" / "out.png")

        self.assertFalse((self.output_dir / "nested").exists())

    def test_refuses_overwrite(self):
        target = self.output_dir / "out.png"
        save_export(_cutout(), target)

        with self.assertRaises(ExportFailure):
            save_export(_cutout(), target)

    def test_overwrite_allowed(self):
        target = self.output_dir / "out.jpg"
        save_export(_cutout(), target, ExportConfig(save_format="JPEG"))

        save_export(_cutout(), target, ExportConfig(save_format="JPEG", overwrite=True))

        with Image.open(target) as saved:
            self.assertEqual(saved.format, "JPEG")


if __name__ == "__main__":
    unittest.main()
