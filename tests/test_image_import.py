"""
Tests for image import and upload validation.

Tests cover:
- Supported extensions
- Missing, oversized, undecodable and unsupported files
- Loading from paths and from bytes
"""

import io

import pytest
from PIL import Image

from OC_Libs.errors import CutoutError, InvalidInputImage
from OC_Libs.SessionLib.image_import import (
    get_supported_image_formats,
    is_supported_format,
    load_image_bytes,
    load_source_image,
    validate_upload,
)


def _encoded(fmt, mode="RGB", size=(12, 8)):
    stream = io.BytesIO()
    Image.new(mode, size, (10, 20, 30)).save(stream, format=fmt)
    return stream.getvalue()


class TestSupportedFormats:
    """Tests for the extension helpers."""

    def test_supported_list(self):
        assert get_supported_image_formats() == [".jpeg", ".jpg", ".png", ".webp"]

    @pytest.mark.parametrize("name,expected", [
        ("photo.png", True),
        ("photo.JPG", True),
        ("photo.webp", True),
        ("photo.gif", False),
        ("photo", False),
    ])
    def test_is_supported_format(self, name, expected):
        assert is_supported_format(name) is expected


class TestValidateUpload:
    """Tests for validate_upload."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidInputImage):
            validate_upload(tmp_path / "missing.png")

    def test_directory_rejected(self, tmp_path):
        folder = tmp_path / "folder.png"
        folder.mkdir()

        with pytest.raises(InvalidInputImage):
            validate_upload(folder)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "anim.gif"
        path.write_bytes(_encoded("GIF"))

        with pytest.raises(InvalidInputImage, match="Unsupported file type"):
            validate_upload(path)

    def test_too_large(self, tmp_path):
        path = tmp_path / "big.png"
        path.write_bytes(_encoded("PNG"))

        with pytest.raises(InvalidInputImage, match="too large"):
            validate_upload(path, max_bytes=10)

    def test_valid_upload(self, tmp_path):
        path = tmp_path / "ok.png"
        path.write_bytes(_encoded("PNG"))

        assert validate_upload(str(path)) == path


class TestLoadSourceImage:
    """Tests for load_source_image."""

    @pytest.mark.parametrize("fmt,suffix", [("PNG", ".png"), ("JPEG", ".jpg")])
    def test_loads_as_rgba(self, tmp_path, fmt, suffix):
        path = tmp_path / f"photo{suffix}"
        path.write_bytes(_encoded(fmt))

        image = load_source_image(path)

        assert image.mode == "RGBA"
        assert image.size == (12, 8)

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not really a png")

        with pytest.raises(InvalidInputImage, match="not a readable image"):
            load_source_image(path)

    def test_disguised_gif_rejected(self, tmp_path):
        path = tmp_path / "sneaky.png"
        path.write_bytes(_encoded("GIF"))

        with pytest.raises(InvalidInputImage, match="Unsupported image type"):
            load_source_image(path)

    def test_error_hierarchy(self, tmp_path):
        with pytest.raises(CutoutError):
            load_source_image(tmp_path / "missing.png")
        with pytest.raises(ValueError):
            load_source_image(tmp_path / "missing.png")


class TestLoadImageBytes:
    """Tests for load_image_bytes."""

    def test_loads_png_bytes(self):
        image = load_image_bytes(_encoded("PNG", mode="RGBA"))

        assert image.mode == "RGBA"

    def test_too_large(self):
        with pytest.raises(InvalidInputImage):
            load_image_bytes(_encoded("PNG"), max_bytes=5)

    def test_garbage(self):
        with pytest.raises(InvalidInputImage):
            load_image_bytes(b"\x00\x01\x02", label="upload.png")
