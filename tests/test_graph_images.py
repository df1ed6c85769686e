import pytest
from PIL import Image

from graph_errors import ImageEncodingError
from graph_images import to_jpeg


def test_png_becomes_jpeg(png_bytes):
    assert to_jpeg(png_bytes)[:2] == b"\xff\xd8"


def test_empty_image_fails():
    with pytest.raises(ImageEncodingError):
        to_jpeg(b"")


def test_decompression_bomb_is_image_error(monkeypatch, png_bytes):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

    with pytest.raises(ImageEncodingError):
        to_jpeg(png_bytes)
