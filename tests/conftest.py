"""Pytest configuration.

Test images are generated with Pillow into ``tmp_path`` instead of being
checked in, so every fixture below returns either bytes or a path.
"""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from pixconv.imgtypes import DecodedImage

# Solid color of each frame of the test animations
FRAME_COLORS = [
    (254, 0, 0),      # red
    (254, 165, 0),    # orange
    (255, 255, 0),    # yellow
    (0, 128, 1),      # green
    (0, 0, 254),      # blue
    (75, 0, 129),     # indigo
    (238, 130, 239),  # violet
    (0, 0, 0),        # black
]

FRAME_SIZE = (24, 24)
XY = (10, 10)


def encode(image: Image.Image, fmt: str, **params) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **params)
    return buffer.getvalue()


def _solid_frame(color) -> Image.Image:
    frame = Image.new("P", FRAME_SIZE, 0)
    frame.putpalette(list(color) + [255, 255, 255] + [0, 0, 0] * 254)
    return frame


def make_gif(loop: bool) -> bytes:
    frames = [_solid_frame(c) for c in FRAME_COLORS]
    params = {"save_all": True, "append_images": frames[1:], "duration": 100}
    if loop:
        params["loop"] = 0
    return encode(frames[0], "GIF", **params)


@pytest.fixture(params=[True, False], ids=["loop", "noloop"])
def animated_gif(request) -> bytes:
    """8-frame animation, with and without the looping extension"""
    return make_gif(loop=request.param)


@pytest.fixture
def photo_image() -> Image.Image:
    """217x447 RGB gradient with some sharp structure"""
    h, w = 447, 217
    y, x = np.mgrid[0:h, 0:w]
    arr = np.stack(
        [(x * 3) % 256, (y * 5) % 256, ((x // 8 + y // 8) % 2) * 255],
        axis=-1,
    ).astype(np.uint8)
    return Image.fromarray(arr)


@pytest.fixture
def photo_png(photo_image) -> bytes:
    return encode(photo_image, "PNG")


@pytest.fixture
def photo_jpeg(photo_image) -> bytes:
    return encode(photo_image, "JPEG", quality=90)


@pytest.fixture
def blackwhite_bmp() -> bytes:
    """2x2 RGB bitmap, black and white diagonal"""
    arr = np.array([[[0, 0, 0], [255, 255, 255]], [[255, 255, 255], [0, 0, 0]]], dtype=np.uint8)
    return encode(Image.fromarray(arr), "BMP")


@pytest.fixture
def palette_png() -> bytes:
    """4x4 indexed PNG with four colors"""
    image = Image.new("P", (4, 4), 0)
    image.putpalette([255, 0, 0, 0, 255, 0, 0, 0, 255, 255, 255, 255] + [0, 0, 0] * 252)
    image.putdata([i % 4 for i in range(16)])
    return encode(image, "PNG")


@pytest.fixture
def rgba_png() -> bytes:
    arr = np.zeros((6, 8, 4), dtype=np.uint8)
    arr[..., 0] = 200
    arr[..., 3] = np.linspace(0, 255, 8, dtype=np.uint8)
    return encode(Image.fromarray(arr), "PNG")


@pytest.fixture
def rgba_image() -> DecodedImage:
    arr = np.zeros((5, 7, 4), dtype=np.uint8)
    arr[..., 1] = 120
    arr[..., 3] = 128
    return DecodedImage.from_pillow(Image.fromarray(arr))


@pytest.fixture
def rgb_image() -> DecodedImage:
    arr = np.zeros((4, 6, 3), dtype=np.uint8)
    arr[:, :3] = (255, 0, 0)
    arr[:, 3:] = (0, 0, 255)
    return DecodedImage.from_pillow(Image.fromarray(arr))


@pytest.fixture
def gray_image() -> DecodedImage:
    arr = np.array([[0, 255], [255, 0]], dtype=np.uint8)
    return DecodedImage.from_pillow(Image.fromarray(arr))


@pytest.fixture
def write_input(tmp_path: Path):
    """Write bytes to a file in tmp_path and return its path"""

    def _write(data: bytes, name: str = "input.bin") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def pixmap_ppm() -> bytes:
    """5x3 binary PPM, as written by Pillow"""
    arr = np.zeros((3, 5, 3), dtype=np.uint8)
    arr[:, :, 1] = np.arange(5, dtype=np.uint8) * 60
    return encode(Image.fromarray(arr), "PPM")
