"""
pixconv/loader.py
Input loading:
- Read the whole input (file or stdin) into memory
- Animated GIF frame selection
- Generic content-based decoding for everything else

Decoding is done by Pillow; the file extension is never consulted.
"""

import io
import sys
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageSequence, UnidentifiedImageError

from .errors import DecodeError, FrameOutOfRange, ImageIOError
from .imgtypes import ColorModel, DecodedImage, First, FrameSelector, ImageInfo, Last, Nth
from .logger import get_logger

_logger = get_logger("loader")

GIF_MAGIC = (b"GIF87a", b"GIF89a")

# Pillow modes folded onto the four supported color models
_MODE_NORMALIZATION = {
    "1": ColorModel.GRAYSCALE,
    "L": ColorModel.GRAYSCALE,
    "I": ColorModel.GRAYSCALE,
    "I;16": ColorModel.GRAYSCALE,
    "I;16B": ColorModel.GRAYSCALE,
    "I;16L": ColorModel.GRAYSCALE,
    "F": ColorModel.GRAYSCALE,
    "P": ColorModel.INDEXED,
    "PA": ColorModel.RGBA,
    "LA": ColorModel.RGBA,
    "La": ColorModel.RGBA,
    "RGB": ColorModel.RGB,
    "RGBX": ColorModel.RGB,
    "CMYK": ColorModel.RGB,
    "YCbCr": ColorModel.RGB,
    "LAB": ColorModel.RGB,
    "HSV": ColorModel.RGB,
    "RGBA": ColorModel.RGBA,
    "RGBa": ColorModel.RGBA,
}

# Pillow signals bad input with any of these
_DECODE_FAILURES = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    ValueError,
    SyntaxError,
    EOFError,
)


# ============================================================================
# Reading
# ============================================================================

def read_input(path: Union[str, Path, None] = None) -> bytes:
    """
    Read the entire input into memory.

    Args:
        path: Input file; None or "-" reads standard input

    Returns:
        Raw bytes
    """
    try:
        if path is None or str(path) == "-":
            data = sys.stdin.buffer.read()
            _logger.debug("read %d bytes from stdin", len(data))
            return data
        data = Path(path).read_bytes()
        _logger.debug("read %d bytes from %s", len(data), path)
        return data
    except OSError as e:
        raise ImageIOError(f"Unable to read input {path or 'stdin'}: {e}") from e


def starts_with_gif_magic(data: bytes) -> bool:
    return data.startswith(GIF_MAGIC)


# ============================================================================
# Decoding
# ============================================================================

def normalize(pixels: Image.Image) -> DecodedImage:
    """Convert a freshly decoded Pillow image to one of the supported color models"""
    model = _MODE_NORMALIZATION.get(pixels.mode)
    if model is None:
        raise DecodeError(f"Unsupported pixel mode: {pixels.mode}")
    if pixels.mode.startswith("I"):
        pixels = _wide_to_l(pixels)
    elif pixels.mode != model.value:
        pixels = pixels.convert(model.value)
    return DecodedImage(pixels=pixels, color_model=model)


def _wide_to_l(pixels: Image.Image) -> Image.Image:
    """Integer samples are 16-bit data: keep the high byte"""
    if pixels.mode != "I":
        pixels = pixels.convert("I")
    arr = np.clip(np.asarray(pixels), 0, 0xFFFF) >> 8
    return Image.fromarray(arr.astype(np.uint8))


def resolve_frame_index(selector: FrameSelector, frame_count: int) -> int:
    """
    Resolve a frame selector to a zero-based index.

    Raises:
        FrameOutOfRange: the index does not address an existing frame
    """
    if isinstance(selector, First):
        index = 0
    elif isinstance(selector, Nth):
        index = selector.index
    elif isinstance(selector, Last):
        if frame_count == 0:
            raise FrameOutOfRange(0, 0)
        index = frame_count - 1
    else:
        raise TypeError(f"Unknown frame selector: {selector!r}")

    if index < 0 or index >= frame_count:
        raise FrameOutOfRange(index, frame_count)
    return index


def _decode_frames(data: bytes) -> List[Image.Image]:
    """Decode every frame of an animation, composited, in file order"""
    try:
        with Image.open(io.BytesIO(data)) as im:
            return [frame.convert("RGBA") for frame in ImageSequence.Iterator(im)]
    except _DECODE_FAILURES as e:
        raise DecodeError(f"Unable to decode animated image: {e}") from e


def load_gif(data: bytes, selector: FrameSelector) -> DecodedImage:
    frames = _decode_frames(data)
    index = resolve_frame_index(selector, len(frames))
    _logger.debug("selected frame %d of %d", index, len(frames))
    return DecodedImage(pixels=frames[index], color_model=ColorModel.RGBA)


def load_generic(data: bytes) -> Tuple[str, DecodedImage]:
    try:
        with Image.open(io.BytesIO(data)) as im:
            _logger.debug("detected %s %dx%d mode=%s", im.format, im.width, im.height, im.mode)
            fmt = (im.format or "unknown").lower()
            im.load()
            pixels = im.copy()
    except _DECODE_FAILURES as e:
        raise DecodeError(f"Unable to decode image: {e}") from e
    return fmt, normalize(pixels)


def decode(data: bytes, frame_selector: Optional[FrameSelector] = None) -> Tuple[str, DecodedImage]:
    """
    Decode raw bytes into a single image.

    Args:
        data: Whole input
        frame_selector: Frame of an animated GIF to keep (default First);
            ignored for every other input

    Returns:
        (detected input format name, e.g. "png" or "tiff", DecodedImage)

    Raises:
        DecodeError: malformed or unsupported content
        FrameOutOfRange: selected frame does not exist
    """
    if frame_selector is None:
        frame_selector = First()
    if starts_with_gif_magic(data):
        return "gif", load_gif(data, frame_selector)
    return load_generic(data)


def load(data: bytes, frame_selector: Optional[FrameSelector] = None) -> DecodedImage:
    """Decode raw bytes into a single image, see decode()"""
    return decode(data, frame_selector)[1]


def probe(data: bytes) -> ImageInfo:
    """Describe an input without running a conversion"""
    try:
        with Image.open(io.BytesIO(data)) as im:
            frame_count = getattr(im, "n_frames", 1)
            fmt = (im.format or "unknown").lower()
            width, height = im.size
            mode = im.mode
    except _DECODE_FAILURES as e:
        raise DecodeError(f"Unable to decode image: {e}") from e
    model = _MODE_NORMALIZATION.get(mode)
    if model is None:
        raise DecodeError(f"Unsupported pixel mode: {mode}")
    if starts_with_gif_magic(data):
        model = ColorModel.RGBA
    return ImageInfo(format=fmt, width=width, height=height, color_model=model, frame_count=frame_count)
