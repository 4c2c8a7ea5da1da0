"""
pixconv/operations.py
Image operation pipeline:
- Exact resize (Lanczos)
- Gaussian blur
- Horizontal / vertical flip

Operations are applied strictly in the given order; every step returns a new
DecodedImage and the previous one is dropped.
"""

from typing import Iterable

from PIL import Image, ImageFilter

from .errors import OperationError
from .imgtypes import Blur, ColorModel, DecodedImage, FlipHorizontal, FlipVertical, Operation, Resize
from .logger import get_logger

_logger = get_logger("operations")

RESIZE_FILTER = Image.LANCZOS


def _resize(image: DecodedImage, width: int, height: int) -> DecodedImage:
    if width <= 0 or height <= 0:
        raise OperationError(f"Resize dimensions must be positive, got {width}x{height}")
    pixels = image.pixels
    if image.color_model is ColorModel.INDEXED:
        # Pillow only does nearest-neighbour on palette images
        pixels = pixels.convert("RGBA")
    return DecodedImage.from_pillow(pixels.resize((width, height), RESIZE_FILTER))


def _blur(image: DecodedImage, sigma: int) -> DecodedImage:
    pixels = image.pixels
    if image.color_model is ColorModel.INDEXED:
        # Palette images cannot be filtered
        pixels = pixels.convert("RGBA")
    return DecodedImage.from_pillow(pixels.filter(ImageFilter.GaussianBlur(radius=float(sigma))))


def _flip(image: DecodedImage, method) -> DecodedImage:
    return DecodedImage(pixels=image.pixels.transpose(method), color_model=image.color_model)


def apply_operation(image: DecodedImage, op: Operation) -> DecodedImage:
    """
    Apply one operation.

    Raises:
        OperationError: op is not one of the supported operation kinds,
            or a resize to a non-positive size
    """
    if isinstance(op, Resize):
        return _resize(image, op.width, op.height)
    elif isinstance(op, Blur):
        return _blur(image, op.sigma)
    elif isinstance(op, FlipHorizontal):
        return _flip(image, Image.FLIP_LEFT_RIGHT)
    elif isinstance(op, FlipVertical):
        return _flip(image, Image.FLIP_TOP_BOTTOM)
    raise OperationError(f"Unsupported operation: {op!r}")


def apply_operations(image: DecodedImage, operations: Iterable[Operation]) -> DecodedImage:
    """
    Apply operations in order.

    Args:
        image: Input buffer; not modified
        operations: Ordered operations

    Returns:
        The buffer produced by the last operation (the input itself when
        there are no operations)
    """
    for i, op in enumerate(operations, 1):
        image = apply_operation(image, op)
        _logger.debug("step %d: %r -> %dx%d %s", i, op, image.width, image.height, image.color_model.name)
    return image
