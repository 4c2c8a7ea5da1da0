"""
pixconv/adjust.py
Color model adjustment before encoding.

Some encoders only accept certain color models. The required conversion is a
fixed table from target format family to transform. Bilevel (PBM) targets get
the grayscale conversion; thresholding happens in the PBM encoder.
"""

from enum import Enum
from typing import Dict, Optional

from .imgtypes import ColorModel, DecodedImage, Jpeg, OutputFormat, Pnm, PnmSubtype
from .logger import get_logger

_logger = get_logger("adjust")


class FormatFamily(Enum):
    """Target format family, as far as color models are concerned"""
    BILEVEL = "bilevel"
    GRAYSCALE = "grayscale"
    STRICT_RGB = "strict_rgb"
    OTHER = "other"


class ColorTransform(Enum):
    GRAYSCALE = ColorModel.GRAYSCALE
    RGB = ColorModel.RGB


COLOR_POLICY: Dict[FormatFamily, Optional[ColorTransform]] = {
    FormatFamily.BILEVEL: ColorTransform.GRAYSCALE,
    FormatFamily.GRAYSCALE: ColorTransform.GRAYSCALE,
    FormatFamily.STRICT_RGB: ColorTransform.RGB,
    FormatFamily.OTHER: None,
}

_PNM_FAMILIES = {
    PnmSubtype.BITMAP: FormatFamily.BILEVEL,
    PnmSubtype.GRAYMAP: FormatFamily.GRAYSCALE,
    PnmSubtype.PIXMAP: FormatFamily.STRICT_RGB,
    PnmSubtype.ARBITRARY: FormatFamily.OTHER,
}


def format_family(fmt: OutputFormat) -> FormatFamily:
    """Family of an output format. JPEG counts as strict RGB: Pillow refuses alpha and palettes."""
    if isinstance(fmt, Pnm):
        return _PNM_FAMILIES[fmt.subtype]
    if isinstance(fmt, Jpeg):
        return FormatFamily.STRICT_RGB
    return FormatFamily.OTHER


def required_transform(family: FormatFamily) -> Optional[ColorTransform]:
    return COLOR_POLICY[family]


def adjust(image: DecodedImage, fmt: OutputFormat, enabled: bool = True) -> DecodedImage:
    """
    Convert the buffer to a color model the target format accepts.

    Args:
        image: Buffer to encode; never modified
        fmt: Target format
        enabled: When False the buffer is always passed through

    Returns:
        ``image`` itself when no conversion applies, otherwise a new buffer
    """
    if not enabled:
        return image

    transform = required_transform(format_family(fmt))
    if transform is None:
        return image

    _logger.debug("converting %s to %s for %s", image.color_model.name, transform.value.name, fmt)
    return DecodedImage(pixels=image.pixels.convert(transform.value.value), color_model=transform.value)
