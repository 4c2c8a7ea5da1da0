"""
pixconv/imgtypes.py
Data structure definitions: DecodedImage, operations, frame selectors,
output formats and export targets.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

from PIL import Image


class ColorModel(Enum):
    """Color model of a decoded buffer (values are Pillow modes)"""
    GRAYSCALE = "L"
    RGB = "RGB"
    RGBA = "RGBA"
    INDEXED = "P"


@dataclass(frozen=True)
class DecodedImage:
    """
    Decoded pixel buffer with its color model tag.

    Stages never modify ``pixels``; each one hands back a new DecodedImage.
    """
    pixels: Image.Image
    color_model: ColorModel

    def __post_init__(self):
        width, height = self.pixels.size
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if self.pixels.mode != self.color_model.value:
            raise ValueError(
                f"Pixel mode {self.pixels.mode} does not match color model {self.color_model.name}"
            )

    @classmethod
    def from_pillow(cls, pixels: Image.Image) -> "DecodedImage":
        """Wrap a Pillow image whose mode is one of the four color models"""
        return cls(pixels=pixels, color_model=ColorModel(pixels.mode))

    @property
    def width(self) -> int:
        return self.pixels.size[0]

    @property
    def height(self) -> int:
        return self.pixels.size[1]

    @property
    def size(self):
        return self.pixels.size


# ============================================================================
# Operations
# ============================================================================

@dataclass(frozen=True)
class Resize:
    """Resample to exactly width x height"""
    width: int
    height: int


@dataclass(frozen=True)
class Blur:
    """Gaussian blur, sigma is the standard deviation"""
    sigma: int


@dataclass(frozen=True)
class FlipHorizontal:
    """Mirror left to right"""


@dataclass(frozen=True)
class FlipVertical:
    """Mirror top to bottom"""


Operation = Union[Resize, Blur, FlipHorizontal, FlipVertical]


# ============================================================================
# Frame selection
# ============================================================================

@dataclass(frozen=True)
class First:
    """First frame of an animation"""


@dataclass(frozen=True)
class Last:
    """Last frame of an animation"""


@dataclass(frozen=True)
class Nth:
    """Zero-based frame index"""
    index: int


FrameSelector = Union[First, Last, Nth]


# ============================================================================
# Output formats
# ============================================================================

class PnmSubtype(Enum):
    """Portable-map subtype"""
    BITMAP = "bitmap"
    GRAYMAP = "graymap"
    PIXMAP = "pixmap"
    ARBITRARY = "arbitrary"


class SampleEncoding(Enum):
    """Sample encoding of a portable map"""
    ASCII = "ascii"
    BINARY = "binary"


@dataclass(frozen=True)
class Bmp:
    name = "bmp"


@dataclass(frozen=True)
class Gif:
    name = "gif"


@dataclass(frozen=True)
class Ico:
    name = "ico"


@dataclass(frozen=True)
class Jpeg:
    name = "jpeg"
    quality: int = 80


@dataclass(frozen=True)
class Png:
    name = "png"


@dataclass(frozen=True)
class Pnm:
    name = "pnm"
    subtype: PnmSubtype = PnmSubtype.PIXMAP
    encoding: SampleEncoding = SampleEncoding.BINARY


OutputFormat = Union[Bmp, Gif, Ico, Jpeg, Png, Pnm]


# ============================================================================
# Export targets
# ============================================================================

@dataclass(frozen=True)
class FileTarget:
    """Write to a file, created or truncated"""
    path: Path


@dataclass(frozen=True)
class Stdout:
    """Write the encoded bytes to standard output"""


ExportTarget = Union[FileTarget, Stdout]


@dataclass
class ImageInfo:
    """Summary of an input image, as reported by ``pixconv info``"""
    format: str
    width: int
    height: int
    color_model: ColorModel
    frame_count: int = 1


@dataclass
class ConversionReport:
    """
    Conversion summary
    """
    input_format: str
    input_size: tuple
    output_size: tuple
    output_format: str
    operation_count: int = 0
    adjusted: bool = False
    elapsed_ms: float = 0.0

    def summary(self) -> str:
        """Generate summary text"""
        in_w, in_h = self.input_size
        out_w, out_h = self.output_size
        lines = [
            f"Input:  {self.input_format} {in_w}x{in_h}",
            f"Output: {self.output_format} {out_w}x{out_h}",
            f"Operations applied: {self.operation_count}",
            f"Color adjusted: {'yes' if self.adjusted else 'no'}",
            f"Elapsed: {self.elapsed_ms:.1f} ms",
        ]
        return "\n".join(lines)
