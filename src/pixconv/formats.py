"""
pixconv/formats.py
Output format resolution:
- Format name / file extension -> OutputFormat
- JPEG quality and PNM subtype/encoding settings
- Magic-number detection of encoded output
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigError
from .imgtypes import Bmp, Gif, Ico, Jpeg, OutputFormat, Png, Pnm, PnmSubtype, SampleEncoding

DEFAULT_JPEG_QUALITY = 80

# (magic, format name); longest prefixes first where they overlap
_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "png"),
    (b"GIF87a", "gif"),
    (b"GIF89a", "gif"),
    (b"\xff\xd8\xff", "jpeg"),
    (b"\x00\x00\x01\x00", "ico"),
    (b"BM", "bmp"),
)

_PNM_MAGIC = (b"P1", b"P2", b"P3", b"P4", b"P5", b"P6", b"P7")

_PNM_DEFAULTS = {
    "pbm": PnmSubtype.BITMAP,
    "pgm": PnmSubtype.GRAYMAP,
    "ppm": PnmSubtype.PIXMAP,
    "pam": PnmSubtype.ARBITRARY,
}


@dataclass(frozen=True)
class PnmChoice:
    """An explicit portable-map subtype and sample encoding"""
    subtype: PnmSubtype
    encoding: SampleEncoding = SampleEncoding.BINARY


# Command line flag suffix -> choice
PNM_CHOICES = {
    "bitmap-ascii": PnmChoice(PnmSubtype.BITMAP, SampleEncoding.ASCII),
    "graymap-ascii": PnmChoice(PnmSubtype.GRAYMAP, SampleEncoding.ASCII),
    "pixmap-ascii": PnmChoice(PnmSubtype.PIXMAP, SampleEncoding.ASCII),
    "bitmap-binary": PnmChoice(PnmSubtype.BITMAP, SampleEncoding.BINARY),
    "graymap-binary": PnmChoice(PnmSubtype.GRAYMAP, SampleEncoding.BINARY),
    "pixmap-binary": PnmChoice(PnmSubtype.PIXMAP, SampleEncoding.BINARY),
    "arbitrarymap": PnmChoice(PnmSubtype.ARBITRARY, SampleEncoding.BINARY),
}


@dataclass(frozen=True)
class JpegSettings:
    quality: int = DEFAULT_JPEG_QUALITY

    def __post_init__(self):
        if not 1 <= self.quality <= 100:
            raise ConfigError(f"JPEG quality must be between 1 and 100, got {self.quality}")


@dataclass(frozen=True)
class PnmSettings:
    """PNM encoding; choice=None falls back to the per-extension default"""
    choice: Optional[PnmChoice] = None


def format_from_name(
    name: str,
    jpeg: Optional[JpegSettings] = None,
    pnm: Optional[PnmSettings] = None,
) -> OutputFormat:
    """
    Resolve a format name (or extension, without the dot) to an output format.

    Raises:
        ConfigError: the name is not a supported output format
    """
    jpeg = jpeg or JpegSettings()
    pnm = pnm or PnmSettings()
    key = name.strip().lower().lstrip(".")

    if key == "bmp":
        return Bmp()
    if key == "gif":
        return Gif()
    if key == "ico":
        return Ico()
    if key in ("jpg", "jpeg"):
        return Jpeg(quality=jpeg.quality)
    if key == "png":
        return Png()
    if key in _PNM_DEFAULTS:
        if pnm.choice is not None:
            return Pnm(subtype=pnm.choice.subtype, encoding=pnm.choice.encoding)
        return Pnm(subtype=_PNM_DEFAULTS[key], encoding=SampleEncoding.BINARY)
    raise ConfigError(
        f"Unsupported output format: {name!r} "
        "(supported: bmp, gif, ico, jpg, jpeg, png, pbm, pgm, ppm, pam)"
    )


def format_from_path(
    path: Union[str, Path],
    jpeg: Optional[JpegSettings] = None,
    pnm: Optional[PnmSettings] = None,
) -> OutputFormat:
    """Resolve the output format from a path's extension"""
    suffix = Path(path).suffix
    if not suffix:
        raise ConfigError(f"Cannot determine the output format of {path}: no extension (use --force-format)")
    return format_from_name(suffix, jpeg, pnm)


def guess_format(data: bytes) -> Optional[str]:
    """
    Detect the format of encoded image bytes from their magic number.

    Returns:
        "bmp", "gif", "ico", "jpeg", "png", "pnm" or None
    """
    for magic, name in _SIGNATURES:
        if data.startswith(magic):
            return name
    if data[:2] in _PNM_MAGIC:
        return "pnm"
    return None
