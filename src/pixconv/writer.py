"""
pixconv/writer.py
Encoding and export:
- Encode a buffer with Pillow (BMP, GIF, ICO, JPEG, PNG) or the netpbm writer
- Export to a file, or to standard output after encoding completely in memory
"""

import io
import sys
from typing import BinaryIO, Optional

from PIL import Image

from .errors import EncodeError, ImageIOError
from .imgtypes import Bmp, DecodedImage, ExportTarget, FileTarget, Gif, Ico, Jpeg, OutputFormat, Png, Pnm, Stdout
from .logger import get_logger
from .pnm import encode_pnm

_logger = get_logger("writer")

ICO_MAX_SIZE = 256


def _save_with_pillow(pixels: Image.Image, fp: BinaryIO, fmt: OutputFormat) -> None:
    if isinstance(fmt, Bmp):
        pixels.save(fp, format="BMP")
    elif isinstance(fmt, Gif):
        pixels.save(fp, format="GIF")
    elif isinstance(fmt, Ico):
        width, height = pixels.size
        size = (min(width, ICO_MAX_SIZE), min(height, ICO_MAX_SIZE))
        pixels.save(fp, format="ICO", sizes=[size])
    elif isinstance(fmt, Jpeg):
        pixels.save(fp, format="JPEG", quality=fmt.quality)
    elif isinstance(fmt, Png):
        pixels.save(fp, format="PNG")
    else:
        raise EncodeError(f"Unsupported output format: {fmt!r}")


def encode(image: DecodedImage, fmt: OutputFormat, fp: BinaryIO) -> None:
    """
    Encode ``image`` into a binary file object.

    Raises:
        EncodeError: the encoder rejected the buffer
        ImageIOError: writing to ``fp`` failed
    """
    if isinstance(fmt, Pnm):
        data = encode_pnm(image, fmt.subtype, fmt.encoding)
        try:
            fp.write(data)
        except OSError as e:
            raise ImageIOError(f"Unable to write output: {e}") from e
        return

    try:
        _save_with_pillow(image.pixels, fp, fmt)
    except OSError as e:
        # File-system failures carry an errno; encoder rejections do not
        if e.errno is not None:
            raise ImageIOError(f"Unable to write output: {e}") from e
        raise EncodeError(f"Unable to encode {image.color_model.name} image as {fmt.name}: {e}") from e
    except (ValueError, KeyError, TypeError) as e:
        raise EncodeError(f"Unable to encode {image.color_model.name} image as {fmt.name}: {e}") from e


def encode_to_bytes(image: DecodedImage, fmt: OutputFormat) -> bytes:
    """Encode ``image`` completely in memory"""
    buffer = io.BytesIO()
    encode(image, fmt, buffer)
    return buffer.getvalue()


def write_file(image: DecodedImage, fmt: OutputFormat, target: FileTarget) -> None:
    """
    Create (or truncate) the target file and encode directly into it.

    If encoding fails after the file was opened, the partially written file
    is left on disk.
    """
    try:
        fp = open(target.path, "wb")
    except OSError as e:
        raise ImageIOError(f"Unable to create {target.path}: {e}") from e

    with fp:
        try:
            encode(image, fmt, fp)
        except (EncodeError, ImageIOError):
            _logger.warning("encoding failed, %s may be incomplete", target.path)
            raise
    _logger.debug("wrote %s", target.path)


def write_stdout(image: DecodedImage, fmt: OutputFormat, stream: Optional[BinaryIO] = None) -> None:
    """Encode completely, then write all bytes to ``stream`` in one call"""
    data = encode_to_bytes(image, fmt)
    out = stream if stream is not None else sys.stdout.buffer
    try:
        out.write(data)
        out.flush()
    except OSError as e:
        raise ImageIOError(f"Unable to write to standard output: {e}") from e
    _logger.debug("wrote %d bytes to stdout", len(data))


def write(
    image: DecodedImage,
    fmt: OutputFormat,
    target: ExportTarget,
    stream: Optional[BinaryIO] = None,
) -> None:
    """
    Encode ``image`` and deliver it to ``target``.

    Args:
        image: Final buffer, read only
        fmt: Output format with its encoding parameters
        target: FileTarget or Stdout
        stream: Replacement for standard output (Stdout target only)
    """
    if isinstance(target, FileTarget):
        write_file(image, fmt, target)
    elif isinstance(target, Stdout):
        write_stdout(image, fmt, stream)
    else:
        raise TypeError(f"Unknown export target: {target!r}")
