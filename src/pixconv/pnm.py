"""
pixconv/pnm.py
Netpbm writer for the portable-map family:
- P1/P4 bitmap, P2/P5 graymap, P3/P6 pixmap (ascii / binary samples)
- P7 arbitrary map (PAM), binary only

Pillow only writes the binary variants of the first three, so the whole
family is written here from the raw samples.
"""

from typing import Iterable, List

import numpy as np

from .errors import EncodeError
from .imgtypes import ColorModel, DecodedImage, PnmSubtype, SampleEncoding

MAXVAL = 255
BITMAP_THRESHOLD = 128
ASCII_LINE_WIDTH = 70

_MAGIC = {
    (PnmSubtype.BITMAP, SampleEncoding.ASCII): b"P1",
    (PnmSubtype.GRAYMAP, SampleEncoding.ASCII): b"P2",
    (PnmSubtype.PIXMAP, SampleEncoding.ASCII): b"P3",
    (PnmSubtype.BITMAP, SampleEncoding.BINARY): b"P4",
    (PnmSubtype.GRAYMAP, SampleEncoding.BINARY): b"P5",
    (PnmSubtype.PIXMAP, SampleEncoding.BINARY): b"P6",
}

_REQUIRED_MODEL = {
    PnmSubtype.BITMAP: ColorModel.GRAYSCALE,
    PnmSubtype.GRAYMAP: ColorModel.GRAYSCALE,
    PnmSubtype.PIXMAP: ColorModel.RGB,
}

_PAM_TUPLTYPES = {
    ColorModel.GRAYSCALE: ("GRAYSCALE", 1),
    ColorModel.RGB: ("RGB", 3),
    ColorModel.RGBA: ("RGB_ALPHA", 4),
}


def _wrap_ascii(tokens: Iterable[str]) -> bytes:
    """Join sample tokens, wrapping lines at ASCII_LINE_WIDTH characters"""
    lines: List[str] = []
    current: List[str] = []
    length = 0
    for tok in tokens:
        extra = len(tok) + (1 if current else 0)
        if current and length + extra > ASCII_LINE_WIDTH:
            lines.append(" ".join(current))
            current, length = [], 0
            extra = len(tok)
        current.append(tok)
        length += extra
    if current:
        lines.append(" ".join(current))
    return ("\n".join(lines) + "\n").encode("ascii")


def _bitmap_raster(samples: np.ndarray, encoding: SampleEncoding) -> bytes:
    # 1 = black in PBM
    bits = (samples < BITMAP_THRESHOLD).astype(np.uint8)
    if encoding is SampleEncoding.BINARY:
        return np.packbits(bits, axis=1).tobytes()
    # ascii rows are written without separators between bits
    rows = ["".join("1" if b else "0" for b in row) for row in bits]
    chunks = [row[i:i + ASCII_LINE_WIDTH] for row in rows for i in range(0, len(row), ASCII_LINE_WIDTH)]
    return ("\n".join(chunks) + "\n").encode("ascii")


def _encode_pam(image: DecodedImage) -> bytes:
    pixels = image.pixels
    model = image.color_model
    if model is ColorModel.INDEXED:
        # PAM has no palette tuple type
        has_alpha = "transparency" in pixels.info
        pixels = pixels.convert("RGBA" if has_alpha else "RGB")
        model = ColorModel(pixels.mode)
    tupltype, depth = _PAM_TUPLTYPES[model]
    width, height = pixels.size
    header = (
        f"P7\nWIDTH {width}\nHEIGHT {height}\nDEPTH {depth}\n"
        f"MAXVAL {MAXVAL}\nTUPLTYPE {tupltype}\nENDHDR\n"
    ).encode("ascii")
    return header + np.asarray(pixels, dtype=np.uint8).tobytes()


def encode_pnm(image: DecodedImage, subtype: PnmSubtype, encoding: SampleEncoding) -> bytes:
    """
    Encode a buffer as a portable map.

    Args:
        image: Buffer to encode
        subtype: Bitmap, graymap, pixmap or arbitrary map
        encoding: Ascii or binary samples (arbitrary maps are binary only)

    Returns:
        Encoded bytes

    Raises:
        EncodeError: the buffer's color model does not fit the subtype
    """
    if subtype is PnmSubtype.ARBITRARY:
        if encoding is SampleEncoding.ASCII:
            raise EncodeError("Arbitrary maps (PAM) only support binary samples")
        return _encode_pam(image)

    required = _REQUIRED_MODEL[subtype]
    if image.color_model is not required:
        raise EncodeError(
            f"Cannot write {image.color_model.name} image as a {subtype.value} "
            f"(requires {required.name}); enable automatic color type adjustment"
        )

    width, height = image.size
    samples = np.asarray(image.pixels, dtype=np.uint8)
    header = _MAGIC[(subtype, encoding)] + f"\n{width} {height}\n".encode("ascii")

    if subtype is PnmSubtype.BITMAP:
        return header + _bitmap_raster(samples, encoding)

    header += f"{MAXVAL}\n".encode("ascii")
    if encoding is SampleEncoding.BINARY:
        return header + samples.tobytes()
    return header + _wrap_ascii(str(int(v)) for v in samples.reshape(-1))
