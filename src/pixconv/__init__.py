"""
pixconv - Image Format Conversion Tool

Usage:
    pixconv convert in.png out.jpg
    pixconv convert in.png out.png -x "resize 100 200; blur 1"
    pixconv convert anim.gif - -f ppm --select-frame last > frame.ppm
    pixconv info ./image.png
"""

__version__ = "0.7.2"

from .imgtypes import (
    ColorModel,
    DecodedImage,
    Resize,
    Blur,
    FlipHorizontal,
    FlipVertical,
    Operation,
    First,
    Last,
    Nth,
    FrameSelector,
    PnmSubtype,
    SampleEncoding,
    Bmp,
    Gif,
    Ico,
    Jpeg,
    Png,
    Pnm,
    OutputFormat,
    FileTarget,
    Stdout,
    ExportTarget,
    ImageInfo,
    ConversionReport,
)

from .errors import (
    ConversionError,
    ImageIOError,
    DecodeError,
    FrameOutOfRange,
    OperationError,
    EncodeError,
    ConfigError,
    ScriptError,
)

from .loader import (
    read_input,
    decode,
    load,
    probe,
)

from .operations import (
    apply_operation,
    apply_operations,
)

from .adjust import (
    FormatFamily,
    ColorTransform,
    format_family,
    required_transform,
    adjust,
)

from .writer import (
    encode,
    encode_to_bytes,
    write,
)

from .formats import (
    JpegSettings,
    PnmSettings,
    PnmChoice,
    format_from_name,
    format_from_path,
    guess_format,
)

from .script import parse_script

from .config import (
    ConvertConfig,
    build_config,
    parse_frame_selector,
)

from .pipeline import (
    Pipeline,
    run_pipeline,
)


__all__ = [
    # Version
    "__version__",
    # Types
    "ColorModel",
    "DecodedImage",
    "Resize",
    "Blur",
    "FlipHorizontal",
    "FlipVertical",
    "Operation",
    "First",
    "Last",
    "Nth",
    "FrameSelector",
    "PnmSubtype",
    "SampleEncoding",
    "Bmp",
    "Gif",
    "Ico",
    "Jpeg",
    "Png",
    "Pnm",
    "OutputFormat",
    "FileTarget",
    "Stdout",
    "ExportTarget",
    "ImageInfo",
    "ConversionReport",
    # Errors
    "ConversionError",
    "ImageIOError",
    "DecodeError",
    "FrameOutOfRange",
    "OperationError",
    "EncodeError",
    "ConfigError",
    "ScriptError",
    # Stages
    "read_input",
    "decode",
    "load",
    "probe",
    "apply_operation",
    "apply_operations",
    "FormatFamily",
    "ColorTransform",
    "format_family",
    "required_transform",
    "adjust",
    "encode",
    "encode_to_bytes",
    "write",
    # Configuration
    "JpegSettings",
    "PnmSettings",
    "PnmChoice",
    "format_from_name",
    "format_from_path",
    "guess_format",
    "parse_script",
    "ConvertConfig",
    "build_config",
    "parse_frame_selector",
    # Pipeline
    "Pipeline",
    "run_pipeline",
]
