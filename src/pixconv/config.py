"""
pixconv/config.py
Conversion settings: the resolved configuration consumed by the pipeline,
and its construction from command-line values.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import ConfigError
from .formats import PNM_CHOICES, JpegSettings, PnmSettings, format_from_name, format_from_path
from .imgtypes import First, FrameSelector, Last, Nth, Operation, OutputFormat
from .script import parse_script

STDIO = "-"


@dataclass
class ConvertConfig:
    """Resolved settings for one conversion"""
    output_format: OutputFormat
    operations: List[Operation] = field(default_factory=list)
    frame: FrameSelector = field(default_factory=First)
    adjust_color: bool = True


def parse_frame_selector(text: str) -> FrameSelector:
    """
    Parse a frame selection: "first", "last" or a one-based frame number.
    """
    value = text.strip().lower()
    if value == "first":
        return First()
    if value == "last":
        return Last()
    try:
        number = int(value)
    except ValueError:
        raise ConfigError(f"Frame must be 'first', 'last' or a frame number, got {text!r}") from None
    if number < 1:
        raise ConfigError(f"Frame numbers start at 1, got {number}")
    return Nth(number - 1)


def build_config(
    output: Union[str, Path],
    forced_format: Optional[str] = None,
    script: Optional[str] = None,
    frame: Optional[str] = None,
    jpeg_quality: Optional[int] = None,
    pnm_choices: Iterable[str] = (),
    adjust_color: bool = True,
) -> ConvertConfig:
    """
    Build a ConvertConfig from command-line values.

    Args:
        output: Output path, or "-" for standard output
        forced_format: Format name overriding the output extension
        script: Operation script
        frame: Frame selection for animated input
        jpeg_quality: JPEG quality 1-100 (default 80)
        pnm_choices: Selected PNM_CHOICES keys; at most one
        adjust_color: Automatic color model adjustment

    Raises:
        ConfigError: invalid or conflicting values
    """
    choices = list(pnm_choices)
    if len(choices) > 1:
        raise ConfigError(f"PNM encoding options are mutually exclusive, got: {', '.join(choices)}")
    for name in choices:
        if name not in PNM_CHOICES:
            raise ConfigError(f"Unknown PNM encoding: {name}")

    jpeg = JpegSettings() if jpeg_quality is None else JpegSettings(quality=jpeg_quality)
    pnm = PnmSettings(choice=PNM_CHOICES[choices[0]] if choices else None)

    if forced_format:
        output_format = format_from_name(forced_format, jpeg, pnm)
    elif str(output) == STDIO:
        raise ConfigError("Writing to standard output requires --force-format")
    else:
        output_format = format_from_path(output, jpeg, pnm)

    return ConvertConfig(
        output_format=output_format,
        operations=parse_script(script) if script else [],
        frame=parse_frame_selector(frame) if frame else First(),
        adjust_color=adjust_color,
    )
