"""
pixconv/cli.py
Command-line interface (using click)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import STDIO, build_config
from .errors import ConversionError
from .formats import PNM_CHOICES
from .imgtypes import FileTarget, Stdout
from .loader import probe, read_input
from .logger import setup_logger
from .pipeline import Pipeline


def _pnm_param(name: str) -> str:
    return "pnm_" + name.replace("-", "_")


def pnm_encoding_options(f):
    """One flag per PNM subtype/encoding, e.g. --pnm-encoding-pixmap-ascii"""
    for name in reversed(list(PNM_CHOICES)):
        f = click.option(
            f"--pnm-encoding-{name}",
            _pnm_param(name),
            is_flag=True,
            help=f"Write portable maps as {name.replace('-', ' ')} (mutually exclusive)",
        )(f)
    return f


@click.group()
@click.version_option(version=__version__, prog_name="pixconv")
def cli():
    """
    Image Conversion Tool

    Converts an image from one format to another, optionally applying
    resize, blur and flip operations on the way.

    \b
    Supported output formats:
      bmp, gif, ico, jpg/jpeg, png, pbm, pgm, ppm, pam

    \b
    Common Examples:

      # Convert by output extension
      pixconv convert in.png out.jpg

      # Apply operations, in order
      pixconv convert in.png out.png -x "resize 100 200; blur 1; flip_horizontal"

      # Last frame of an animated GIF
      pixconv convert anim.gif last.png --select-frame last

      # Write to standard output
      pixconv convert in.png - -f ppm --pnm-encoding-pixmap-ascii > out.ppm
    """
    pass


@cli.command()
@click.argument("input_file", type=str)
@click.argument("output_file", type=str)
@click.option("-f", "--force-format", "forced_format", default=None,
              help="Output format, overriding the output extension (required when OUTPUT_FILE is -)")
@click.option("-x", "--script", default=None,
              help="Operations to apply, in order, e.g. \"resize 100 200; blur 1; flip_vertical\"")
@click.option("--select-frame", "frame", default=None,
              help="Frame of an animated GIF to convert: first, last or a frame number starting at 1 (default: first)")
@click.option("--jpeg-encoding-quality", "jpeg_quality", type=int, default=None,
              help="JPEG quality 1-100 (default: 80)")
@pnm_encoding_options
@click.option("--disable-automatic-color-type-adjustment", "no_adjust", is_flag=True,
              help="Do not convert the color model to one the output format accepts")
@click.option("-v", "--verbose", is_flag=True,
              help="Log each stage and print a conversion summary to stderr")
def convert(
    input_file: str,
    output_file: str,
    forced_format: Optional[str],
    script: Optional[str],
    frame: Optional[str],
    jpeg_quality: Optional[int],
    no_adjust: bool,
    verbose: bool,
    **pnm_flags: bool,
):
    """
    Convert an image

    INPUT_FILE: Image to convert, or - for standard input.
    OUTPUT_FILE: Destination, or - for standard output.

    The input format is detected from its content, never from its extension.
    """
    setup_logger(logging.DEBUG if verbose else logging.WARNING)
    pnm_choices = [name for name in PNM_CHOICES if pnm_flags.get(_pnm_param(name))]

    try:
        config = build_config(
            output=output_file,
            forced_format=forced_format,
            script=script,
            frame=frame,
            jpeg_quality=jpeg_quality,
            pnm_choices=pnm_choices,
            adjust_color=not no_adjust,
        )
        target = Stdout() if output_file == STDIO else FileTarget(Path(output_file))
        report = Pipeline(config).run(input_file, target)
    except ConversionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if verbose:
        click.echo(report.summary(), err=True)


@cli.command()
@click.argument("image_path", type=str)
def info(image_path: str):
    """
    Display image information

    IMAGE_PATH: Image file path, or - for standard input.

    Output includes the detected format, dimensions, color model and
    frame count.
    """
    setup_logger()
    try:
        image_info = probe(read_input(image_path))
    except ConversionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Format: {image_info.format}")
    click.echo(f"Size: {image_info.width} x {image_info.height}")
    click.echo(f"Color model: {image_info.color_model.name.lower()}")
    click.echo(f"Frames: {image_info.frame_count}")


def main():
    """Entry point"""
    cli()


if __name__ == "__main__":
    main()
