"""
pixconv/pipeline.py
Conversion orchestration:
- Read and decode the input
- Apply operations
- Adjust the color model
- Encode and export

Stages run strictly in sequence; the first failure stops the conversion and
is raised unchanged.
"""

import time
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .adjust import adjust
from .config import ConvertConfig
from .imgtypes import ConversionReport, ExportTarget
from .loader import decode, read_input
from .logger import get_logger
from .operations import apply_operations
from .writer import write

_logger = get_logger("pipeline")


class Pipeline:
    """
    Single-image conversion pipeline
    """

    def __init__(self, config: ConvertConfig):
        self.config = config

    def run(
        self,
        source: Union[str, Path, None],
        target: ExportTarget,
        stream: Optional[BinaryIO] = None,
    ) -> ConversionReport:
        """
        Convert one image.

        Args:
            source: Input path; None or "-" reads standard input
            target: Where the encoded image goes
            stream: Replacement for standard output (Stdout target only)

        Returns:
            ConversionReport
        """
        start_time = time.perf_counter()
        data = read_input(source)
        return self.run_bytes(data, target, stream=stream, start_time=start_time)

    def run_bytes(
        self,
        data: bytes,
        target: ExportTarget,
        stream: Optional[BinaryIO] = None,
        start_time: Optional[float] = None,
    ) -> ConversionReport:
        """Convert an input that is already in memory"""
        if start_time is None:
            start_time = time.perf_counter()
        cfg = self.config

        input_format, image = decode(data, cfg.frame)
        input_size = image.size
        _logger.info("loaded %dx%d %s %s image", image.width, image.height, input_format, image.color_model.name)

        image = apply_operations(image, cfg.operations)

        adjusted = adjust(image, cfg.output_format, cfg.adjust_color)
        write(adjusted, cfg.output_format, target, stream=stream)
        _logger.info("wrote %s to %s", cfg.output_format.name, target)

        elapsed = (time.perf_counter() - start_time) * 1000
        return ConversionReport(
            input_format=input_format,
            input_size=input_size,
            output_size=adjusted.size,
            output_format=cfg.output_format.name,
            operation_count=len(cfg.operations),
            adjusted=adjusted is not image,
            elapsed_ms=elapsed,
        )


def run_pipeline(
    source: Union[str, Path, None],
    target: ExportTarget,
    config: ConvertConfig,
    stream: Optional[BinaryIO] = None,
) -> ConversionReport:
    """
    Convenience function: run the conversion pipeline
    """
    return Pipeline(config).run(source, target, stream=stream)
