"""
pixconv/errors.py
Exception hierarchy. Every stage raises one of these; the CLI turns them
into a message and an exit status.
"""


class ConversionError(Exception):
    """Base class for all conversion failures."""


class ImageIOError(ConversionError):
    """Reading the input or writing the output failed."""


class DecodeError(ConversionError):
    """The input bytes are malformed or in an unsupported format."""


class FrameOutOfRange(ConversionError):
    """The selected animation frame does not exist."""

    def __init__(self, index: int, frame_count: int):
        self.index = index
        self.frame_count = frame_count
        if frame_count == 0:
            message = "No frames found in the animated image."
        else:
            message = (
                f"Unable to extract frame {index} (zero-based) from the animated image: "
                f"it has {frame_count} frame(s)."
            )
        super().__init__(message)

    def __reduce__(self):
        return type(self), (self.index, self.frame_count)


class OperationError(ConversionError):
    """An operation kind is not supported by this build."""


class EncodeError(ConversionError):
    """The target format rejected the buffer."""


class ConfigError(ConversionError):
    """Invalid or conflicting conversion settings."""


class ScriptError(ConfigError):
    """An operation script could not be parsed."""
