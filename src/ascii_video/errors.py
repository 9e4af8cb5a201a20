"""Exceptions raised by the conversion pipeline.

Every error is fatal to a run; the CLI prints the error type and message.
"""

from __future__ import annotations


class AsciiVideoError(Exception):
    """Base class for all pipeline failures."""


class DecodeError(AsciiVideoError):
    """The input container, codec or video stream could not be read."""


class ConversionError(AsciiVideoError):
    """A decoded frame could not be converted to RGB."""


class ImageIOError(AsciiVideoError):
    """An intermediate or output image could not be read or written."""


class FontLoadError(AsciiVideoError):
    """The bundled glyph font could not be loaded."""


class ScalingError(AsciiVideoError):
    """Glyph scale could not be derived for a frame."""


class InvalidGridShape(ScalingError):
    """An ASCII grid has no lines or only empty lines."""

    def __init__(self, line_count: int, max_line_length: int) -> None:
        super().__init__(
            f"Cannot scale an ASCII grid of {line_count} lines "
            f"with max line length {max_line_length}."
        )
        self.line_count = line_count
        self.max_line_length = max_line_length


class EncoderError(AsciiVideoError):
    """The external video encoder failed or could not be started."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
