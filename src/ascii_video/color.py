"""Convert decoded frames from their native pixel format to packed RGB."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import cv2  # type: ignore
import numpy as np

from ascii_video.errors import ConversionError
from ascii_video.frames import DecodedFrame, RGBImage

logger = logging.getLogger(__name__)

# pixel format -> (bytes per pixel, cv2 conversion code or None for a plain copy)
PACKED_FORMATS: Dict[str, Tuple[int, Optional[int]]] = {
    "bgr24": (3, cv2.COLOR_BGR2RGB),
    "rgb24": (3, None),
    "bgra": (4, cv2.COLOR_BGRA2RGB),
    "rgba": (4, cv2.COLOR_RGBA2RGB),
    "gray": (1, cv2.COLOR_GRAY2RGB),
}
PLANAR_FORMATS = ("yuv420p",)


def supported_formats() -> tuple[str, ...]:
    return tuple(PACKED_FORMATS) + PLANAR_FORMATS


def to_rgb(frame: DecodedFrame) -> RGBImage:
    """Convert ``frame`` to an :class:`RGBImage` of the same dimensions.

    Packed sources shorter than ``height * stride`` are tolerated: the result
    only carries the pixels that were fully present, so its buffer is shorter
    too and later stages see the missing pixels as absent.

    Raises:
        ConversionError: unsupported format, bad geometry, or a cv2 failure.
    """
    if frame.width <= 0 or frame.height <= 0:
        raise ConversionError(f"Invalid frame size {frame.width}x{frame.height}.")

    if frame.pixel_format in PACKED_FORMATS:
        return _convert_packed(frame)
    if frame.pixel_format == "yuv420p":
        return _convert_i420(frame)
    raise ConversionError(
        f"Unsupported pixel format {frame.pixel_format!r} "
        f"(supported: {', '.join(supported_formats())})."
    )


def _convert_packed(frame: DecodedFrame) -> RGBImage:
    bytes_per_pixel, code = PACKED_FORMATS[frame.pixel_format]
    width, height, stride = frame.width, frame.height, frame.stride
    row_bytes = width * bytes_per_pixel
    if stride < row_bytes:
        raise ConversionError(
            f"Stride {stride} is narrower than one {frame.pixel_format} row ({row_bytes} bytes)."
        )

    source = np.frombuffer(frame.data, dtype=np.uint8)
    expected = height * stride
    available = min(source.size, expected)
    if available < expected:
        logger.debug("Frame %d buffer short by %d bytes", frame.index, expected - available)

    padded = np.zeros(expected, dtype=np.uint8)
    padded[:available] = source[:available]
    pixels = padded.reshape(height, stride)[:, :row_bytes]
    if bytes_per_pixel == 1:
        pixels = pixels.reshape(height, width)
    else:
        pixels = pixels.reshape(height, width, bytes_per_pixel)

    try:
        rgb = pixels.copy() if code is None else cv2.cvtColor(pixels, code)
    except cv2.error as exc:
        raise ConversionError(f"Failed to convert {frame.pixel_format} frame: {exc}") from exc

    visible = _visible_pixel_count(available, stride, bytes_per_pixel, width, height)
    data = np.ascontiguousarray(rgb, dtype=np.uint8).tobytes()
    return RGBImage(width=width, height=height, stride=width * 3, data=data[: visible * 3])


def _convert_i420(frame: DecodedFrame) -> RGBImage:
    width, height = frame.width, frame.height
    if width % 2 or height % 2:
        raise ConversionError(f"yuv420p needs even dimensions, got {width}x{height}.")
    if frame.stride != width:
        raise ConversionError(f"yuv420p planes must be contiguous (stride {frame.stride} != width {width}).")

    expected = width * height * 3 // 2
    if len(frame.data) < expected:
        raise ConversionError(f"yuv420p buffer holds {len(frame.data)} bytes, needs {expected}.")

    planes = np.frombuffer(frame.data, dtype=np.uint8, count=expected).reshape(height * 3 // 2, width)
    try:
        rgb = cv2.cvtColor(planes, cv2.COLOR_YUV2RGB_I420)
    except cv2.error as exc:
        raise ConversionError(f"Failed to convert yuv420p frame: {exc}") from exc
    return RGBImage(width=width, height=height, stride=width * 3, data=rgb.tobytes())


def _visible_pixel_count(available: int, stride: int, bytes_per_pixel: int, width: int, height: int) -> int:
    """Count pixels, in row-major order, whose bytes were all present."""
    full_rows = min(height, available // stride)
    if full_rows == height:
        return width * height
    partial = min(width, (available - full_rows * stride) // bytes_per_pixel)
    return full_rows * width + partial
