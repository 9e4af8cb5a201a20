"""Persist RGB frames as the intermediate image read by the ASCII renderer."""

from __future__ import annotations

from pathlib import Path

import cv2  # type: ignore
import numpy as np

from ascii_video.errors import ImageIOError
from ascii_video.frames import RGBImage


def rgb_image_to_rgba(image: RGBImage) -> np.ndarray:
    """Expand ``image`` into an (H, W, 4) RGBA array.

    Pixels whose three bytes are not all inside the buffer are skipped and
    stay transparent black. Present pixels are fully opaque.
    """
    rgba = np.zeros((image.height, image.width, 4), dtype=np.uint8)
    if image.width <= 0 or image.height <= 0:
        return rgba

    data = np.frombuffer(image.data, dtype=np.uint8)
    ys, xs = np.mgrid[0 : image.height, 0 : image.width]
    offsets = ys * image.stride + xs * image.channels
    in_bounds = offsets + 2 < data.size

    picked = offsets[in_bounds]
    rgba[in_bounds, 0] = data[picked]
    rgba[in_bounds, 1] = data[picked + 1]
    rgba[in_bounds, 2] = data[picked + 2]
    rgba[in_bounds, 3] = 255
    return rgba


def save_rgb_image(image: RGBImage, path: Path) -> Path:
    """Write ``image`` as an RGBA PNG at ``path``, replacing any previous file."""
    bgra = cv2.cvtColor(rgb_image_to_rgba(image), cv2.COLOR_RGBA2BGRA)
    try:
        written = cv2.imwrite(str(path), bgra)
    except cv2.error as exc:
        raise ImageIOError(f"Unable to write intermediate frame '{path}': {exc}") from exc
    if not written:
        raise ImageIOError(f"Unable to write intermediate frame '{path}'.")
    return path
