"""Render images as fixed-width grids of density-ranked characters."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

import cv2  # type: ignore
import numpy as np

from ascii_video.config import ASCII_WIDTH, CHAR_ASPECT_RATIO, CHARSET
from ascii_video.errors import ImageIOError


@dataclass(frozen=True)
class AsciiGrid:
    lines: Tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> "AsciiGrid":
        return cls(tuple(text.splitlines()))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def max_line_length(self) -> int:
        """Longest line in UTF-8 bytes, so each ``£`` counts twice."""
        return max((len(line.encode("utf-8")) for line in self.lines), default=0)

    def to_text(self) -> str:
        return "\n".join(self.lines)


def resize_for_grid(image: np.ndarray, target_width: int) -> np.ndarray:
    if target_width <= 0:
        raise ValueError("Target width must be greater than zero.")

    height, width = image.shape[:2]
    scale = target_width / float(width)
    target_height = max(1, int(height * scale * CHAR_ASPECT_RATIO))
    return cv2.resize(image, (target_width, target_height), interpolation=cv2.INTER_AREA)


def image_to_grid(
    image: np.ndarray,
    width: int = ASCII_WIDTH,
    charset: Sequence[str] = CHARSET,
) -> AsciiGrid:
    """Map a BGR (or grayscale) image onto ``charset``; brighter cells get sparser glyphs."""
    if not charset:
        raise ValueError("Charset must contain at least one character.")

    resized = resize_for_grid(image, width)
    gray = resized if resized.ndim == 2 else cv2.cvtColor(resized, cv2.COLOR_BGR2GRAY)

    darkness = 255 - gray.astype(np.int32)
    steps = len(charset) - 1
    indices = (darkness * steps + 127) // 255

    rows = ["".join(charset[idx] for idx in row) for row in indices]
    return AsciiGrid(tuple(rows))


def load_image(path: Path) -> np.ndarray:
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ImageIOError(f"Unable to load image at '{path}'.")
    return image


def render_image_file(
    path: Path,
    width: int = ASCII_WIDTH,
    charset: Sequence[str] = CHARSET,
) -> AsciiGrid:
    return image_to_grid(load_image(path), width, charset)
