"""Font and canvas sizing that keeps output frames consistent with frame 0.

The first frame's grid shape becomes a :class:`Baseline`. Every frame, the
first included, is then sized against it with :func:`compute_glyph_scale`.
A frame with longer lines or more lines than the baseline gets a scale below
one, so its canvas shrinks rather than grows.
"""

from __future__ import annotations

from dataclasses import dataclass

from ascii_video.ascii_render import AsciiGrid
from ascii_video.config import BASE_FONT_SIZE, GLYPH_WIDTH_RATIO
from ascii_video.errors import InvalidGridShape


def _require_shape(grid: AsciiGrid) -> tuple[int, int]:
    line_count = grid.line_count
    max_line_length = grid.max_line_length
    if line_count <= 0 or max_line_length <= 0:
        raise InvalidGridShape(line_count, max_line_length)
    return line_count, max_line_length


@dataclass(frozen=True)
class Baseline:
    row_char_count: int
    line_count: int

    @classmethod
    def from_grid(cls, grid: AsciiGrid) -> "Baseline":
        line_count, max_line_length = _require_shape(grid)
        return cls(row_char_count=max_line_length, line_count=line_count)


@dataclass(frozen=True)
class GlyphScale:
    width_scale: float
    height_scale: float
    font_size: float
    canvas_width: float
    canvas_height: float

    @property
    def canvas_size(self) -> tuple[int, int]:
        """Canvas dimensions in whole pixels, truncated toward zero."""
        return int(self.canvas_width), int(self.canvas_height)


def compute_glyph_scale(
    baseline: Baseline,
    grid: AsciiGrid,
    base_font_size: float = BASE_FONT_SIZE,
    glyph_width_ratio: float = GLYPH_WIDTH_RATIO,
) -> GlyphScale:
    line_count, max_line_length = _require_shape(grid)

    width_scale = baseline.row_char_count / max_line_length
    height_scale = baseline.line_count / line_count
    return GlyphScale(
        width_scale=width_scale,
        height_scale=height_scale,
        font_size=base_font_size * max(width_scale, height_scale),
        canvas_width=max_line_length * (base_font_size * width_scale * glyph_width_ratio),
        canvas_height=line_count * base_font_size * height_scale,
    )
