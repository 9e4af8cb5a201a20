"""Fixed rendering and encoding parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

# ---------------------------------------------------------------------------
# ASCII rendering
# ---------------------------------------------------------------------------
ASCII_WIDTH = 100
# Sparsest to densest.
CHARSET: Sequence[str] = (".", ",", "-", "*", "£", "$", "#")
# Character cells are about twice as tall as wide, so halve the row count.
CHAR_ASPECT_RATIO = 0.5

# ---------------------------------------------------------------------------
# Glyph rasterization
# ---------------------------------------------------------------------------
BASE_FONT_SIZE = 10.0
LINE_SPACING = 1.2
GLYPH_WIDTH_RATIO = 0.4
BACKGROUND_COLOR = (0, 0, 0, 255)
TEXT_COLOR = (255, 255, 255, 255)

# ---------------------------------------------------------------------------
# Artifacts and encoding
# ---------------------------------------------------------------------------
TEMP_FRAME_NAME = "temp_frame.png"
FRAME_PATTERN = "frame_%04d.png"
OUTPUT_FPS = 30
VIDEO_CODEC = "libx264"
PIXEL_FORMAT = "yuv420p"
FFMPEG_BINARY = "ffmpeg"


@dataclass(frozen=True)
class PipelineSettings:
    ascii_width: int = ASCII_WIDTH
    charset: Sequence[str] = CHARSET
    base_font_size: float = BASE_FONT_SIZE
    line_spacing: float = LINE_SPACING
    glyph_width_ratio: float = GLYPH_WIDTH_RATIO
    fps: int = OUTPUT_FPS
    codec: str = VIDEO_CODEC
    pixel_format: str = PIXEL_FORMAT
    ffmpeg_binary: str = FFMPEG_BINARY
    encode_timeout: float | None = None
