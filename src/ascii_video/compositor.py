"""Draw ASCII grids onto black canvases with pygame."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from ascii_video.ascii_render import AsciiGrid
from ascii_video.config import BACKGROUND_COLOR, BASE_FONT_SIZE, FRAME_PATTERN, LINE_SPACING, TEXT_COLOR
from ascii_video.errors import FontLoadError, ImageIOError
from ascii_video.scaling import GlyphScale

logger = logging.getLogger(__name__)


def frame_filename(index: int) -> str:
    if index < 0:
        raise ValueError("Frame index must not be negative.")
    return FRAME_PATTERN % index


class GlyphFont:
    """pygame's bundled font, loaded once per pixel size and reused.

    The bundled face (``pygame.font.get_default_font()``) is proportional, not
    monospace: a row's drawn width depends on its glyph mix, so rows of equal
    length may end at different x positions and can run past the canvas
    edge, where they are clipped. The canvas size depends only on the grid
    shape. It does not depend on measured glyph widths. A system font such as
    ``SysFont("Courier New")`` would be monospace, but it is not available on
    every machine, so output would no longer be reproducible.
    """

    font_name = pygame.font.get_default_font()

    def __init__(self) -> None:
        try:
            pygame.font.init()
        except pygame.error as exc:
            raise FontLoadError(f"Unable to initialise pygame fonts: {exc}") from exc
        self.cache: dict[int, pygame.font.Font] = {}

    @staticmethod
    def pixel_size(font_size: float) -> int:
        return max(1, int(round(font_size)))

    def get(self, font_size: float) -> pygame.font.Font:
        size = self.pixel_size(font_size)
        font = self.cache.get(size)
        if font is None:
            try:
                font = pygame.font.Font(None, size)
            except (pygame.error, OSError) as exc:
                raise FontLoadError(f"Unable to load bundled font {self.font_name} at size {size}: {exc}") from exc
            logger.debug("Loaded glyph font at %dpx", size)
            self.cache[size] = font
        return font


def compose(
    grid: AsciiGrid,
    scale: GlyphScale,
    fonts: GlyphFont,
    base_font_size: float = BASE_FONT_SIZE,
    line_spacing: float = LINE_SPACING,
) -> pygame.Surface:
    """Return a black canvas of ``scale.canvas_size`` with ``grid`` drawn in white.

    Rows are spaced by the base font size, not the scaled one, so a scaled
    font may overlap or leave gaps between rows.
    """
    canvas = pygame.Surface(scale.canvas_size, pygame.SRCALPHA, 32)
    canvas.fill(BACKGROUND_COLOR)

    font = fonts.get(scale.font_size)
    for row_index, line in enumerate(grid.lines):
        if not line:
            continue
        text_surface = font.render(line, True, TEXT_COLOR)
        canvas.blit(text_surface, (0, int(base_font_size * row_index * line_spacing)))
    return canvas


def save_surface(surface: pygame.Surface, path: Path) -> Path:
    try:
        pygame.image.save(surface, str(path))
    except (pygame.error, OSError) as exc:
        raise ImageIOError(f"Unable to write frame image '{path}': {exc}") from exc
    return path
