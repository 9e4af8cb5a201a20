"""Sequential frame pipeline: decode, convert, render, compose, persist."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ascii_video.ascii_render import AsciiGrid, render_image_file
from ascii_video.color import to_rgb
from ascii_video.compositor import GlyphFont, compose, frame_filename, save_surface
from ascii_video.config import TEMP_FRAME_NAME, PipelineSettings
from ascii_video.errors import ImageIOError
from ascii_video.frames import DecodedFrame
from ascii_video.rasterize import save_rgb_image
from ascii_video.scaling import Baseline, GlyphScale, compute_glyph_scale
from ascii_video.source import VideoSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    index: int
    path: Path
    grid: AsciiGrid
    scale: GlyphScale


@dataclass(frozen=True)
class RunSummary:
    frame_count: int
    baseline: Optional[Baseline]


class AsciiVideoPipeline:
    """Turn every frame of a source into ``frame_%04d.png`` images.

    Each call to :meth:`process` is one run: its frame 0 fixes the
    :class:`Baseline` used to size the rest of that run's frames.
    Frames already written are left on disk if a later frame fails.
    """

    def __init__(self, settings: PipelineSettings | None = None, fonts: GlyphFont | None = None) -> None:
        self.settings = settings or PipelineSettings()
        self.fonts = fonts

    def process(self, source: VideoSource, frames_dir: Path) -> RunSummary:
        frames_dir = Path(frames_dir)
        try:
            frames_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ImageIOError(f"Unable to create frames directory '{frames_dir}': {exc}") from exc

        logger.info("video size: %dx%d", source.width, source.height)
        temp_path = frames_dir / TEMP_FRAME_NAME
        frames = iter(source.frames())

        first = next(frames, None)
        if first is None:
            logger.info("Processed 0 frames")
            return RunSummary(frame_count=0, baseline=None)

        grid = self.render_grid(first, temp_path)
        baseline = Baseline.from_grid(grid)
        logger.debug("Baseline grid shape: %d x %d", baseline.row_char_count, baseline.line_count)
        self.write_frame(grid, baseline, 0, frames_dir)
        frame_count = 1

        for frame in frames:
            grid = self.render_grid(frame, temp_path)
            self.write_frame(grid, baseline, frame_count, frames_dir)
            frame_count += 1

        logger.info("Processed %d frames", frame_count)
        return RunSummary(frame_count=frame_count, baseline=baseline)

    def render_grid(self, frame: DecodedFrame, temp_path: Path) -> AsciiGrid:
        save_rgb_image(to_rgb(frame), temp_path)
        return render_image_file(temp_path, self.settings.ascii_width, self.settings.charset)

    def write_frame(self, grid: AsciiGrid, baseline: Baseline, index: int, frames_dir: Path) -> FrameResult:
        if self.fonts is None:
            self.fonts = GlyphFont()
        scale = compute_glyph_scale(
            baseline,
            grid,
            self.settings.base_font_size,
            self.settings.glyph_width_ratio,
        )

        canvas = compose(grid, scale, self.fonts, self.settings.base_font_size, self.settings.line_spacing)
        output_path = save_surface(canvas, frames_dir / frame_filename(index))
        logger.info("Processed frame No.%d : %s", index, output_path)
        return FrameResult(index=index, path=output_path, grid=grid, scale=scale)
