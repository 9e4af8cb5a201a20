"""Assemble rendered frames into a video with the ffmpeg command-line tool."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Callable, List

from ascii_video.config import FRAME_PATTERN, PipelineSettings
from ascii_video.errors import EncoderError

logger = logging.getLogger(__name__)

FRAME_NAME_RE = re.compile(r"^frame_(\d+)\.png$")
STDERR_TAIL_LINES = 20


def build_ffmpeg_command(frames_dir: Path, output_path: Path, settings: PipelineSettings) -> List[str]:
    return [
        settings.ffmpeg_binary,
        "-framerate",
        str(settings.fps),
        "-i",
        str(Path(frames_dir) / FRAME_PATTERN),
        "-c:v",
        settings.codec,
        "-pix_fmt",
        settings.pixel_format,
        str(output_path),
        "-y",  # overwrite output file
    ]


def check_frame_sequence(frames_dir: Path) -> int:
    """Return the number of frames, requiring ``frame_0000.png`` onwards with no gaps.

    ffmpeg's image2 demuxer stops at the first missing number, so a gap would
    otherwise truncate the video without an error.
    """
    indices = []
    for path in Path(frames_dir).iterdir():
        match = FRAME_NAME_RE.match(path.name)
        if not match:
            continue
        index = int(match.group(1))
        # ffmpeg only reads the name FRAME_PATTERN produces for each index
        if path.name != FRAME_PATTERN % index:
            logger.warning("Ignoring %s: not part of the %s sequence", path.name, FRAME_PATTERN)
            continue
        indices.append(index)
    indices.sort()

    if not indices:
        raise EncoderError(f"No frame images found in '{frames_dir}'.")
    for expected, actual in enumerate(indices):
        if actual != expected:
            missing = FRAME_PATTERN % expected
            raise EncoderError(f"Frame sequence in '{frames_dir}' is missing {missing}.")
    return len(indices)


def _tail(text: str | bytes | None, lines: int = STDERR_TAIL_LINES) -> str:
    if not text:
        return ""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    return "\n".join(text.strip().splitlines()[-lines:])


class FFmpegEncoder:
    def __init__(
        self,
        settings: PipelineSettings | None = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self.settings = settings or PipelineSettings()
        self.runner = runner

    def encode(self, frames_dir: Path, output_path: Path, expected_frames: int | None = None) -> Path:
        """Encode the frame sequence in ``frames_dir`` into ``output_path``.

        ``expected_frames`` is the number of frames the current run wrote; a
        different count on disk usually means stale frames from an earlier run.
        """
        frames_dir = Path(frames_dir)
        output_path = Path(output_path)
        if not frames_dir.is_dir():
            raise EncoderError(f"Frames directory '{frames_dir}' does not exist.")
        frame_count = check_frame_sequence(frames_dir)
        if expected_frames is not None and frame_count != expected_frames:
            logger.warning(
                "Found %d frames in %s but this run wrote %d; stale frames will be encoded too",
                frame_count,
                frames_dir,
                expected_frames,
            )

        cmd = build_ffmpeg_command(frames_dir, output_path, self.settings)
        logger.info("Encoding %d frames to %s", frame_count, output_path)
        logger.debug("Running: %s", " ".join(cmd))
        try:
            result = self.runner(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.settings.encode_timeout,
            )
        except FileNotFoundError as exc:
            raise EncoderError(f"Encoder '{self.settings.ffmpeg_binary}' was not found on PATH.") from exc
        except subprocess.TimeoutExpired as exc:
            raise EncoderError(
                f"Encoder did not finish within {self.settings.encode_timeout} seconds.",
                stderr=_tail(exc.stderr),
            ) from exc
        except OSError as exc:
            raise EncoderError(f"Unable to start encoder: {exc}") from exc

        if result.returncode != 0:
            stderr = _tail(result.stderr)
            raise EncoderError(
                f"failed to execute '{self.settings.ffmpeg_binary}' command (exit code {result.returncode})"
                + (f":\n{stderr}" if stderr else ""),
                returncode=result.returncode,
                stderr=stderr,
            )
        return output_path
