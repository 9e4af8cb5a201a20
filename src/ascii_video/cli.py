"""Command-line entry point: convert a video into an ASCII-art video."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from ascii_video.config import PipelineSettings
from ascii_video.encoder import FFmpegEncoder
from ascii_video.errors import AsciiVideoError
from ascii_video.pipeline import AsciiVideoPipeline
from ascii_video.source import OpenCVVideoSource


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a video into an ASCII-art video.")
    parser.add_argument("-i", "--input-video-path", type=Path, required=True, help="Source video file.")
    parser.add_argument("-o", "--output-video-path", type=Path, required=True, help="Video file to write.")
    parser.add_argument(
        "-f",
        "--output-frames-path",
        type=Path,
        required=True,
        help="Directory that receives the rendered frame_%%04d.png images.",
    )
    parser.add_argument(
        "--encode-timeout",
        type=float,
        default=None,
        help="Give up on the ffmpeg step after this many seconds (default: no limit).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    settings = PipelineSettings(encode_timeout=args.encode_timeout)

    with OpenCVVideoSource(args.input_video_path) as source:
        summary = AsciiVideoPipeline(settings).process(source, args.output_frames_path)

    FFmpegEncoder(settings).encode(args.output_frames_path, args.output_video_path, summary.frame_count)
    return summary.frame_count


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.encode_timeout is not None and args.encode_timeout <= 0:
        print("Error: encode timeout must be greater than zero.", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except AsciiVideoError as exc:
        print(f"Error ({type(exc).__name__}): {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130

    print("Video processing completed successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
