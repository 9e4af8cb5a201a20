"""Tests for the command-line entry point."""

import pytest

from ascii_video import cli
from ascii_video.errors import EncoderError


def _argv(tmp_path, *extra):
    return [
        "-i",
        str(tmp_path / "input.mp4"),
        "-o",
        str(tmp_path / "output.mp4"),
        "-f",
        str(tmp_path / "frames"),
        *extra,
    ]


def test_all_paths_are_required():
    with pytest.raises(SystemExit):
        cli.parse_args(["-i", "in.mp4"])


def test_long_flags(tmp_path):
    args = cli.parse_args(
        [
            "--input-video-path",
            "in.mp4",
            "--output-video-path",
            "out.mp4",
            "--output-frames-path",
            "frames",
            "--encode-timeout",
            "60",
        ]
    )
    assert args.input_video_path.name == "in.mp4"
    assert args.encode_timeout == 60.0


def test_missing_input_reports_decode_error(tmp_path, capsys):
    assert cli.main(_argv(tmp_path)) == 1
    err = capsys.readouterr().err
    assert "DecodeError" in err
    assert "input.mp4" in err


def test_encoder_failure_exits_non_zero(tmp_path, monkeypatch, capsys):
    def failing_run(args):
        raise EncoderError("failed to execute 'ffmpeg' command", returncode=1)

    monkeypatch.setattr(cli, "run", failing_run)
    assert cli.main(_argv(tmp_path)) == 1
    assert "EncoderError" in capsys.readouterr().err


def test_success_message(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "run", lambda args: 3)
    assert cli.main(_argv(tmp_path)) == 0
    assert "completed successfully" in capsys.readouterr().out


def test_rejects_non_positive_timeout(tmp_path):
    assert cli.main(_argv(tmp_path, "--encode-timeout", "0")) == 2


def test_run_hands_written_frame_count_to_encoder(tmp_path, monkeypatch):
    from ascii_video.pipeline import RunSummary

    encoded = []

    class StubSource:
        def __init__(self, path):
            self.path = path

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            pass

    class StubPipeline:
        def __init__(self, settings):
            self.settings = settings

        def process(self, source, frames_dir):
            return RunSummary(frame_count=3, baseline=None)

    class StubEncoder:
        def __init__(self, settings):
            self.settings = settings

        def encode(self, frames_dir, output_path, expected_frames=None):
            encoded.append((frames_dir, output_path, expected_frames))
            return output_path

    monkeypatch.setattr(cli, "OpenCVVideoSource", StubSource)
    monkeypatch.setattr(cli, "AsciiVideoPipeline", StubPipeline)
    monkeypatch.setattr(cli, "FFmpegEncoder", StubEncoder)

    assert cli.run(cli.parse_args(_argv(tmp_path))) == 3
    assert encoded == [(tmp_path / "frames", tmp_path / "output.mp4", 3)]
