"""
Test Configuration
==================

Shared fixtures: an in-memory video source and solid-colour frames.
"""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pytest

from ascii_video.frames import DecodedFrame
from ascii_video.source import frame_from_array


class FakeVideoSource:
    """Yields prepared frames in order, like a decoder that never fails."""

    def __init__(self, frames):
        self._frames = list(frames)
        first = self._frames[0] if self._frames else None
        self.width = first.width if first else 0
        self.height = first.height if first else 0
        self.closed = False

    def frames(self):
        yield from self._frames

    def close(self):
        self.closed = True


@pytest.fixture
def solid_frame():
    """Build a BGR DecodedFrame filled with one grey level."""

    def _make(value=128, width=64, height=64, index=0) -> DecodedFrame:
        pixels = np.full((height, width, 3), value, dtype=np.uint8)
        return frame_from_array(index, pixels)

    return _make


@pytest.fixture
def fake_source():
    return FakeVideoSource
