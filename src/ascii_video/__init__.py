"""Turn a video into an ASCII-art video, one frame at a time."""

__version__ = "0.1.0"
