"""Frame containers passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecodedFrame:
    """Raw frame straight from the decoder.

    ``data`` holds ``height`` rows of ``stride`` bytes for packed formats, or
    the concatenated planes for planar ones.
    """

    index: int
    width: int
    height: int
    pixel_format: str
    data: bytes
    stride: int

    def __repr__(self) -> str:
        return (
            f"DecodedFrame(index={self.index}, size={self.width}x{self.height}, "
            f"pixel_format={self.pixel_format!r}, stride={self.stride})"
        )


@dataclass(frozen=True)
class RGBImage:
    """Packed 8-bit RGB pixels addressed as ``data[y * stride + x * 3]``."""

    width: int
    height: int
    stride: int
    data: bytes

    channels = 3

    def __repr__(self) -> str:
        return f"RGBImage(size={self.width}x{self.height}, stride={self.stride}, bytes={len(self.data)})"
