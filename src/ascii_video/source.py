"""Decode sources that yield frames one at a time."""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Iterator, Protocol

import cv2  # type: ignore
import numpy as np

from ascii_video.errors import DecodeError
from ascii_video.frames import DecodedFrame

logger = logging.getLogger(__name__)


class DecodeStage(enum.Enum):
    READING = "reading"
    DRAINING = "draining"
    DONE = "done"


class VideoSource(Protocol):
    width: int
    height: int

    def frames(self) -> Iterator[DecodedFrame]:
        ...

    def close(self) -> None:
        ...


def frame_from_array(index: int, frame: np.ndarray) -> DecodedFrame:
    """Wrap an OpenCV frame (BGR, BGRA or grayscale) as a :class:`DecodedFrame`."""
    if frame.ndim == 2:
        pixel_format = "gray"
    elif frame.shape[2] == 3:
        pixel_format = "bgr24"
    elif frame.shape[2] == 4:
        pixel_format = "bgra"
    else:
        raise DecodeError(f"Unexpected frame shape {frame.shape} at frame {index}.")
    if frame.dtype != np.uint8:
        raise DecodeError(f"Unexpected frame dtype {frame.dtype} at frame {index}.")

    contiguous = np.ascontiguousarray(frame)
    return DecodedFrame(
        index=index,
        width=contiguous.shape[1],
        height=contiguous.shape[0],
        pixel_format=pixel_format,
        data=contiguous.tobytes(),
        stride=contiguous.strides[0],
    )


class OpenCVVideoSource:
    """Decode a video file with ``cv2.VideoCapture``.

    Frames are grabbed and retrieved strictly one at a time. Once the
    container is exhausted the capture is drained of any frame it still holds
    before the source reports :attr:`DecodeStage.DONE`.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise DecodeError(f"Video path '{self.path}' does not exist.")

        self.capture = cv2.VideoCapture(str(self.path))
        if not self.capture.isOpened():
            self.capture.release()
            raise DecodeError(f"Unable to open video file '{self.path}'.")

        self.width = int(self.capture.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.capture.get(cv2.CAP_PROP_FRAME_HEIGHT))
        if self.width <= 0 or self.height <= 0:
            self.capture.release()
            raise DecodeError(f"No video stream found in '{self.path}'.")
        self.stage = DecodeStage.READING

    def frames(self) -> Iterator[DecodedFrame]:
        index = 0
        while self.stage is DecodeStage.READING:
            if not self.capture.grab():
                logger.debug("End of input reached, draining decoder")
                self.stage = DecodeStage.DRAINING
                break
            success, frame = self.capture.retrieve()
            if not success or frame is None:
                raise DecodeError(f"Failed to decode frame {index} of '{self.path}'.")
            yield frame_from_array(index, frame)
            index += 1

        if self.stage is DecodeStage.DRAINING:
            # The capture backend flushes its decoder before grab() reports the
            # end of input, so every buffered frame has been yielded by now.
            logger.debug("Decoded %d frames from %s", index, self.path.name)
            self.stage = DecodeStage.DONE

    def close(self) -> None:
        self.capture.release()
        self.stage = DecodeStage.DONE

    def __enter__(self) -> "OpenCVVideoSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
