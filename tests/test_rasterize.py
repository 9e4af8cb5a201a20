"""Tests for the intermediate frame image."""

import cv2
import numpy as np
import pytest

from ascii_video.errors import ImageIOError
from ascii_video.frames import RGBImage
from ascii_video.rasterize import rgb_image_to_rgba, save_rgb_image


def test_present_pixels_are_opaque():
    image = RGBImage(width=2, height=1, stride=6, data=bytes([1, 2, 3, 4, 5, 6]))
    rgba = rgb_image_to_rgba(image)
    assert rgba.shape == (1, 2, 4)
    assert rgba[0, 0].tolist() == [1, 2, 3, 255]
    assert rgba[0, 1].tolist() == [4, 5, 6, 255]


def test_short_buffer_leaves_missing_pixels_transparent():
    # 3x2 image with only the first row and one pixel of the second present
    data = bytes([200] * 9 + [100] * 3)
    image = RGBImage(width=3, height=2, stride=9, data=data)
    rgba = rgb_image_to_rgba(image)
    assert rgba[0].tolist() == [[200, 200, 200, 255]] * 3
    assert rgba[1, 0].tolist() == [100, 100, 100, 255]
    assert rgba[1, 1].tolist() == [0, 0, 0, 0]
    assert rgba[1, 2].tolist() == [0, 0, 0, 0]


def test_partial_pixel_is_skipped():
    image = RGBImage(width=2, height=1, stride=6, data=bytes([9, 9, 9, 9, 9]))
    rgba = rgb_image_to_rgba(image)
    assert rgba[0, 1].tolist() == [0, 0, 0, 0]


def test_empty_buffer_is_fully_transparent():
    rgba = rgb_image_to_rgba(RGBImage(width=4, height=4, stride=12, data=b""))
    assert not rgba.any()


def test_save_overwrites_the_same_path(tmp_path):
    path = tmp_path / "temp_frame.png"
    save_rgb_image(RGBImage(width=2, height=2, stride=6, data=bytes([255, 0, 0] * 4)), path)
    save_rgb_image(RGBImage(width=2, height=2, stride=6, data=bytes([0, 0, 255] * 4)), path)

    written = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    assert written.shape == (2, 2, 4)
    # cv2 reads BGRA
    assert np.all(written[..., 0] == 255)
    assert np.all(written[..., 2] == 0)
    assert np.all(written[..., 3] == 255)
    assert list(tmp_path.iterdir()) == [path]


def test_save_into_missing_directory_fails(tmp_path):
    image = RGBImage(width=1, height=1, stride=3, data=bytes(3))
    with pytest.raises(ImageIOError):
        save_rgb_image(image, tmp_path / "missing" / "temp_frame.png")
