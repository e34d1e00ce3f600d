"""Tests for grayscale conversion, smoothing and thresholding."""

import numpy as np
import pytest

from vectorscan import BinaryImage, Image, InvalidImage, InvalidParameter, binarize, to_grayscale


def constant(value, channels=1, size=(16, 16)):
    shape = size if channels == 1 else size + (channels,)
    return Image.from_array(np.full(shape, value, np.uint8))


def test_output_is_binary_with_same_size():
    img = Image.from_array(np.arange(48 * 32, dtype=np.uint32).reshape(32, 48).astype(np.uint8))
    bw = binarize(img, 100)
    assert isinstance(bw, BinaryImage)
    assert (bw.width, bw.height) == (48, 32)
    assert set(np.unique(bw.pixels)) <= {0, 255}


def test_threshold_is_inclusive():
    assert np.all(binarize(constant(128), 128).pixels == 255)
    assert np.all(binarize(constant(128), 129).pixels == 0)


def test_threshold_extremes():
    assert np.all(binarize(constant(0), 0).pixels == 255)
    assert np.all(binarize(constant(255), 255).pixels == 255)
    assert np.all(binarize(constant(0), 128).pixels == 0)


def test_rgb_uses_luminance_weights():
    red = np.zeros((8, 8, 3), np.uint8)
    red[..., 0] = 255
    gray = to_grayscale(Image.from_array(red))
    assert gray.shape == (8, 8)
    assert np.all(gray == 76)

    rgba = np.zeros((8, 8, 4), np.uint8)
    rgba[..., 1] = 255
    rgba[..., 3] = 255
    assert np.all(to_grayscale(Image.from_array(rgba)) == 150)


def test_single_channel_passthrough():
    img = constant(42)
    assert to_grayscale(img) is img.pixels


def test_smoothing_removes_isolated_pixel():
    arr = np.zeros((9, 9), np.uint8)
    arr[4, 4] = 255
    assert not binarize(Image.from_array(arr), 128).pixels.any()


def test_smoothing_keeps_large_region():
    arr = np.zeros((30, 30), np.uint8)
    arr[10:20, 10:20] = 255
    bw = binarize(Image.from_array(arr), 128).pixels
    assert bw[15, 15] == 255
    assert bw[10, 15] == 255
    assert bw[9, 15] == 0


@pytest.mark.parametrize("threshold", [-1, 256, 1.5, True, "128", None])
def test_invalid_threshold(threshold):
    with pytest.raises(InvalidParameter):
        binarize(constant(10), threshold)


def test_numpy_integer_threshold_accepted():
    assert np.all(binarize(constant(200), np.uint8(128)).pixels == 255)


def test_rejects_non_image():
    with pytest.raises(InvalidImage):
        binarize(np.zeros((4, 4), np.uint8), 128)
