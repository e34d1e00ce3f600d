import cv2
import numpy as np
import pytest

from vectorscan import BinaryImage, Image


def binary_from_rows(rows):
    """Build a BinaryImage from strings where '#' marks foreground."""
    arr = np.array([[255 if c == "#" else 0 for c in row] for row in rows], dtype=np.uint8)
    h, w = arr.shape
    return BinaryImage(w, h, 1, arr)


@pytest.fixture
def black_image():
    return Image.from_array(np.zeros((100, 100), np.uint8))


@pytest.fixture
def square_image():
    """100x100 black image with a filled 40x40 white square at (30..69, 30..69)."""
    arr = np.zeros((100, 100), np.uint8)
    arr[30:70, 30:70] = 255
    return Image.from_array(arr)


@pytest.fixture
def blob_image():
    arr = np.zeros((100, 100), np.uint8)
    cv2.circle(arr, (50, 50), 25, 255, -1)
    return Image.from_array(arr)


@pytest.fixture
def ring_image():
    arr = np.zeros((120, 120), np.uint8)
    cv2.circle(arr, (60, 60), 40, 255, -1)
    cv2.circle(arr, (60, 60), 15, 0, -1)
    return Image.from_array(arr)
