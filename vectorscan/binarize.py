"""Grayscale conversion, Gaussian smoothing and fixed-threshold binarisation."""

from __future__ import annotations

import logging
import numbers

import cv2
import numpy as np

from .errors import InvalidImage, InvalidParameter
from .geometry import BinaryImage, Image

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 128
BLUR_KERNEL = (5, 5)

_GRAY_CODES = {
    3: cv2.COLOR_RGB2GRAY,
    4: cv2.COLOR_RGBA2GRAY,
}


def check_threshold(threshold: int) -> int:
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Integral):
        raise InvalidParameter(f"threshold must be an integer, got {threshold!r}")
    if not 0 <= threshold <= 255:
        raise InvalidParameter(f"threshold must be within [0, 255], got {threshold}")
    return int(threshold)


def to_grayscale(image: Image) -> np.ndarray:
    """Return the luminance of ``image`` as a (H, W) uint8 array."""
    if not isinstance(image, Image):
        raise InvalidImage(f"expected an Image, got {type(image).__name__}")
    if image.channels == 1:
        return image.pixels
    return cv2.cvtColor(image.pixels, _GRAY_CODES[image.channels])


def binarize(image: Image, threshold: int = DEFAULT_THRESHOLD) -> BinaryImage:
    """Gray, blur with a fixed 5x5 Gaussian, then 255 where ``>= threshold``."""
    threshold = check_threshold(threshold)
    gray = to_grayscale(image)
    # sigma 0 lets OpenCV derive it from the kernel size
    blurred = cv2.GaussianBlur(gray, BLUR_KERNEL, 0)
    bw = np.where(blurred >= threshold, 255, 0).astype(np.uint8)
    logger.debug("binarized %dx%d image at threshold %d, %d foreground pixels",
                 image.width, image.height, threshold, int(np.count_nonzero(bw)))
    return BinaryImage(image.width, image.height, 1, bw)
