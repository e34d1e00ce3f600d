"""Border following on binary images.

Borders come from OpenCV's Suzuki-Abe follower in list mode: every outer
border and every hole border is reported in one flat list, with no
parent/child hierarchy. Foreground is 8-connected and regions touching the
image edge still yield closed borders.

Curves are ordered by their topmost, then leftmost point. For outer borders
that is the pixel where a row-major scan from the top-left first meets them.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

import cv2
import numpy as np

from .errors import InvalidImage, InvalidParameter
from .geometry import BinaryImage, Point

logger = logging.getLogger(__name__)

APPROXIMATIONS: Dict[str, int] = {
    "simple": cv2.CHAIN_APPROX_SIMPLE,
    "none": cv2.CHAIN_APPROX_NONE,
}


def _top_left(contour: np.ndarray) -> Tuple[int, int]:
    pts = contour.reshape(-1, 2)
    y = pts[:, 1].min()
    return int(y), int(pts[pts[:, 1] == y, 0].min())


def trace(binary: BinaryImage, approximation: str = "simple") -> List[List[Point]]:
    """Return every border of ``binary`` as an ordered, closed walk of points.

    ``approximation="simple"`` compresses straight horizontal, vertical and
    diagonal runs to their end points; ``"none"`` keeps every border pixel.
    Single pixels and one pixel wide lines may produce fewer than three
    points; such curves are left for the simplifier to drop.
    """
    if not isinstance(binary, BinaryImage):
        raise InvalidImage(f"expected a BinaryImage, got {type(binary).__name__}")
    if approximation not in APPROXIMATIONS:
        raise InvalidParameter(f"approximation must be one of {tuple(APPROXIMATIONS)}, got {approximation!r}")

    contours, _ = cv2.findContours(binary.pixels.copy(), cv2.RETR_LIST, APPROXIMATIONS[approximation])
    # sorted() is stable, so ties keep OpenCV's order
    contours = sorted(contours, key=_top_left)
    curves = [[Point(float(x), float(y)) for x, y in c.reshape(-1, 2)] for c in contours]

    logger.debug("traced %d contours in %dx%d image", len(curves), binary.width, binary.height)
    return curves
