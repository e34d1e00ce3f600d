"""Raster to polygon pipeline: binarize, trace, simplify.

``vectorize`` is the one-shot entry point. ``run`` returns a
``Vectorization`` that keeps the intermediate results so that a caller
changing a parameter (for instance from a slider) can re-run only what the
change invalidates. Both are pure: no file I/O and no state shared between
calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .binarize import DEFAULT_THRESHOLD, binarize, check_threshold
from .errors import InvalidImage
from .geometry import BinaryImage, Image, Point, VectorDocument
from .simplify import DEFAULT_EPSILON, check_epsilon, simplify_all
from .trace import trace

logger = logging.getLogger(__name__)


def _document(curves, epsilon: float, width: int, height: int) -> VectorDocument:
    polygons = simplify_all(curves, epsilon)
    return VectorDocument(tuple(polygons), width, height)


def vectorize(image: Image, threshold: int = DEFAULT_THRESHOLD,
              epsilon: float = DEFAULT_EPSILON) -> VectorDocument:
    """Turn ``image`` into a ``VectorDocument`` of closed polygons."""
    return run(image, threshold, epsilon).document


@dataclass(frozen=True, eq=False)
class Vectorization:
    """Immutable snapshot of one pipeline run and its inputs."""

    image: Image
    threshold: int
    epsilon: float
    binary: BinaryImage = field(repr=False)
    curves: Tuple[Tuple[Point, ...], ...] = field(repr=False)
    document: VectorDocument = field(repr=False)

    def rerun(self, threshold: Optional[int] = None,
              epsilon: Optional[float] = None) -> "Vectorization":
        """Return the run for new parameters, reusing what they leave valid."""
        threshold = self.threshold if threshold is None else check_threshold(threshold)
        epsilon = self.epsilon if epsilon is None else check_epsilon(epsilon)
        if threshold != self.threshold:
            return run(self.image, threshold, epsilon)
        if epsilon == self.epsilon:
            return self
        document = _document(self.curves, epsilon, self.image.width, self.image.height)
        return Vectorization(self.image, threshold, epsilon, self.binary, self.curves, document)


def run(image: Image, threshold: int = DEFAULT_THRESHOLD,
        epsilon: float = DEFAULT_EPSILON) -> Vectorization:
    if not isinstance(image, Image):
        raise InvalidImage(f"expected an Image, got {type(image).__name__}")
    threshold = check_threshold(threshold)
    epsilon = check_epsilon(epsilon)

    bw = binarize(image, threshold)
    curves: List[List[Point]] = trace(bw)
    document = _document(curves, epsilon, image.width, image.height)
    logger.debug("vectorized %dx%d image: %d contours -> %d polygons, %d vertices",
                 image.width, image.height, len(curves), len(document), document.vertex_count)
    return Vectorization(image, threshold, epsilon, bw,
                         tuple(tuple(c) for c in curves), document)
