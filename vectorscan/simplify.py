"""Douglas-Peucker reduction of closed boundary curves to polygons."""

from __future__ import annotations

import logging
import math
import numbers
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .errors import InvalidParameter
from .geometry import Point, Polygon

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 2.0


def check_epsilon(epsilon: float) -> float:
    if isinstance(epsilon, bool) or not isinstance(epsilon, numbers.Real):
        raise InvalidParameter(f"epsilon must be a number, got {epsilon!r}")
    epsilon = float(epsilon)
    if not math.isfinite(epsilon) or epsilon < 0:
        raise InvalidParameter(f"epsilon must be a finite value >= 0, got {epsilon}")
    return epsilon


def _dedupe(points: Sequence[Point]) -> List[Point]:
    """Drop consecutive repeats, including the pair closing the ring."""
    out: List[Point] = []
    for p in points:
        if not out or p != out[-1]:
            out.append(p)
    while len(out) > 1 and out[-1] == out[0]:
        out.pop()
    return out


def segment_distances(pts: np.ndarray, start: np.ndarray, end: np.ndarray) -> np.ndarray:
    """Distance of each row of ``pts`` to the segment start-end."""
    seg = end - start
    length2 = float(np.dot(seg, seg))
    if length2 == 0.0:
        return np.linalg.norm(pts - start, axis=1)
    t = np.clip(np.dot(pts - start, seg) / length2, 0.0, 1.0)
    nearest = start + np.outer(t, seg)
    return np.linalg.norm(pts - nearest, axis=1)


def rdp(pts: np.ndarray, lo: int, hi: int, epsilon: float, keep: np.ndarray,
        force: bool = False) -> None:
    """Ramer-Douglas-Peucker over ``pts[lo:hi + 1]``; marks survivors in ``keep``.

    With ``force`` the farthest point of the outermost chord is kept whenever
    it lies off the chord, regardless of ``epsilon``.
    """
    stack = [(lo, hi, force)]
    while stack:
        lo, hi, force = stack.pop()
        if hi - lo < 2:
            continue
        d = segment_distances(pts[lo + 1:hi], pts[lo], pts[hi])
        k = int(np.argmax(d))
        dmax = float(d[k])
        if dmax > epsilon or (force and dmax > 0.0):
            idx = lo + 1 + k
            keep[idx] = True
            stack.append((idx, hi, False))
            stack.append((lo, idx, False))


def simplify(raw_curve: Sequence[Point], epsilon: float = DEFAULT_EPSILON) -> Optional[Polygon]:
    """Reduce a closed curve to a polygon, or ``None`` if fewer than 3 points survive.

    The ring is cut at its first point and at the point farthest from it;
    each of the two chains is simplified on its own and the results are
    joined in the original traversal order. ``epsilon == 0`` keeps every
    point.
    """
    epsilon = check_epsilon(epsilon)
    points = _dedupe([Point(float(x), float(y)) for x, y in raw_curve])
    if len(set(points)) < 3:
        return None
    if epsilon == 0.0:
        return Polygon(tuple(points))

    n = len(points)
    ring = np.asarray(points + [points[0]], dtype=np.float64)
    far = int(np.argmax(np.linalg.norm(ring[:n] - ring[0], axis=1)))
    keep = np.zeros(n + 1, dtype=bool)
    keep[0] = keep[far] = True
    rdp(ring, 0, far, epsilon, keep, force=True)
    rdp(ring, far, n, epsilon, keep, force=True)

    kept = _dedupe([points[i] for i in range(n) if keep[i]])
    if len(set(kept)) < 3:
        return None
    return Polygon(tuple(kept))


def simplify_all(curves: Iterable[Sequence[Point]], epsilon: float = DEFAULT_EPSILON) -> List[Polygon]:
    """Simplify every curve, dropping those that degenerate."""
    epsilon = check_epsilon(epsilon)
    polygons = []
    dropped = 0
    for curve in curves:
        poly = simplify(curve, epsilon)
        if poly is None:
            dropped += 1
            continue
        polygons.append(poly)
    logger.debug("simplified to %d polygons (epsilon=%g), dropped %d degenerate curves",
                 len(polygons), epsilon, dropped)
    return polygons
