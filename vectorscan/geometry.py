"""Data model shared by the pipeline stages and the writers.

Images are numpy uint8 arrays wrapped in frozen dataclasses so that a
pipeline run can hand the same object to several consumers without copies.
All coordinates are image space: origin top-left, y increasing downward.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Tuple

import numpy as np

from .errors import InvalidImage

SUPPORTED_CHANNELS = (1, 3, 4)

# ---- raster ----------------------------------------------------------------


def _frozen_copy(array: np.ndarray) -> np.ndarray:
    out = np.array(array, dtype=np.uint8, copy=True, order="C")
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class Image:
    """Row-major raster, one (gray) or three/four (RGB/RGBA) channels."""

    width: int
    height: int
    channels: int
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidImage(f"image must be non-empty, got {self.width}x{self.height}")
        if self.channels not in SUPPORTED_CHANNELS:
            raise InvalidImage(f"unsupported channel count {self.channels}")
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise InvalidImage("pixel buffer must be a numpy array")
        if pixels.dtype != np.uint8:
            raise InvalidImage(f"pixel buffer must be uint8, got {pixels.dtype}")
        expected = (self.height, self.width) if self.channels == 1 else (self.height, self.width, self.channels)
        if pixels.shape != expected:
            raise InvalidImage(f"pixel buffer shape {pixels.shape} does not match {expected}")
        object.__setattr__(self, "pixels", _frozen_copy(pixels))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Image":
        array = np.asarray(array)
        if array.ndim == 2:
            h, w = array.shape
            return cls(w, h, 1, array)
        if array.ndim == 3:
            h, w, c = array.shape
            if c == 1:
                return cls(w, h, 1, array[:, :, 0])
            return cls(w, h, c, array)
        raise InvalidImage(f"expected a 2-D or 3-D array, got {array.ndim} dimensions")

    @classmethod
    def from_buffer(cls, width: int, height: int, buffer: bytes, channels: int = 1) -> "Image":
        """Wrap a flat row-major byte buffer of ``width * height * channels`` bytes."""
        if width <= 0 or height <= 0:
            raise InvalidImage(f"image must be non-empty, got {width}x{height}")
        if channels not in SUPPORTED_CHANNELS:
            raise InvalidImage(f"unsupported channel count {channels}")
        flat = np.frombuffer(bytes(buffer), dtype=np.uint8)
        if flat.size != width * height * channels:
            raise InvalidImage(
                f"buffer holds {flat.size} bytes, expected {width * height * channels} "
                f"for {width}x{height}x{channels}"
            )
        shape = (height, width) if channels == 1 else (height, width, channels)
        return cls(width, height, channels, flat.reshape(shape))

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.pixels.shape


@dataclass(frozen=True, eq=False)
class BinaryImage(Image):
    """Single-channel image whose pixels are all 0 or 255."""

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.channels != 1:
            raise InvalidImage("binary image must have a single channel")
        if np.any((self.pixels != 0) & (self.pixels != 255)):
            raise InvalidImage("binary image pixels must be 0 or 255")

    @property
    def foreground(self) -> np.ndarray:
        return self.pixels > 0

# ---- vector ----------------------------------------------------------------


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class Polygon:
    """Implicitly closed ring holding at least three distinct points.

    Only consecutive repeats are removed upstream; a pinch vertex where two
    lobes of one border touch may appear twice.
    """

    points: Tuple[Point, ...]

    def __post_init__(self) -> None:
        pts = tuple(Point(float(x), float(y)) for x, y in self.points)
        if len(pts) < 3 or len(set(pts)) < 3:
            raise ValueError(f"polygon needs at least 3 distinct points, got {len(set(pts))}")
        object.__setattr__(self, "points", pts)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)


@dataclass(frozen=True)
class VectorDocument:
    """Result of one pipeline run: polygons in discovery order plus source size."""

    polygons: Tuple[Polygon, ...]
    source_width: int
    source_height: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "polygons", tuple(self.polygons))

    def __len__(self) -> int:
        return len(self.polygons)

    @property
    def vertex_count(self) -> int:
        return sum(len(p) for p in self.polygons)

