"""Photograph to closed vector polygons, exported as DXF and SVG."""

from .binarize import DEFAULT_THRESHOLD, binarize, to_grayscale
from .dxf import render_dxf, write_dxf
from .errors import InvalidImage, InvalidParameter, IoError, VectorScanError
from .export import default_base_name, export_all, export_dxf, export_svg
from .geometry import BinaryImage, Image, Point, Polygon, VectorDocument
from .pipeline import Vectorization, run, vectorize
from .simplify import DEFAULT_EPSILON, simplify, simplify_all
from .svg import render_svg, write_svg
from .trace import trace

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_EPSILON",
    "DEFAULT_THRESHOLD",
    "BinaryImage",
    "Image",
    "InvalidImage",
    "InvalidParameter",
    "IoError",
    "Point",
    "Polygon",
    "VectorDocument",
    "VectorScanError",
    "Vectorization",
    "binarize",
    "default_base_name",
    "export_all",
    "export_dxf",
    "export_svg",
    "render_dxf",
    "render_svg",
    "run",
    "simplify",
    "simplify_all",
    "to_grayscale",
    "trace",
    "vectorize",
    "write_dxf",
    "write_svg",
]
