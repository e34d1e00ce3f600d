"""SVG writer: one unfilled ``<polygon>`` per polygon, image coordinates as-is."""

from __future__ import annotations

import io
import logging

import svgwrite

from .geometry import VectorDocument
from .sink import Destination, write_payload

logger = logging.getLogger(__name__)

STYLE = {"fill": "none", "stroke": "black", "stroke_width": 1}


def render_svg(doc: VectorDocument) -> str:
    """Return the SVG document text for ``doc``; SVG is top-left origin like the source."""
    dwg = svgwrite.Drawing(size=(doc.source_width, doc.source_height))
    for polygon in doc.polygons:
        dwg.add(dwg.polygon(points=[(p.x, p.y) for p in polygon], **STYLE))
    buf = io.StringIO()
    dwg.write(buf)
    return buf.getvalue()


def write_svg(doc: VectorDocument, destination: Destination) -> None:
    payload = render_svg(doc).encode("utf-8")
    write_payload(payload, destination)
    logger.debug("wrote SVG with %d polygons (%d bytes)", len(doc), len(payload))
