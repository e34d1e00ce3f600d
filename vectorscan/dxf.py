"""Minimal ASCII DXF (AutoCAD R2000, AC1015) writer.

The layout is a fixed group-code grammar: a HEADER section declaring
$ACADVER and an ENTITIES section holding one closed LWPOLYLINE per polygon.
Each group code and each value sits on its own line.

DXF is bottom-left origin, so y is flipped against the source height.
"""

from __future__ import annotations

import logging
from typing import List

from .geometry import Polygon, VectorDocument
from .sink import Destination, write_payload

logger = logging.getLogger(__name__)

ACADVER = "AC1015"
COMMENT = "DXF created by vectorscan"


def _num(value: float) -> str:
    return repr(float(value))


def _header() -> List[str]:
    return [
        "999", COMMENT,
        "0", "SECTION",
        "2", "HEADER",
        "9", "$ACADVER",
        "1", ACADVER,
        "0", "ENDSEC",
    ]


def _lwpolyline(polygon: Polygon, layer: int, height: float) -> List[str]:
    lines = [
        "0", "LWPOLYLINE",
        "8", str(layer),
        "90", str(len(polygon)),
        "70", "1",
    ]
    for x, y in polygon:
        lines += ["10", _num(x), "20", _num(height - y)]
    return lines


def render_dxf(doc: VectorDocument) -> str:
    """Return the DXF text for ``doc``."""
    lines = _header()
    lines += ["0", "SECTION", "2", "ENTITIES"]
    for index, polygon in enumerate(doc.polygons):
        lines += _lwpolyline(polygon, index, doc.source_height)
    lines += ["0", "ENDSEC", "0", "EOF"]
    return "\n".join(lines) + "\n"


def write_dxf(doc: VectorDocument, destination: Destination) -> None:
    payload = render_dxf(doc).encode("ascii")
    write_payload(payload, destination)
    logger.debug("wrote DXF with %d polylines (%d bytes)", len(doc), len(payload))
