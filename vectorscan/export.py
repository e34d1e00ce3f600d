"""Whole-file export of a VectorDocument into a directory.

Files are written under a temporary name next to the target and renamed
into place once complete, so an interrupted export leaves no partial file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from .dxf import write_dxf
from .errors import InvalidParameter, IoError
from .geometry import VectorDocument
from .svg import write_svg

logger = logging.getLogger(__name__)

NAME_PREFIX = "vectorscan"

WRITERS: Dict[str, Callable[[VectorDocument, object], None]] = {
    "dxf": write_dxf,
    "svg": write_svg,
}


def default_base_name(now: Optional[datetime] = None) -> str:
    """Timestamped base name, e.g. ``vectorscan_20240131_142500``."""
    now = now or datetime.now()
    return f"{NAME_PREFIX}_{now:%Y%m%d_%H%M%S}"


def _export(doc: VectorDocument, fmt: str, directory: Union[str, Path],
            base_name: Optional[str]) -> Path:
    writer = WRITERS.get(fmt)
    if writer is None:
        raise InvalidParameter(f"unknown export format {fmt!r}, expected one of {sorted(WRITERS)}")
    directory = Path(directory)
    target = directory / f"{base_name or default_base_name()}.{fmt}"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=directory)
    except OSError as exc:
        raise IoError(f"cannot create {target}: {exc}") from exc
    try:
        with os.fdopen(fd, "wb") as fh:
            writer(doc, fh)
        os.replace(tmp_name, target)
    except OSError as exc:
        _discard(tmp_name)
        if isinstance(exc, IoError):
            raise
        raise IoError(f"cannot write {target}: {exc}") from exc
    logger.debug("exported %s (%d polygons)", target, len(doc))
    return target


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


def export_dxf(doc: VectorDocument, directory: Union[str, Path],
               base_name: Optional[str] = None) -> Path:
    return _export(doc, "dxf", directory, base_name)


def export_svg(doc: VectorDocument, directory: Union[str, Path],
               base_name: Optional[str] = None) -> Path:
    return _export(doc, "svg", directory, base_name)


def export_all(doc: VectorDocument, directory: Union[str, Path],
               base_name: Optional[str] = None,
               formats: Sequence[str] = ("dxf", "svg")) -> List[Path]:
    """Export ``doc`` once per format, sharing one base name."""
    unknown = [f for f in formats if f not in WRITERS]
    if unknown:
        raise InvalidParameter(f"unknown export format(s) {unknown}, expected {sorted(WRITERS)}")
    base_name = base_name or default_base_name()
    return [_export(doc, fmt, directory, base_name) for fmt in formats]
