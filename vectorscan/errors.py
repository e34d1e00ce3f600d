"""Error kinds raised by the vectorisation core."""

from __future__ import annotations


class VectorScanError(Exception):
    """Base class for every error raised by vectorscan."""


class InvalidImage(VectorScanError, ValueError):
    """Malformed dimensions, channel count or pixel buffer."""


class InvalidParameter(VectorScanError, ValueError):
    """Threshold, epsilon or another option outside its allowed range."""


class IoError(VectorScanError, OSError):
    """Destination could not be opened or written."""
