"""Byte sinks accepted by the writers: a filesystem path or a binary file object."""

from __future__ import annotations

import os
from typing import BinaryIO, Union

from .errors import IoError

Destination = Union[str, "os.PathLike[str]", BinaryIO]


def write_payload(payload: bytes, destination: Destination) -> None:
    """Write ``payload`` in a single call; paths are opened and closed here."""
    try:
        if isinstance(destination, (str, os.PathLike)):
            with open(destination, "wb") as fh:
                fh.write(payload)
        else:
            destination.write(payload)
            flush = getattr(destination, "flush", None)
            if flush is not None:
                flush()
    except (OSError, TypeError, ValueError) as exc:
        raise IoError(f"cannot write to {destination!r}: {exc}") from exc
