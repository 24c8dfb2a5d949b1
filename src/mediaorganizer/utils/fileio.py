"""Helpers for binary file input/output with atomic writes."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import BinaryIO, Union

BlobSource = Union[bytes, bytearray, memoryview, BinaryIO]


def read_blob(source: BlobSource) -> bytes:
    """Return the bytes held by *source*.

    *source* is either a bytes-like object or a readable binary stream such as
    the handle returned by :meth:`zipfile.ZipFile.open`.
    """

    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    read = getattr(source, "read", None)
    if read is None:
        raise TypeError(f"Unsupported blob source: {type(source).__name__}")
    return read()


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Atomically write *data* into *path*."""

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)
    with tmp_path.open("wb") as handle:
        handle.write(data)
        handle.flush()
        os.fsync(handle.fileno())
    # ``Path.replace`` can fail transiently on Windows while antivirus or
    # indexing services hold the destination open.
    for attempt in range(5):
        try:
            tmp_path.replace(path)
            return
        except PermissionError:
            if attempt == 4:
                tmp_path.unlink(missing_ok=True)
                raise
            time.sleep(0.05 * (attempt + 1))


def unlink_quietly(path: Path) -> bool:
    """Remove *path* if present. Return ``True`` when a file was deleted."""

    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


__all__ = ["BlobSource", "atomic_write_bytes", "read_blob", "unlink_quietly"]
