"""Build catalog items from files on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..errors import CatalogIOError
from ..models import Item


def file_type(path: Path) -> str:
    """Return the lower-cased extension of *path* without the dot."""

    return path.suffix.lower().lstrip(".")


def item_from_file(
    path: Path,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Item:
    """Return an :class:`Item` describing *path* as it is now on disk.

    Raises
    ------
    CatalogIOError
        Raised when *path* is missing or cannot be inspected.
    """

    path = Path(path)
    try:
        stat = path.stat()
    except OSError as exc:
        raise CatalogIOError(f"Cannot read file metadata for {path}: {exc}") from exc
    if not path.is_file():
        raise CatalogIOError(f"Not a regular file: {path}")

    return Item(
        path=path.as_posix(),
        type=file_type(path),
        size=int(stat.st_size),
        modified=int(stat.st_mtime),
        name=name,
        description=description,
    )


__all__ = ["file_type", "item_from_file"]
