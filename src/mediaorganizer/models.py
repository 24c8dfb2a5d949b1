"""Value types exchanged with the catalog."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Item:
    """Metadata of a single catalogued file.

    ``path`` identifies the item. ``modified`` is a unix timestamp and
    ``size`` is in bytes. ``name`` and ``description`` are user supplied and
    stay ``None`` when unset so a stored item compares equal to the one that
    was added.
    """

    path: str
    type: str
    size: int
    modified: int
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Collection:
    """A named group of items and tags."""

    name: str
    icon: Optional[str] = None
    description: Optional[str] = None
    last_updated: int = 0


@dataclass
class Filter:
    """Restriction applied when listing items.

    Every name in ``tags`` must be attached to an item, and at least one of
    ``filenames`` (SQL ``LIKE`` patterns matched against the path) must
    match. ``None`` and empty lists both mean "no restriction".

    Patterns are used as given. Set ``escaped`` when they were built with
    backslash escapes for ``%``, ``_`` and ``\\`` so that those escapes apply.
    """

    tags: Optional[List[str]] = None
    filenames: Optional[List[str]] = None
    escaped: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.tags and not self.filenames


class SortMode(Enum):
    """Column used to order item listings."""

    MODIFIED = "modified"
    FILENAME = "filename"
    SIZE = "size"


__all__ = ["Item", "Collection", "Filter", "SortMode"]
