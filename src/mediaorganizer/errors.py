"""Exception hierarchy raised by the catalog layer.

Callers only ever see subclasses of :class:`CatalogError`; storage engine
exceptions are translated at the operation boundary.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every catalog failure."""


class ConstraintError(CatalogError):
    """A uniqueness rule was violated (duplicate path, tag or collection)."""


class NotFoundError(CatalogError):
    """An association referenced a tag, item or collection that does not exist."""


class SchemaError(CatalogError):
    """The catalog tables could not be created or are missing."""


class CatalogIOError(CatalogError):
    """The working file could not be created, written, read or removed."""


class QueryError(CatalogError):
    """Any other storage engine failure while reading or writing."""


__all__ = [
    "CatalogError",
    "ConstraintError",
    "NotFoundError",
    "SchemaError",
    "CatalogIOError",
    "QueryError",
]
