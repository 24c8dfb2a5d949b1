"""Media organizer catalog: tagged file metadata in a single SQLite file."""

from .cache.catalog_store import Catalog, CatalogRepository, CatalogStore
from .config import ORGANIZER_DATABASE_NAME
from .core.filter_parser import filter_from_string
from .errors import (
    CatalogError,
    CatalogIOError,
    ConstraintError,
    NotFoundError,
    QueryError,
    SchemaError,
)
from .models import Collection, Filter, Item, SortMode

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "CatalogRepository",
    "CatalogStore",
    "ORGANIZER_DATABASE_NAME",
    "filter_from_string",
    "CatalogError",
    "CatalogIOError",
    "ConstraintError",
    "NotFoundError",
    "QueryError",
    "SchemaError",
    "Collection",
    "Filter",
    "Item",
    "SortMode",
]
