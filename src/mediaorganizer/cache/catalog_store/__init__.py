"""Catalog storage package.

This package keeps one media catalog in a single SQLite file:

- `repository`: High-level API for CRUD operations and listings (main entry point)
- `engine`: Working-file ownership, locking and error translation
- `connection_pool`: Tracking of open connections so they can be force-closed
- `migrations`: Schema creation and verification
- `queries`: SQL construction for filtered and sorted listings

Architecture:
    Every operation goes through `CatalogRepository` (aliased as `Catalog`),
    which borrows a short-lived connection from `CatalogStore.session`.

    - **One File, One Owner**: a store owns its working file for its lifetime
    - **Serialized Access**: one lock per store covers open, execute and close
    - **Atomic Batches**: multi-statement writes run in one transaction
    - **Bound Values**: filter values never become part of the SQL text

Usage:
    from mediaorganizer.cache.catalog_store import Catalog
    catalog = Catalog.create("holiday")
    catalog.add_item(item)
"""
from .engine import CatalogStore
from .repository import CatalogRepository as Catalog
from .repository import CatalogRepository

__all__ = [
    "Catalog",
    "CatalogRepository",
    "CatalogStore",
]
