"""High-level catalog API: item, tag and collection CRUD plus listings."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import List, Optional

from ...config import DEFAULT_DESCENDING, DEFAULT_SORT, SENTINEL_TAG_ID
from ...core.filter_parser import filter_from_string
from ...errors import ConstraintError, NotFoundError
from ...models import Collection, Filter, Item, SortMode
from ...utils.fileio import BlobSource
from ...utils.logging import get_logger
from .engine import CatalogStore
from .queries import (
    ALL_TAGS_QUERY,
    COLLECTION_ITEMS_QUERY,
    COLLECTION_TAGS_QUERY,
    ITEM_TAGS_QUERY,
    TAG_ID_QUERY,
    build_items_query,
)

logger = get_logger()


def _require_text(value: str, label: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{label} must be a non-empty string")
    return value


class CatalogRepository:
    """Read/write gateway for one catalog.

    Every public method opens a connection through the store's
    :meth:`~CatalogStore.session`, so calls are serialized per instance and no
    connection outlives the call that opened it.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    @classmethod
    def create(cls, name_hint: str, *, temp_dir: Optional[Path] = None) -> "CatalogRepository":
        """Create an empty catalog, replacing any previous working file."""
        store = CatalogStore(name_hint, temp_dir=temp_dir)
        store.initialize_schema()
        return cls(store)

    @classmethod
    def open(
        cls,
        name_hint: str,
        blob: BlobSource,
        *,
        temp_dir: Optional[Path] = None,
    ) -> "CatalogRepository":
        """Open a catalog seeded from *blob* and check its schema."""
        store = CatalogStore(name_hint, blob, temp_dir=temp_dir)
        store.verify_schema()
        return cls(store)

    @property
    def store(self) -> CatalogStore:
        return self._store

    @property
    def path(self) -> Path:
        return self._store.path

    def read_bytes(self) -> bytes:
        return self._store.read_bytes()

    def discard(self) -> None:
        self._store.discard()

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------
    def add_item(self, item: Item) -> None:
        """Insert *item* and tag it with the sentinel tag.

        Raises:
            ConstraintError: If an item with the same path exists.
        """
        _require_text(item.path, "Item path")
        with self._store.session("add_item", write=True) as conn:
            conn.execute(
                "INSERT INTO MediaItems (Path, Size, Modified, Type, Name, Description) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    item.path,
                    int(item.size),
                    int(item.modified),
                    item.type,
                    item.name,
                    item.description,
                ),
            )
            conn.execute(
                "INSERT INTO ItemTags (TagId, Item) VALUES (?, ?)",
                (SENTINEL_TAG_ID, item.path),
            )
        logger.debug("Added item %s", item.path)

    def remove_item(self, path: str) -> None:
        """Delete the item at *path* with all of its associations."""
        with self._store.session("remove_item", write=True) as conn:
            conn.execute("DELETE FROM MediaItems WHERE Path = ?", (path,))
            conn.execute("DELETE FROM ItemTags WHERE Item = ?", (path,))
            conn.execute("DELETE FROM CollectionItems WHERE Item = ?", (path,))

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------
    @staticmethod
    def _tag_id(conn: sqlite3.Connection, name: str) -> Optional[int]:
        row = conn.execute(TAG_ID_QUERY, (name,)).fetchone()
        return None if row is None else int(row[0])

    @staticmethod
    def _item_exists(conn: sqlite3.Connection, path: str) -> bool:
        row = conn.execute("SELECT 1 FROM MediaItems WHERE Path = ?", (path,)).fetchone()
        return row is not None

    @staticmethod
    def _collection_exists(conn: sqlite3.Connection, name: str) -> bool:
        row = conn.execute("SELECT 1 FROM Collections WHERE Name = ?", (name,)).fetchone()
        return row is not None

    def add_tag(self, name: str) -> None:
        """Create the tag *name*.

        Raises:
            ConstraintError: If the tag already exists.
        """
        _require_text(name, "Tag name")
        with self._store.session("add_tag", write=True) as conn:
            # Catalogs from older versions lack the UNIQUE constraint on Name.
            if conn.execute("SELECT 1 FROM Tags WHERE Name = ?", (name,)).fetchone():
                raise ConstraintError(f"Tag already exists: {name}")
            conn.execute("INSERT INTO Tags (Name) VALUES (?)", (name,))
        logger.debug("Added tag %s", name)

    def remove_tag(self, name: str) -> None:
        """Delete the tag *name* and detach it from every item and collection."""
        with self._store.session("remove_tag", write=True) as conn:
            tag_ids = [row[0] for row in conn.execute(TAG_ID_QUERY, (name,)).fetchall()]
            for tag_id in tag_ids:
                conn.execute("DELETE FROM ItemTags WHERE TagId = ?", (tag_id,))
                conn.execute("DELETE FROM CollectionTags WHERE TagId = ?", (tag_id,))
                conn.execute("DELETE FROM Tags WHERE Id = ?", (tag_id,))

    def add_tag_to_item(self, path: str, tag_name: str) -> None:
        """Attach *tag_name* to the item at *path*.

        Attaching a tag the item already carries changes nothing. The lookup
        and insert share one transaction, but a second :class:`CatalogStore`
        on the same file can still delete the tag in between.

        Raises:
            NotFoundError: If the tag or the item does not exist.
        """
        with self._store.session("add_tag_to_item", write=True) as conn:
            tag_id = self._tag_id(conn, tag_name)
            if tag_id is None:
                raise NotFoundError(f"Tag not found: {tag_name}")
            if not self._item_exists(conn, path):
                raise NotFoundError(f"Item not found: {path}")
            conn.execute(
                "INSERT INTO ItemTags (TagId, Item) "
                "SELECT ?, ? WHERE NOT EXISTS "
                "(SELECT 1 FROM ItemTags WHERE TagId = ? AND Item = ?)",
                (tag_id, path, tag_id, path),
            )

    def remove_tag_from_item(self, path: str, tag_name: str) -> None:
        """Detach *tag_name* from the item at *path* if attached."""
        with self._store.session("remove_tag_from_item", write=True) as conn:
            tag_id = self._tag_id(conn, tag_name)
            if tag_id is None:
                return
            conn.execute("DELETE FROM ItemTags WHERE TagId = ? AND Item = ?", (tag_id, path))

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------
    def add_collection(self, collection: Collection) -> None:
        """Create *collection*.

        Raises:
            ConstraintError: If a collection with the same name exists.
        """
        _require_text(collection.name, "Collection name")
        with self._store.session("add_collection", write=True) as conn:
            conn.execute(
                "INSERT INTO Collections (Name, Icon, Description, LastUpdated) VALUES (?, ?, ?, ?)",
                (
                    collection.name,
                    collection.icon,
                    collection.description,
                    int(collection.last_updated),
                ),
            )

    def remove_collection(self, name: str) -> None:
        with self._store.session("remove_collection", write=True) as conn:
            conn.execute("DELETE FROM Collections WHERE Name = ?", (name,))
            conn.execute("DELETE FROM CollectionItems WHERE Collection = ?", (name,))
            conn.execute("DELETE FROM CollectionTags WHERE Collection = ?", (name,))

    def add_tag_to_collection(self, collection_name: str, tag_name: str) -> None:
        with self._store.session("add_tag_to_collection", write=True) as conn:
            tag_id = self._tag_id(conn, tag_name)
            if tag_id is None:
                raise NotFoundError(f"Tag not found: {tag_name}")
            if not self._collection_exists(conn, collection_name):
                raise NotFoundError(f"Collection not found: {collection_name}")
            conn.execute(
                "INSERT INTO CollectionTags (TagId, Collection) "
                "SELECT ?, ? WHERE NOT EXISTS "
                "(SELECT 1 FROM CollectionTags WHERE TagId = ? AND Collection = ?)",
                (tag_id, collection_name, tag_id, collection_name),
            )

    def remove_tag_from_collection(self, collection_name: str, tag_name: str) -> None:
        with self._store.session("remove_tag_from_collection", write=True) as conn:
            tag_id = self._tag_id(conn, tag_name)
            if tag_id is None:
                return
            conn.execute(
                "DELETE FROM CollectionTags WHERE TagId = ? AND Collection = ?",
                (tag_id, collection_name),
            )

    def add_item_to_collection(self, collection_name: str, path: str) -> None:
        with self._store.session("add_item_to_collection", write=True) as conn:
            if not self._collection_exists(conn, collection_name):
                raise NotFoundError(f"Collection not found: {collection_name}")
            if not self._item_exists(conn, path):
                raise NotFoundError(f"Item not found: {path}")
            conn.execute(
                "INSERT INTO CollectionItems (Collection, Item) "
                "SELECT ?, ? WHERE NOT EXISTS "
                "(SELECT 1 FROM CollectionItems WHERE Collection = ? AND Item = ?)",
                (collection_name, path, collection_name, path),
            )

    def remove_item_from_collection(self, collection_name: str, path: str) -> None:
        with self._store.session("remove_item_from_collection", write=True) as conn:
            conn.execute(
                "DELETE FROM CollectionItems WHERE Collection = ? AND Item = ?",
                (collection_name, path),
            )

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------
    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> Item:
        return Item(
            path=row["Path"],
            type=row["Type"],
            size=int(row["Size"]),
            modified=int(row["Modified"]),
            name=row["Name"],
            description=row["Description"],
        )

    def list_items(
        self,
        filter_arg: Optional[Filter] = None,
        sort: SortMode = DEFAULT_SORT,
        descending: bool = DEFAULT_DESCENDING,
    ) -> List[Item]:
        """Return catalogued items matching *filter_arg*, ordered by *sort*.

        :param filter_arg: Optional tag/filename restriction.
        :param sort: Column to order by.
        :param descending: Largest/newest/last-in-alphabet first when True.
        """
        query, params = build_items_query(filter_arg, sort, descending)
        with self._store.session("list_items") as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_item(row) for row in rows]

    def list_item_tags(self, path: str) -> List[str]:
        """Return the user tags of *path* in the order they were attached."""
        with self._store.session("list_item_tags") as conn:
            rows = conn.execute(ITEM_TAGS_QUERY, (path,)).fetchall()
        return [row[0] for row in rows]

    def list_all_tags(self) -> List[str]:
        """Return every user tag in creation order."""
        with self._store.session("list_all_tags") as conn:
            rows = conn.execute(ALL_TAGS_QUERY).fetchall()
        return [row[0] for row in rows]

    def list_collections(self) -> List[Collection]:
        with self._store.session("list_collections") as conn:
            rows = conn.execute(
                "SELECT Name, Icon, Description, LastUpdated FROM Collections ORDER BY Name"
            ).fetchall()
        return [
            Collection(
                name=row["Name"],
                icon=row["Icon"],
                description=row["Description"],
                last_updated=int(row["LastUpdated"] or 0),
            )
            for row in rows
        ]

    def list_collection_tags(self, name: str) -> List[str]:
        with self._store.session("list_collection_tags") as conn:
            rows = conn.execute(COLLECTION_TAGS_QUERY, (name,)).fetchall()
        return [row[0] for row in rows]

    def list_collection_items(self, name: str) -> List[str]:
        with self._store.session("list_collection_items") as conn:
            rows = conn.execute(COLLECTION_ITEMS_QUERY, (name,)).fetchall()
        return [row[0] for row in rows]

    @staticmethod
    def filter_from_string(text: str) -> Filter:
        """Parse a search box string; see :func:`filter_from_string`."""
        return filter_from_string(text)


__all__ = ["CatalogRepository"]
