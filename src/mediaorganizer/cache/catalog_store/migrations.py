"""Schema creation and verification for catalog databases.

Table and column names match catalogs written by earlier versions of the
organizer so existing ``organizer.db`` files open unchanged.
"""

from __future__ import annotations

import sqlite3
from typing import List

from ...config import SENTINEL_TAG_ID, SENTINEL_TAG_NAME

ITEMS_TABLE = "MediaItems"
COLLECTIONS_TABLE = "Collections"
TAGS_TABLE = "Tags"
ITEM_TAGS_TABLE = "ItemTags"
COLLECTION_ITEMS_TABLE = "CollectionItems"
COLLECTION_TAGS_TABLE = "CollectionTags"

REQUIRED_TABLES = (
    ITEMS_TABLE,
    COLLECTIONS_TABLE,
    TAGS_TABLE,
    ITEM_TAGS_TABLE,
    COLLECTION_ITEMS_TABLE,
    COLLECTION_TAGS_TABLE,
)

CREATE_ITEMS_TABLE = """
CREATE TABLE MediaItems (
    Path        TEXT,
    Size        INTEGER,
    Modified    INTEGER,
    Type        TEXT,
    Name        TEXT,
    Description TEXT,
    PRIMARY KEY(Path)
);
"""

CREATE_COLLECTIONS_TABLE = """
CREATE TABLE Collections (
    Name        TEXT,
    Icon        TEXT,
    Description TEXT,
    LastUpdated INTEGER,
    PRIMARY KEY(Name)
);
"""

CREATE_TAGS_TABLE = """
CREATE TABLE Tags (
    Id      INTEGER,
    Name    TEXT UNIQUE,
    PRIMARY KEY(Id AUTOINCREMENT)
);
"""

CREATE_ITEM_TAGS_TABLE = """
CREATE TABLE ItemTags (
    TagId   INTEGER,
    Item    TEXT
);
CREATE INDEX idx_item_tags_item ON ItemTags(Item);
CREATE INDEX idx_item_tags_tag ON ItemTags(TagId);
"""

CREATE_COLLECTION_ITEMS_TABLE = """
CREATE TABLE CollectionItems (
    Collection  TEXT,
    Item        TEXT
);
"""

CREATE_COLLECTION_TAGS_TABLE = """
CREATE TABLE CollectionTags (
    TagId       INTEGER,
    Collection  TEXT
);
"""


def _schema_script() -> str:
    return "".join(
        [
            "BEGIN;",
            CREATE_ITEMS_TABLE,
            CREATE_COLLECTIONS_TABLE,
            CREATE_TAGS_TABLE,
            CREATE_ITEM_TAGS_TABLE,
            CREATE_COLLECTION_ITEMS_TABLE,
            CREATE_COLLECTION_TAGS_TABLE,
            # Single quotes are doubled in case the configured name carries one.
            "INSERT INTO Tags (Id, Name) VALUES ({id}, '{name}');".format(
                id=int(SENTINEL_TAG_ID),
                name=SENTINEL_TAG_NAME.replace("'", "''"),
            ),
            "COMMIT;",
        ]
    )


def create_schema(conn: sqlite3.Connection) -> None:
    """Create all catalog tables and the sentinel tag in one transaction."""
    try:
        conn.executescript(_schema_script())
    except sqlite3.Error:
        if conn.in_transaction:
            conn.rollback()
        raise


def missing_tables(conn: sqlite3.Connection) -> List[str]:
    """Return the required tables absent from the database behind *conn*."""
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    present = {row[0] for row in rows}
    return [name for name in REQUIRED_TABLES if name not in present]
