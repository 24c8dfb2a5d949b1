"""Static configuration for the media organizer catalog."""

from __future__ import annotations

from .models import SortMode

# Filename used for the catalog inside a packaged organizer archive.
ORGANIZER_DATABASE_NAME = "organizer.db"

# Suffix of the private working copy created in the temp directory.
TEMP_DB_SUFFIX = ".tempdb"

# Tag created together with the schema. Every catalogued item carries it.
SENTINEL_TAG_ID = 1
SENTINEL_TAG_NAME = "media"

# Seconds SQLite waits on a locked file before giving up.
CONNECT_TIMEOUT = 10.0

CONNECTION_PRAGMAS = (
    "PRAGMA synchronous=NORMAL",
    "PRAGMA temp_store=MEMORY",
)

DEFAULT_SORT = SortMode.MODIFIED
DEFAULT_DESCENDING = True

__all__ = [
    "ORGANIZER_DATABASE_NAME",
    "TEMP_DB_SUFFIX",
    "SENTINEL_TAG_ID",
    "SENTINEL_TAG_NAME",
    "CONNECT_TIMEOUT",
    "CONNECTION_PRAGMAS",
    "DEFAULT_SORT",
    "DEFAULT_DESCENDING",
]
