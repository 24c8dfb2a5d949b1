"""SQL construction for catalog listings.

Filter values are always returned as bound parameters. Only whitelisted
column names and fixed clause text are ever placed in the query string.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ...config import SENTINEL_TAG_ID
from ...models import Filter, SortMode

ITEM_COLUMNS = "m.Path, m.Size, m.Modified, m.Type, m.Name, m.Description"

_SORT_COLUMNS: Dict[SortMode, str] = {
    SortMode.MODIFIED: "m.Modified",
    SortMode.FILENAME: "m.Path",
    SortMode.SIZE: "m.Size",
}

# Restricts listings to catalogued items, i.e. those carrying the sentinel tag.
_CATALOGUED_CLAUSE = (
    "EXISTS (SELECT 1 FROM ItemTags s WHERE s.Item = m.Path AND s.TagId = {sentinel})"
).format(sentinel=int(SENTINEL_TAG_ID))

_TAG_CLAUSE = (
    "EXISTS (SELECT 1 FROM ItemTags it JOIN Tags t ON t.Id = it.TagId "
    "WHERE it.Item = m.Path AND t.Name = ?)"
)

_FILENAME_CLAUSE = "m.Path LIKE ?"
_ESCAPED_FILENAME_CLAUSE = "m.Path LIKE ? ESCAPE '\\'"


def _clean(values: Optional[List[str]]) -> List[str]:
    if not values:
        return []
    return [value for value in values if isinstance(value, str) and value != ""]


def build_filter_clauses(filter_arg: Optional[Filter]) -> Tuple[List[str], List[Any]]:
    """Translate *filter_arg* into WHERE clauses and their parameters.

    Required tags produce one clause each, all of which must hold. Filename
    patterns are OR-ed together into a single parenthesized clause; they are
    plain ``LIKE`` patterns unless the filter says they are escaped.
    """
    where_clauses: List[str] = []
    params: List[Any] = []

    if filter_arg is None:
        return where_clauses, params

    for tag in _clean(filter_arg.tags):
        where_clauses.append(_TAG_CLAUSE)
        params.append(tag)

    patterns = _clean(filter_arg.filenames)
    if patterns:
        clause = _ESCAPED_FILENAME_CLAUSE if filter_arg.escaped else _FILENAME_CLAUSE
        where_clauses.append("(" + " OR ".join(clause for _ in patterns) + ")")
        params.extend(patterns)

    return where_clauses, params


def order_by_clause(sort: SortMode, descending: bool) -> str:
    """Return the ORDER BY clause for *sort*; ties are broken by path."""
    if not isinstance(sort, SortMode):
        raise ValueError(f"Invalid sort mode: {sort!r}")
    column = _SORT_COLUMNS[sort]
    direction = "DESC" if descending else "ASC"
    if sort is SortMode.FILENAME:
        return f"ORDER BY {column} {direction}"
    return f"ORDER BY {column} {direction}, m.Path ASC"


def build_items_query(
    filter_arg: Optional[Filter],
    sort: SortMode,
    descending: bool,
) -> Tuple[str, List[Any]]:
    """Return the full item listing query and its parameters."""
    where_clauses, params = build_filter_clauses(filter_arg)
    where_clauses.insert(0, _CATALOGUED_CLAUSE)
    query = (
        f"SELECT {ITEM_COLUMNS} FROM MediaItems m "
        f"WHERE {' AND '.join(where_clauses)} "
        f"{order_by_clause(sort, descending)}"
    )
    return query, params


ITEM_TAGS_QUERY = """
SELECT t.Name
FROM ItemTags it
JOIN Tags t ON t.Id = it.TagId
WHERE it.Item = ? AND t.Id <> {sentinel}
GROUP BY t.Id, t.Name
ORDER BY MIN(it.rowid)
""".format(sentinel=int(SENTINEL_TAG_ID))

ALL_TAGS_QUERY = """
SELECT t.Name
FROM Tags t
WHERE t.Id <> {sentinel}
ORDER BY t.Id
""".format(sentinel=int(SENTINEL_TAG_ID))

TAG_ID_QUERY = "SELECT Id FROM Tags WHERE Name = ? AND Id <> {sentinel} ORDER BY Id".format(
    sentinel=int(SENTINEL_TAG_ID)
)

COLLECTION_TAGS_QUERY = """
SELECT t.Name
FROM CollectionTags ct
JOIN Tags t ON t.Id = ct.TagId
WHERE ct.Collection = ? AND t.Id <> {sentinel}
GROUP BY t.Id, t.Name
ORDER BY MIN(ct.rowid)
""".format(sentinel=int(SENTINEL_TAG_ID))

COLLECTION_ITEMS_QUERY = """
SELECT ci.Item
FROM CollectionItems ci
WHERE ci.Collection = ?
GROUP BY ci.Item
ORDER BY MIN(ci.rowid)
"""


__all__ = [
    "ITEM_COLUMNS",
    "ITEM_TAGS_QUERY",
    "ALL_TAGS_QUERY",
    "TAG_ID_QUERY",
    "COLLECTION_TAGS_QUERY",
    "COLLECTION_ITEMS_QUERY",
    "build_filter_clauses",
    "build_items_query",
    "order_by_clause",
]
