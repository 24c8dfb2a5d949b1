"""Ownership of the catalog working file.

A :class:`CatalogStore` derives a private file in the temp directory from a
name hint, optionally seeds it from an existing catalog blob, and serializes
every access to it with one lock per instance. All storage engine errors are
translated into :mod:`mediaorganizer.errors` here.
"""

from __future__ import annotations

import sqlite3
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ...config import TEMP_DB_SUFFIX
from ...errors import (
    CatalogError,
    CatalogIOError,
    ConstraintError,
    QueryError,
    SchemaError,
)
from ...utils.fileio import BlobSource, atomic_write_bytes, read_blob, unlink_quietly
from ...utils.logging import get_logger
from .connection_pool import ConnectionPool
from .migrations import create_schema, missing_tables

logger = get_logger()

_JOURNAL_SUFFIXES = ("-journal", "-wal", "-shm")


def translate_error(exc: sqlite3.Error, operation: str) -> CatalogError:
    """Map a ``sqlite3`` exception raised during *operation* to the catalog taxonomy."""
    message = str(exc)
    lowered = message.lower()
    if isinstance(exc, sqlite3.IntegrityError):
        return ConstraintError(f"{operation}: {message}")
    if "no such table" in lowered or "not a database" in lowered:
        return SchemaError(f"{operation}: {message}")
    if "unable to open" in lowered or "disk i/o" in lowered or "readonly" in lowered:
        return CatalogIOError(f"{operation}: {message}")
    return QueryError(f"{operation}: {message}")


class CatalogStore:
    """Exclusive owner of one catalog working file.

    .. note::
       The lock protects a single instance. Two instances opened on the same
       name hint share a file but not a lock.
    """

    def __init__(
        self,
        name_hint: str,
        blob: Optional[BlobSource] = None,
        *,
        temp_dir: Optional[Path] = None,
    ) -> None:
        """Derive the working path and seed it from *blob* when given.

        Args:
            name_hint: Name the working file is derived from. Only its final
                path component is used.
            blob: Bytes of an existing catalog, or a readable binary stream.
            temp_dir: Directory for the working file. Defaults to the system
                temp directory.
        """
        base = Path(str(name_hint)).name if name_hint else ""
        if not base:
            raise ValueError("name_hint must not be empty")
        root = Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())
        self.path = root / f"{base}{TEMP_DB_SUFFIX}"
        self._lock = threading.Lock()
        if blob is not None:
            self._materialize(blob)

    def _materialize(self, blob: BlobSource) -> None:
        try:
            data = read_blob(blob)
            for side_file in self._side_files():
                unlink_quietly(side_file)
            atomic_write_bytes(self.path, data)
        except OSError as exc:
            raise CatalogIOError(f"Cannot write catalog to {self.path}: {exc}") from exc
        logger.info("Seeded catalog %s with %d bytes", self.path, len(data))

    @property
    def _pool(self) -> ConnectionPool:
        return ConnectionPool.get_pool(self.path)

    def _side_files(self) -> list:
        return [Path(str(self.path) + suffix) for suffix in _JOURNAL_SUFFIXES]

    @property
    def exists(self) -> bool:
        return self.path.exists()

    @contextmanager
    def session(self, operation: str, *, write: bool = False) -> Iterator[sqlite3.Connection]:
        """Hold the instance lock around one connection's lifetime.

        With ``write=True`` the body runs inside ``BEGIN IMMEDIATE`` and is
        committed on success or rolled back on any exception.
        """
        with self._lock:
            pool = self._pool
            try:
                conn = pool.acquire()
            except sqlite3.Error as exc:
                logger.error("%s: cannot open %s: %s", operation, self.path, exc)
                error = translate_error(exc, operation)
                if isinstance(error, QueryError):
                    error = CatalogIOError(f"{operation}: cannot open {self.path}: {exc}")
                raise error from exc
            try:
                if write:
                    conn.execute("BEGIN IMMEDIATE")
                yield conn
                if write:
                    conn.commit()
            except sqlite3.Error as exc:
                if conn.in_transaction:
                    conn.rollback()
                error = translate_error(exc, operation)
                logger.warning("%s failed on %s: %s", operation, self.path, exc)
                raise error from exc
            except Exception:
                if conn.in_transaction:
                    conn.rollback()
                raise
            finally:
                pool.release(conn)

    def initialize_schema(self) -> None:
        """Recreate the working file with an empty catalog schema."""
        self.discard()
        with self._lock:
            pool = self._pool
            try:
                conn = pool.acquire()
            except sqlite3.Error as exc:
                raise CatalogIOError(f"Cannot create catalog at {self.path}: {exc}") from exc
            try:
                create_schema(conn)
            except sqlite3.Error as exc:
                logger.error("Schema creation failed for %s: %s", self.path, exc)
                raise SchemaError(f"Cannot create catalog tables in {self.path}: {exc}") from exc
            finally:
                pool.release(conn)
        logger.info("Created catalog schema at %s", self.path)

    def verify_schema(self) -> None:
        """Raise :class:`SchemaError` unless every catalog table is present."""
        if not self.exists:
            raise SchemaError(f"No catalog file at {self.path}")
        with self.session("verify_schema") as conn:
            missing = missing_tables(conn)
        if missing:
            raise SchemaError(f"Catalog {self.path} is missing tables: {', '.join(missing)}")

    def read_bytes(self) -> bytes:
        """Return the working file contents for packaging by the caller."""
        with self._lock:
            try:
                return self.path.read_bytes()
            except OSError as exc:
                raise CatalogIOError(f"Cannot read catalog {self.path}: {exc}") from exc

    def discard(self) -> None:
        """Close open connections and delete the working file if present."""
        with self._lock:
            ConnectionPool.remove_pool(self.path)
            candidates = [self.path, *self._side_files()]
            for candidate in candidates:
                try:
                    if unlink_quietly(candidate):
                        logger.info("Deleted catalog file %s", candidate)
                except OSError as exc:
                    raise CatalogIOError(f"Cannot delete {candidate}: {exc}") from exc


__all__ = ["CatalogStore", "translate_error"]
