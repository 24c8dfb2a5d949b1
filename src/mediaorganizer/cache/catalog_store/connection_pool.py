"""SQLite connection tracking for catalog working files.

Connections are short lived: each catalog operation acquires one, runs, and
releases it, which closes it. The pool keeps a record of every connection
still open against a file so that :meth:`ConnectionPool.shutdown` can force
them closed before the file is deleted.
"""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import Dict, Set
import logging

from ...config import CONNECT_TIMEOUT, CONNECTION_PRAGMAS

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Thread-safe registry of open connections to one SQLite file.

    Features:
    - Connections are configured with the catalog pragmas and ``sqlite3.Row``
    - Autocommit mode so callers control transactions with ``BEGIN``
    - Forced shutdown of anything still open
    """

    # Class-level registry of pools by database path
    _pools: Dict[str, "ConnectionPool"] = {}
    _pools_lock = threading.Lock()

    @classmethod
    def get_pool(cls, db_path: str | Path) -> "ConnectionPool":
        """Get or create the pool for the given database.

        Args:
            db_path: Path to the SQLite database file

        Returns:
            ConnectionPool instance for the database
        """
        db_path_str = str(db_path)

        with cls._pools_lock:
            if db_path_str not in cls._pools:
                cls._pools[db_path_str] = ConnectionPool(db_path_str)
            return cls._pools[db_path_str]

    @classmethod
    def remove_pool(cls, db_path: str | Path) -> None:
        """Shut down the pool for *db_path* and drop it from the registry."""
        with cls._pools_lock:
            pool = cls._pools.pop(str(db_path), None)
        if pool is not None:
            pool.shutdown()

    @classmethod
    def clear_all_pools(cls) -> None:
        """Close every tracked connection for every database."""
        with cls._pools_lock:
            pools = list(cls._pools.values())
        for pool in pools:
            pool.shutdown()

    def __init__(self, db_path: str):
        """Initialize a pool.

        Args:
            db_path: Path to the SQLite database file
        """
        self._db_path = db_path
        self._active: Set[sqlite3.Connection] = set()
        self._lock = threading.Lock()

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def active_count(self) -> int:
        with self._lock:
            return len(self._active)

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new connection with catalog settings.

        Raises:
            sqlite3.Error: If the file cannot be opened
        """
        conn = sqlite3.connect(
            self._db_path,
            check_same_thread=False,  # Allow use across threads
            timeout=CONNECT_TIMEOUT,
            isolation_level=None,
        )
        try:
            for pragma in CONNECTION_PRAGMAS:
                conn.execute(pragma)
        except sqlite3.Error:
            conn.close()
            raise
        conn.row_factory = sqlite3.Row  # Enable column access by name
        return conn

    def acquire(self) -> sqlite3.Connection:
        """Open a connection and track it until it is released.

        Raises:
            sqlite3.Error: If the connection cannot be opened
        """
        conn = self._create_connection()
        with self._lock:
            self._active.add(conn)
        logger.debug("Connection opened for %s", self._db_path)
        return conn

    def release(self, conn: sqlite3.Connection) -> None:
        """Close a connection obtained from :meth:`acquire`.

        Args:
            conn: Connection to release
        """
        if conn is None:
            return

        with self._lock:
            self._active.discard(conn)
        try:
            if conn.in_transaction:
                conn.rollback()
        except sqlite3.Error as e:
            logger.error("Error rolling back connection for %s: %s", self._db_path, e)
        finally:
            conn.close()
        logger.debug("Connection closed for %s", self._db_path)

    def shutdown(self) -> None:
        """Close all connections still tracked by the pool."""
        with self._lock:
            conns = list(self._active)
            self._active.clear()

        closed_count = 0
        for conn in conns:
            try:
                conn.close()
                closed_count += 1
            except sqlite3.Error as e:
                logger.error("Error closing connection: %s", e)

        if closed_count:
            logger.info("Force-closed %d connections to %s", closed_count, self._db_path)
