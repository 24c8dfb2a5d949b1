"""Qt workers that run blocking catalog listings on a thread pool."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, QRunnable, Signal

from ..cache.catalog_store import CatalogRepository
from ..config import DEFAULT_DESCENDING, DEFAULT_SORT
from ..errors import CatalogError
from ..models import Filter, SortMode
from ..utils.logging import get_logger

logger = get_logger()


class ItemQuerySignals(QObject):
    """Signals for the ItemQueryWorker."""
    itemsReady = Signal(object)  # List[Item]
    error = Signal(str)


class ItemQueryWorker(QRunnable):
    """Background worker that runs ``CatalogRepository.list_items``."""

    def __init__(
        self,
        catalog: CatalogRepository,
        signals: ItemQuerySignals,
        filter_arg: Optional[Filter] = None,
        sort: SortMode = DEFAULT_SORT,
        descending: bool = DEFAULT_DESCENDING,
    ) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._catalog = catalog
        self._signals = signals
        self._filter = filter_arg
        self._sort = sort
        self._descending = descending

    def run(self) -> None:
        try:
            items = self._catalog.list_items(self._filter, self._sort, self._descending)
        except CatalogError as e:
            logger.error("Item query failed for %s: %s", self._catalog.path, e)
            self._signals.error.emit(str(e))
            return
        self._signals.itemsReady.emit(items)


class TagQuerySignals(QObject):
    """Signals for the TagQueryWorker."""
    tagsReady = Signal(str, list)  # item path ("" for all tags), tag names
    error = Signal(str, str)


class TagQueryWorker(QRunnable):
    """Load the tags of one item, or every tag when *path* is ``None``."""

    def __init__(
        self,
        catalog: CatalogRepository,
        signals: TagQuerySignals,
        path: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._catalog = catalog
        self._signals = signals
        self._path = path

    def run(self) -> None:
        key = self._path or ""
        try:
            if self._path is None:
                tags = self._catalog.list_all_tags()
            else:
                tags = self._catalog.list_item_tags(self._path)
        except CatalogError as e:
            logger.error("Tag query failed for %s: %s", self._catalog.path, e)
            self._signals.error.emit(key, str(e))
            return
        self._signals.tagsReady.emit(key, tags)
