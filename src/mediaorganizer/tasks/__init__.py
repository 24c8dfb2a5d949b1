"""Background worker helpers for running catalog calls off the GUI thread."""

from .catalog_workers import (
    ItemQuerySignals,
    ItemQueryWorker,
    TagQuerySignals,
    TagQueryWorker,
)

__all__ = [
    "ItemQuerySignals",
    "ItemQueryWorker",
    "TagQuerySignals",
    "TagQueryWorker",
]
