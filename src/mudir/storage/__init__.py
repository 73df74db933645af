"""Durable storage layer for mudir."""

from mudir.storage.base import DocumentStorage
from mudir.storage.bridge import BridgeState, PersistenceBridge
from mudir.storage.debounce import DebouncedWriter
from mudir.storage.factories import create_file_storage, create_sqlite_storage, create_storage

__all__ = [
    "DocumentStorage",
    "BridgeState",
    "PersistenceBridge",
    "DebouncedWriter",
    "create_file_storage",
    "create_sqlite_storage",
    "create_storage",
]
