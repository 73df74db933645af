"""Storage factory functions."""

from typing import Optional

from mudir.config import DOCUMENT_FILE_NAME, SQLITE_FILE_NAME, resolve_data_path
from mudir.storage.base import DocumentStorage
from mudir.storage.file_storage import JsonFileStorage
from mudir.storage.sqlalchemy_storage import SQLAlchemyStorage

BACKENDS = ("json", "sqlite")


def create_file_storage(path: Optional[str] = None) -> JsonFileStorage:
    """Create a JSON file storage.

    Args:
        path: Path to the JSON document. If None, checks MUDIR_DATA_PATH
            environment variable, then defaults to ~/.mudir/mudir_db.json

    Returns:
        JsonFileStorage instance
    """
    return JsonFileStorage(resolve_data_path(path, DOCUMENT_FILE_NAME))


def create_sqlite_storage(database_path: Optional[str] = None) -> SQLAlchemyStorage:
    """Create a SQLite-backed document storage.

    Args:
        database_path: Path to SQLite database file. If None, checks
            MUDIR_DATA_PATH environment variable, then defaults to
            ~/.mudir/mudir.db

    Returns:
        SQLAlchemyStorage instance configured for SQLite
    """
    database_path = resolve_data_path(database_path, SQLITE_FILE_NAME)
    return SQLAlchemyStorage(f"sqlite:///{database_path}")


def create_storage(backend: str = "json", path: Optional[str] = None) -> DocumentStorage:
    """Create a storage for the named backend ('json' or 'sqlite')."""
    if backend == "json":
        return create_file_storage(path)
    if backend == "sqlite":
        return create_sqlite_storage(path)
    raise ValueError(f"Unknown storage backend '{backend}'. Choose from: {', '.join(BACKENDS)}")
