"""In-memory state containers."""

from mudir.store.record_store import ChangeScheduler, RecordStore
from mudir.store.settings import SettingsModel

__all__ = ["ChangeScheduler", "RecordStore", "SettingsModel"]
