"""Wiring of the record store, settings model and persistence."""

import threading
from dataclasses import replace
from datetime import datetime, UTC
from typing import Optional

from mudir.config import DEFAULT_DEBOUNCE_SECONDS
from mudir.domain.entities import AppSettings, Snapshot
from mudir.domain.inventory import InventoryService
from mudir.domain.ledger import LedgerService
from mudir.logging_config import get_logger
from mudir.seed import seed_snapshot
from mudir.storage.base import DocumentStorage
from mudir.storage.bridge import PersistenceBridge
from mudir.storage.debounce import DebouncedWriter, TimerFactory
from mudir.store.record_store import RecordStore
from mudir.store.settings import SettingsModel

logger = get_logger("workspace")


class Workspace:
    """One open data set: state in memory, mirrored to durable storage.

    Mutations go through ``store`` and ``settings``; both notify the
    debounced writer, which writes the full snapshot once things go quiet.
    """

    def __init__(
        self,
        storage: DocumentStorage,
        window: float = DEFAULT_DEBOUNCE_SECONDS,
        timer_factory: TimerFactory = threading.Timer,
    ):
        """Initialize workspace. Call open() before use.

        Args:
            storage: Backend holding the document
            window: Debounce quiescence window in seconds
            timer_factory: Timer used by the debounced writer
        """
        self.bridge = PersistenceBridge(storage)
        self.writer = DebouncedWriter(
            write=self.bridge.write,
            snapshot=self.snapshot,
            window=window,
            timer_factory=timer_factory,
        )
        self.store = RecordStore(scheduler=self.writer)
        self.settings = SettingsModel(scheduler=self.writer)
        self.inventory = InventoryService(self.store)
        self.ledger = LedgerService(self.store)

    @classmethod
    def open(
        cls,
        storage: DocumentStorage,
        window: float = DEFAULT_DEBOUNCE_SECONDS,
        timer_factory: TimerFactory = threading.Timer,
    ) -> "Workspace":
        """Create a workspace and hydrate it from storage."""
        workspace = cls(storage, window=window, timer_factory=timer_factory)
        workspace.load()
        return workspace

    def load(self) -> Snapshot:
        """Hydrate state from storage without scheduling a write."""
        snapshot = self.bridge.init()
        self._hydrate(snapshot, notify=False)
        logger.debug("Workspace ready (%s)", self.bridge.storage.location)
        return snapshot

    def _hydrate(self, snapshot: Snapshot, notify: bool) -> None:
        with self.store.lock:
            self.settings.replace(snapshot.meta, notify=False)
            self.store.replace_all(snapshot.collections, snapshot.ledger, notify=False)
        if notify:
            self.writer.schedule()

    def snapshot(self) -> Snapshot:
        """Capture the full current state, stamped with the export time."""
        with self.store.lock:
            meta = replace(self.settings.settings, export_date=datetime.now(UTC))
            return Snapshot(
                meta=meta,
                collections=self.store.collections,
                ledger=self.store.ledger_entries,
            )

    def apply(self, snapshot: Snapshot) -> None:
        """Replace settings, collections and ledger together (import)."""
        self._hydrate(snapshot, notify=True)
        logger.info(
            "Applied snapshot: %d collections, %d ledger entries",
            len(snapshot.collections),
            len(snapshot.ledger),
        )

    def seed(self) -> None:
        """Replace all data with the demo data set."""
        self.apply(seed_snapshot())

    def clear(self, keep_settings: bool = False) -> None:
        """Remove all collections and ledger entries.

        Args:
            keep_settings: If False, settings go back to defaults as well
        """
        meta = self.settings.settings if keep_settings else AppSettings(is_new_user=False)
        self.apply(Snapshot(meta=meta))

    def close(self) -> Optional[bool]:
        """Write any pending changes now.

        Returns:
            The write result, or None if nothing was pending
        """
        if not self.writer.pending:
            return None
        return self.writer.flush()
