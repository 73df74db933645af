"""Persistence bridge between in-memory state and the durable document."""

import json
from enum import Enum
from typing import Callable, Optional

from mudir.domain.entities import AppSettings, Snapshot
from mudir.domain.errors import StorageError
from mudir.logging_config import get_logger
from mudir.storage import mappers
from mudir.storage.base import DocumentStorage

logger = get_logger("storage.bridge")


class BridgeState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


def default_snapshot() -> Snapshot:
    """Empty state used for first runs and unreadable documents."""
    return Snapshot(meta=AppSettings())


class PersistenceBridge:
    """Keeps one durable document eventually consistent with state.

    Reads fail soft to the default snapshot and writes fail soft to a logged
    False; neither raises.
    """

    def __init__(
        self,
        storage: DocumentStorage,
        initial: Callable[[], Snapshot] = default_snapshot,
    ):
        """Initialize persistence bridge.

        Args:
            storage: Backend holding the document
            initial: Builds the document written on the very first run
        """
        self.storage = storage
        self.initial = initial
        self.state = BridgeState.UNINITIALIZED

    def init(self) -> Snapshot:
        """Load the stored snapshot, seeding the document on first run."""
        self.state = BridgeState.LOADING
        try:
            first_run = not self.storage.exists()
        except StorageError as e:
            logger.error("Failed to check for stored data: %s", e)
            first_run = False

        if first_run:
            snapshot = self.initial()
            logger.info("No stored data at %s, writing initial document", self.storage.location)
            self.write(snapshot)
        else:
            snapshot = self.read()

        self.state = BridgeState.READY
        logger.debug(
            "Loaded %d collections and %d ledger entries",
            len(snapshot.collections),
            len(snapshot.ledger),
        )
        return snapshot

    def read(self) -> Snapshot:
        """Read the stored snapshot, or the default one if it is unreadable."""
        try:
            return mappers.loads(self.storage.read_text())
        except StorageError as e:
            logger.error("Failed to read stored data: %s", e)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error("Stored data at %s is corrupt: %s", self.storage.location, e)
        return default_snapshot()

    def write(self, snapshot: Snapshot) -> bool:
        """Write the full snapshot. Failures are logged, not raised or retried."""
        try:
            text = mappers.dumps(snapshot)
            self.storage.write_text(text)
        except (StorageError, TypeError, ValueError) as e:
            logger.error("Failed to write data to %s: %s", self.storage.location, e)
            return False
        return True

    def read_raw(self) -> Optional[str]:
        """Return the stored document text, or None if there is none."""
        try:
            if not self.storage.exists():
                return None
            return self.storage.read_text()
        except StorageError as e:
            logger.error("Failed to read stored data: %s", e)
            return None
