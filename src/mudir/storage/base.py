"""Abstract durable document storage."""

from abc import ABC, abstractmethod


class DocumentStorage(ABC):
    """Holds the single JSON document that mirrors application state.

    Backends raise StorageError on I/O failure; the persistence bridge is
    responsible for turning that into a logged, swallowed failure.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the document (path or URL)."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a document has ever been written."""
        pass

    @abstractmethod
    def read_text(self) -> str:
        """Return the stored document text."""
        pass

    @abstractmethod
    def write_text(self, text: str) -> None:
        """Replace the stored document text."""
        pass
