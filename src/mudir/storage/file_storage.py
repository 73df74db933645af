"""JSON file document storage."""

import os
import tempfile
from pathlib import Path

from mudir.domain.errors import StorageError
from mudir.storage.base import DocumentStorage


class JsonFileStorage(DocumentStorage):
    """Stores the document as a UTF-8 JSON file."""

    def __init__(self, path: str):
        """Initialize file storage.

        Args:
            path: Path to the JSON document
        """
        self.path = Path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read_text(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e

    def write_text(self, text: str) -> None:
        # Write next to the target and rename, so a crash mid-write leaves
        # the previous document intact.
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(text)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Could not write {self.path}: {e}") from e
