"""Export and import of the durable document.

Export copies the stored document out under a dated file name and hands it
to a share callback. Import parses a backup file into a Snapshot; it either
succeeds completely or raises, so callers never apply half a backup.
"""

import json
import tempfile
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from mudir.config import BACKUP_FILE_PREFIX, BACKUP_MIME_TYPE
from mudir.domain.entities import Snapshot
from mudir.domain.errors import (
    BackupParseError,
    ExportUnavailableError,
    InvalidBackupError,
    invalid_backup,
)
from mudir.logging_config import get_logger
from mudir.storage import mappers
from mudir.storage.bridge import PersistenceBridge

logger = get_logger("backup")

ShareCallback = Callable[[str, str], None]


def backup_file_name(today: Optional[date] = None) -> str:
    """Return e.g. ``mudir_backup_2024-01-15.json``."""
    today = today or date.today()
    return f"{BACKUP_FILE_PREFIX}{today.isoformat()}.json"


def export_backup(
    bridge: PersistenceBridge,
    destination_dir: Optional[str] = None,
    share: Optional[ShareCallback] = None,
    today: Optional[date] = None,
) -> Optional[Path]:
    """Export the stored document.

    With ``destination_dir`` the dated copy is kept there. Without it the
    copy goes to a temporary directory, is handed to ``share`` together with
    the JSON MIME type, and is removed afterwards.

    Args:
        bridge: Persistence bridge whose document is exported
        destination_dir: Directory for the exported file
        share: Callback taking (path, mime_type)
        today: Date used in the file name

    Returns:
        Path of the kept export, or None for a share-only export

    Raises:
        ExportUnavailableError: If nothing has been stored yet, or there is
            neither a destination nor a share callback
    """
    if destination_dir is None and share is None:
        raise ExportUnavailableError("No export destination or share mechanism available")

    text = bridge.read_raw()
    if text is None:
        raise ExportUnavailableError("No data to export")

    if destination_dir is None:
        with tempfile.TemporaryDirectory(prefix="mudir-export-") as tmp_dir:
            export_path = Path(tmp_dir) / backup_file_name(today)
            export_path.write_text(text, encoding="utf-8")
            share(str(export_path), BACKUP_MIME_TYPE)
        logger.info("Shared exported data")
        return None

    target_dir = Path(destination_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    export_path = target_dir / backup_file_name(today)
    export_path.write_text(text, encoding="utf-8")
    logger.info("Exported data to %s", export_path)

    if share is not None:
        share(str(export_path), BACKUP_MIME_TYPE)
    return export_path


def parse_backup(text: str) -> Snapshot:
    """Parse backup text into a snapshot.

    Raises:
        BackupParseError: If the text is not JSON
        InvalidBackupError: If meta, collections or ledger is missing or
            any record in them is malformed
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise BackupParseError(f"Backup is not valid JSON: {e}") from e

    if not isinstance(document, dict) or any(
        document.get(key) is None for key in mappers.DOCUMENT_KEYS
    ):
        raise InvalidBackupError(invalid_backup())

    try:
        return mappers.snapshot_from_document(document)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise InvalidBackupError(f"{invalid_backup()}: {e}") from e


def import_backup(path: str) -> Snapshot:
    """Read and parse a backup file.

    Raises:
        BackupParseError: If the file cannot be read or is not JSON
        InvalidBackupError: If the document shape is wrong
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BackupParseError(f"Could not read backup file '{path}': {e}") from e
    snapshot = parse_backup(text)
    logger.info(
        "Parsed backup %s: %d collections, %d ledger entries",
        path,
        len(snapshot.collections),
        len(snapshot.ledger),
    )
    return snapshot
