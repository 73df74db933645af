"""Application-wide constants and environment configuration."""

import os
from decimal import Decimal
from pathlib import Path
from typing import Optional

APP_VERSION = "1.0.0"
DEFAULT_CURRENCY = "₹"

# (symbol, label) pairs offered by the settings screen
CURRENCIES = [
    ("₹", "Indian Rupee"),
    ("$", "US Dollar"),
    ("€", "Euro"),
    ("£", "British Pound"),
    ("¥", "Japanese Yen"),
]

DEFAULT_DEBOUNCE_SECONDS = 1.0

# Ledger amounts are kept to cents and stay within 15 significant digits,
# the range a JSON number (IEEE double) carries exactly
AMOUNT_QUANTUM = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999999.99")

DATA_DIR_NAME = ".mudir"
DOCUMENT_FILE_NAME = "mudir_db.json"
SQLITE_FILE_NAME = "mudir.db"
BACKUP_FILE_PREFIX = "mudir_backup_"
BACKUP_MIME_TYPE = "application/json"

DATA_PATH_ENV = "MUDIR_DATA_PATH"
BACKEND_ENV = "MUDIR_BACKEND"
DEBOUNCE_ENV = "MUDIR_DEBOUNCE"


def default_data_dir() -> Path:
    """Return ~/.mudir, creating it if needed."""
    data_dir = Path.home() / DATA_DIR_NAME
    data_dir.mkdir(exist_ok=True)
    return data_dir


def resolve_data_path(data_path: Optional[str], file_name: str) -> str:
    """Resolve the data file location.

    Args:
        data_path: Explicit path. If None, checks MUDIR_DATA_PATH environment
            variable, then defaults to ~/.mudir/<file_name>
        file_name: File name used under the default data directory

    Returns:
        Path to the data file as a string
    """
    if data_path is None:
        data_path = os.environ.get(DATA_PATH_ENV)

    if data_path is None:
        data_path = str(default_data_dir() / file_name)

    return data_path
