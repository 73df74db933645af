"""Domain layer for mudir application."""

from mudir.domain.inventory import InventoryService
from mudir.domain.ledger import LedgerService

__all__ = [
    "InventoryService",
    "LedgerService",
]
