"""Services package."""

from paypal_liquidity.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    InMemoryTransactionStore,
    StorageError,
    TransactionStoreInterface,
)

__all__ = [
    # Storage services
    "AuditStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryTransactionStore",
    "StorageError",
    "TransactionStoreInterface",
]
