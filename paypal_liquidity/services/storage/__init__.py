"""
Storage Services Package

Provides abstract interfaces and in-memory implementations for the
current transaction set and the audit trail.
"""

from paypal_liquidity.services.storage.interface import (
    AuditStorageInterface,
    StorageError,
    TransactionStoreInterface,
)
from paypal_liquidity.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryTransactionStore,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "TransactionStoreInterface",
    # Exceptions
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryTransactionStore",
]
