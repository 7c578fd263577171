"""
In-Memory Storage

Process-local implementations of the storage interfaces. Nothing
survives a restart; there is deliberately no persistence layer.
"""

import threading
from collections import deque
from collections.abc import Sequence
from uuid import UUID

from paypal_liquidity.models.audit import AuditEvent
from paypal_liquidity.models.transaction import TransactionRecord
from paypal_liquidity.services.storage.interface import (
    AuditStorageInterface,
    StorageError,
    TransactionStoreInterface,
)


class InMemoryTransactionStore(TransactionStoreInterface):
    """
    Holds the most recently ingested transaction set.

    The set is kept as a tuple and swapped by reference under a lock.
    Records are frozen models, so a snapshot handed to a reader can
    never change underneath it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._transactions: tuple[TransactionRecord, ...] = ()

    def set_transactions(self, transactions: Sequence[TransactionRecord]) -> int:
        snapshot = tuple(transactions)
        with self._lock:
            replaced = len(self._transactions)
            self._transactions = snapshot
        return replaced

    def get_transactions(self) -> tuple[TransactionRecord, ...]:
        with self._lock:
            return self._transactions

    def has_transactions(self) -> bool:
        with self._lock:
            return bool(self._transactions)

    def clear(self) -> None:
        with self._lock:
            self._transactions = ()


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Bounded, append-only audit trail.

    Once max_events is reached the oldest events are dropped.
    """

    def __init__(self, max_events: int = 1000):
        if max_events < 1:
            raise StorageError("max_events must be at least 1")
        self._events: deque[AuditEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    async def append_event(self, event: AuditEvent) -> bool:
        with self._lock:
            self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        with self._lock:
            return [e for e in self._events if e.correlation_id == correlation_id]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        with self._lock:
            events = list(self._events)
        return list(reversed(events))[:limit]
