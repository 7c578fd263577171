"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the flows decoupled from where records and events live
2. Use in-memory storage for the service and for tests
3. Add a durable backend later without touching the flows

The interface is intentionally small. Only the most recently ingested
transaction set is kept; a new upload replaces it wholesale.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from uuid import UUID

from paypal_liquidity.models.audit import AuditEvent
from paypal_liquidity.models.transaction import TransactionRecord


class TransactionStoreInterface(ABC):
    """
    Abstract interface for the current transaction set.

    CRITICAL: Readers must see either the complete previous set or the
    complete new one, never a partial overwrite. Implementations replace
    the stored set by reference and never mutate it in place.
    """

    @abstractmethod
    def set_transactions(self, transactions: Sequence[TransactionRecord]) -> int:
        """
        Replace the stored transaction set.

        Args:
            transactions: The new complete set, in file order

        Returns:
            Number of records that were replaced
        """
        pass

    @abstractmethod
    def get_transactions(self) -> tuple[TransactionRecord, ...]:
        """
        Get the current transaction set.

        Returns:
            An immutable snapshot (empty if nothing was stored)
        """
        pass

    @abstractmethod
    def has_transactions(self) -> bool:
        """Check whether a non-empty set is stored."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop the stored set."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one upload flow).

        Args:
            correlation_id: The correlation identifier

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
