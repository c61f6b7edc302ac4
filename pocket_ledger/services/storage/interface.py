"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the local key-value file for something else later
2. Use in-memory storage for testing
3. Keep the ledger logic decoupled from storage implementation

The interface is intentionally tiny: the ledger is loaded whole and
saved whole, exactly like a browser's local storage.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from pocket_ledger.models.audit import AuditEvent
from pocket_ledger.models.session import User
from pocket_ledger.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for persisting the transaction collection.
    """

    @abstractmethod
    async def load_all(self) -> list[Transaction]:
        """
        Load every stored transaction.

        Returns:
            The stored transactions in stored order (empty if nothing stored)

        Raises:
            PersistenceReadError: If the stored data is unreadable
        """
        pass

    @abstractmethod
    async def save_all(self, transactions: Sequence[Transaction]) -> bool:
        """
        Replace the stored collection.

        Args:
            transactions: The full collection to store

        Returns:
            True if saved successfully

        Raises:
            StorageError: If the write fails
        """
        pass


class SessionStorageInterface(ABC):
    """
    Abstract interface for remembering the signed-in user.
    """

    @abstractmethod
    async def load_user(self) -> Optional[User]:
        """
        Load the remembered user.

        Returns:
            The user, or None if nobody is signed in or the data is unreadable
        """
        pass

    @abstractmethod
    async def save_user(self, user: User) -> bool:
        """Remember the signed-in user."""
        pass

    @abstractmethod
    async def clear_user(self) -> bool:
        """Forget the signed-in user."""
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

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class PersistenceReadError(StorageError):
    """Stored data exists but cannot be read back."""
    pass
