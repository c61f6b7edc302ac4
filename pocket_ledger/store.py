"""
Transaction Store

DESIGN DECISION: The in-memory ledger is an explicit object, not a global.
It only knows how to append, remove and list. Persisting after a change
is the caller's job (see orchestrator), which keeps the store free of any
storage technology.

Mutations hold an exclusive lock; readers get an immutable snapshot,
so a reader never sees a half-applied change.
"""

import threading
from typing import Iterable, Optional
from uuid import UUID

from pocket_ledger.models.transaction import Transaction


class TransactionNotFoundError(KeyError):
    """No transaction with the given id is in the store."""
    pass


class DuplicateTransactionError(ValueError):
    """A transaction with the same id is already in the store."""
    pass


class TransactionStore:
    """
    Owns the full transaction collection.

    Order is "newest inserted first", which only matters for display
    before any month filter is applied.
    """

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._lock = threading.RLock()
        self._transactions: list[Transaction] = []
        if transactions:
            self.replace_all(transactions)

    def append(self, transaction: Transaction) -> None:
        """Insert a new transaction at the logical front."""
        with self._lock:
            if any(t.id == transaction.id for t in self._transactions):
                raise DuplicateTransactionError(
                    f"Transaction already exists: {transaction.id}"
                )
            self._transactions.insert(0, transaction)

    def remove(self, transaction_id: UUID) -> Transaction:
        """
        Remove a transaction by id.

        Returns:
            The removed transaction

        Raises:
            TransactionNotFoundError: If no transaction has that id
        """
        with self._lock:
            for idx, t in enumerate(self._transactions):
                if t.id == transaction_id:
                    return self._transactions.pop(idx)
        raise TransactionNotFoundError(f"Transaction not found: {transaction_id}")

    def all(self) -> tuple[Transaction, ...]:
        """Snapshot of every transaction, in store order."""
        with self._lock:
            return tuple(self._transactions)

    def get(self, transaction_id: UUID) -> Optional[Transaction]:
        with self._lock:
            for t in self._transactions:
                if t.id == transaction_id:
                    return t
        return None

    def replace_all(self, transactions: Iterable[Transaction]) -> None:
        """
        Swap in a loaded collection.

        Later duplicates of an id are dropped, so ids stay unique.
        """
        seen: set[UUID] = set()
        unique = []
        for t in transactions:
            if t.id in seen:
                continue
            seen.add(t.id)
            unique.append(t)
        with self._lock:
            self._transactions = unique

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)

    def __contains__(self, transaction_id: object) -> bool:
        with self._lock:
            return any(t.id == transaction_id for t in self._transactions)
