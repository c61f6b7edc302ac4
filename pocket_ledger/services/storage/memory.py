"""In-memory storage backends, used by tests and by the app when no data directory is wanted."""

from typing import Optional, Sequence

from pocket_ledger.models.audit import AuditEvent
from pocket_ledger.models.transaction import Transaction
from pocket_ledger.services.storage.interface import (
    AuditStorageInterface,
    PersistenceReadError,
    StorageError,
    TransactionStorageInterface,
)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """
    Keeps the last saved collection in a list.

    fail_reads / fail_writes simulate a broken backend.
    """

    def __init__(
        self,
        transactions: Optional[Sequence[Transaction]] = None,
        fail_reads: bool = False,
        fail_writes: bool = False,
    ):
        self._transactions = list(transactions or [])
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.save_count = 0

    async def load_all(self) -> list[Transaction]:
        if self.fail_reads:
            raise PersistenceReadError("Simulated unreadable storage")
        return list(self._transactions)

    async def save_all(self, transactions: Sequence[Transaction]) -> bool:
        if self.fail_writes:
            raise StorageError("Simulated write failure")
        self._transactions = list(transactions)
        self.save_count += 1
        return True


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True

    async def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self.events))[:limit]
