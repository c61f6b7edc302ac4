"""Services package."""

from pocket_ledger.services.session import (
    SessionError,
    SessionService,
    check_premium,
    mock_user,
)
from pocket_ledger.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
    JsonLinesAuditStorage,
    KeyValueStore,
    LocalSessionStorage,
    LocalTransactionStorage,
    PersistenceReadError,
    SessionStorageInterface,
    StorageError,
    TransactionStorageInterface,
)
from pocket_ledger.services.sync import SimulatedCloudSync

__all__ = [
    # Session
    "SessionError",
    "SessionService",
    "check_premium",
    "mock_user",
    # Sync
    "SimulatedCloudSync",
    # Storage services
    "AuditStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryTransactionStorage",
    "JsonLinesAuditStorage",
    "KeyValueStore",
    "LocalSessionStorage",
    "LocalTransactionStorage",
    "PersistenceReadError",
    "SessionStorageInterface",
    "StorageError",
    "TransactionStorageInterface",
]
