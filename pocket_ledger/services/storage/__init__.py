"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements a local key-value file as the backend, but designed to be swappable.
"""

from pocket_ledger.services.storage.interface import (
    AuditStorageInterface,
    PersistenceReadError,
    SessionStorageInterface,
    StorageError,
    TransactionStorageInterface,
)
from pocket_ledger.services.storage.local import (
    JsonLinesAuditStorage,
    KeyValueStore,
    LocalSessionStorage,
    LocalTransactionStorage,
)
from pocket_ledger.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "SessionStorageInterface",
    "TransactionStorageInterface",
    # Exceptions
    "PersistenceReadError",
    "StorageError",
    # Local implementation
    "JsonLinesAuditStorage",
    "KeyValueStore",
    "LocalSessionStorage",
    "LocalTransactionStorage",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryTransactionStorage",
]
