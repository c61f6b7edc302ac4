"""
Local Key-Value Storage Implementation

DESIGN DECISION: Data lives in a single JSON file mapping keys to JSON
text, the same shape as a browser's localStorage. This is enough for a
personal ledger and needs no database.

TRADEOFFS:
- The whole document is rewritten on every save (fine for personal use)
- No multi-process locking (one app instance per data directory)

Writes go to a temp file first and are then moved into place, so a crash
mid-write leaves the previous document intact. Failed writes are retried.
"""

import json
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

import structlog
from pydantic import ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pocket_ledger.models.audit import AuditEvent
from pocket_ledger.models.session import User
from pocket_ledger.models.transaction import Transaction, TransactionType
from pocket_ledger.services.storage.interface import (
    AuditStorageInterface,
    PersistenceReadError,
    SessionStorageInterface,
    StorageError,
    TransactionStorageInterface,
)

logger = structlog.get_logger(__name__)


class KeyValueStore:
    """
    String keys to string values, persisted as one JSON document.

    With path=None everything stays in memory, which is handy for tests.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        write_attempts: int = 3,
    ):
        self._path = Path(path) if path is not None else None
        self._write_attempts = write_attempts
        self._memory: dict[str, str] = {}
        self._lock = threading.RLock()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def _read_document(self) -> dict[str, str]:
        if self._path is None:
            return dict(self._memory)
        if not self._path.exists():
            return {}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceReadError(f"Cannot read store {self._path}: {e}")
        if not isinstance(document, dict):
            raise PersistenceReadError(f"Store {self._path} is not a key-value document")
        return document

    def _write_document(self, document: dict[str, str]) -> None:
        if self._path is None:
            self._memory = dict(document)
            return

        for attempt in Retrying(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        ):
            with attempt:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=self._path.parent,
                    prefix=f".{self._path.name}.",
                    suffix=".tmp",
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        json.dump(document, fh, ensure_ascii=False)
                    os.replace(tmp_name, self._path)
                except BaseException:
                    if os.path.exists(tmp_name):
                        os.unlink(tmp_name)
                    raise

    def get(self, key: str) -> Optional[str]:
        """
        Value stored under key, or None.

        Raises:
            PersistenceReadError: If the document itself is unreadable
        """
        with self._lock:
            value = self._read_document().get(key)
        if value is not None and not isinstance(value, str):
            raise PersistenceReadError(f"Value under '{key}' is not text")
        return value

    def set(self, key: str, value: str) -> None:
        """
        Store value under key.

        An unreadable document is replaced rather than blocking the write.

        Raises:
            StorageError: If the write still fails after retrying
        """
        with self._lock:
            try:
                document = self._read_document()
            except PersistenceReadError as e:
                logger.warning("store_document_replaced", error=str(e))
                document = {}
            document[key] = value
            try:
                self._write_document(document)
            except OSError as e:
                raise StorageError(f"Failed to write store: {e}")

    def remove(self, key: str) -> None:
        with self._lock:
            try:
                document = self._read_document()
            except PersistenceReadError:
                document = {}
            if key not in document:
                return
            del document[key]
            try:
                self._write_document(document)
            except OSError as e:
                raise StorageError(f"Failed to write store: {e}")


# Type labels and field names written by the first (Indonesian) release
LEGACY_TYPE_LABELS = {
    "Pemasukan": TransactionType.INCOME.value,
    "Pengeluaran": TransactionType.EXPENSE.value,
}


def upgrade_stored_record(item: Any) -> Any:
    """
    Map a record in the first-release layout onto the current one.

    Handles the Indonesian type labels, numeric amounts and `createdAt`
    in epoch milliseconds. Current-layout records pass through unchanged.
    """
    if not isinstance(item, dict):
        return item
    record = dict(item)

    if record.get("type") in LEGACY_TYPE_LABELS:
        record["type"] = LEGACY_TYPE_LABELS[record["type"]]

    # Floats go through text so 0.1 stays 0.1
    amount = record.get("amount")
    if isinstance(amount, float):
        record["amount"] = repr(amount)

    if "createdAt" in record and "created_at" not in record:
        created_ms = record.pop("createdAt")
        if isinstance(created_ms, (int, float)) and not isinstance(created_ms, bool):
            record["created_at"] = datetime.fromtimestamp(created_ms / 1000, tz=timezone.utc)

    return record


def upgrade_stored_user(item: Any) -> Any:
    """Map a first-release user (`isPro`) onto the current layout."""
    if isinstance(item, dict) and "isPro" in item and "is_pro" not in item:
        item = dict(item)
        item["is_pro"] = item.pop("isPro")
    return item


class LocalTransactionStorage(TransactionStorageInterface):
    """
    Transactions stored as a JSON list under one key.

    Individual malformed records are skipped; a malformed list
    raises PersistenceReadError.
    """

    def __init__(self, store: KeyValueStore, key: str = "transaksiKeuangan"):
        self._store = store
        self._key = key

    async def load_all(self) -> list[Transaction]:
        """Load the stored transactions."""
        raw = self._store.get(self._key)
        if raw is None:
            return []

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceReadError(f"Stored transactions are not valid JSON: {e}")
        if not isinstance(items, list):
            raise PersistenceReadError("Stored transactions are not a list")

        transactions = []
        for idx, item in enumerate(items):
            try:
                transactions.append(Transaction.model_validate(upgrade_stored_record(item)))
            except ValidationError as e:
                logger.warning(
                    "stored_transaction_skipped",
                    index=idx,
                    error_count=e.error_count(),
                )
        return transactions

    async def save_all(self, transactions: Sequence[Transaction]) -> bool:
        """Replace the stored transactions."""
        payload = json.dumps(
            [t.model_dump(mode="json") for t in transactions],
            ensure_ascii=False,
        )
        self._store.set(self._key, payload)
        return True


class LocalSessionStorage(SessionStorageInterface):
    """The signed-in user stored as a JSON object under one key."""

    def __init__(self, store: KeyValueStore, key: str = "userKeuangan"):
        self._store = store
        self._key = key

    async def load_user(self) -> Optional[User]:
        """Load the remembered user; unreadable data means signed out."""
        try:
            raw = self._store.get(self._key)
            if raw is None:
                return None
            return User.model_validate(upgrade_stored_user(json.loads(raw)))
        except (PersistenceReadError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("stored_user_unreadable", error=str(e))
            return None

    async def save_user(self, user: User) -> bool:
        self._store.set(self._key, user.model_dump_json())
        return True

    async def clear_user(self) -> bool:
        self._store.remove(self._key)
        return True


class JsonLinesAuditStorage(AuditStorageInterface):
    """
    Audit events appended to a JSON lines file.

    Audit events are append-only.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    async def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event."""
        try:
            with self._lock:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with self._path.open("a", encoding="utf-8") as fh:
                    fh.write(event.to_json_line() + "\n")
            return True
        except OSError as e:
            # Audit logging should not break the main flow
            logger.warning("audit_write_failed", error=str(e))
            return False

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """Get recent events, newest first."""
        if not self._path.exists():
            return []
        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise StorageError(f"Failed to read audit log: {e}")

        events = []
        for line in lines:
            if not line.strip():
                continue
            try:
                events.append(AuditEvent.model_validate_json(line))
            except ValidationError:
                continue  # Skip malformed lines

        # File order is append order
        events.reverse()
        return events[:limit]
