"""
Main Orchestrator for Pocket Ledger

This module ties together all the components and defines the
end-to-end flows for:
1. Ledger (load → add / delete → persist)
2. Reports (filter → summarize → break down → export)
3. Session (sign in → upgrade → sign out)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing enters the ledger without passing the validator
- The store is persisted after every successful change, never before
- Premium features are checked once, at their entry point
- Every step is audited

No failure here is fatal: unreadable storage becomes an empty ledger,
rejected input leaves the ledger unchanged, refused features return
Denied, and failed writes are logged while memory stays authoritative.
"""

from typing import Optional, Union
from uuid import UUID

from pocket_ledger.audit import AuditLogger, create_correlation_id
from pocket_ledger.config import get_settings
from pocket_ledger.models.session import Denied, PremiumFeature, User
from pocket_ledger.models.transaction import (
    CsvExport,
    MonthlyReport,
    MonthPeriod,
    SyncResult,
    Transaction,
    TransactionDraft,
    ValidationResult,
)
from pocket_ledger.reports import build_monthly_report, render_csv, report_filename
from pocket_ledger.services.session import SessionService
from pocket_ledger.services.storage import (
    InMemoryTransactionStorage,
    JsonLinesAuditStorage,
    KeyValueStore,
    LocalSessionStorage,
    LocalTransactionStorage,
    StorageError,
    TransactionStorageInterface,
)
from pocket_ledger.services.sync import SimulatedCloudSync
from pocket_ledger.store import TransactionNotFoundError, TransactionStore
from pocket_ledger.validation import TransactionValidationError, TransactionValidator


class LedgerFlow:
    """
    Orchestrates everything that touches the transaction collection.

    Flow for a new entry:
    1. Validate → reject with a single message, or
    2. Build → fresh id and timestamp
    3. Append → store
    4. Persist → storage (best effort)
    """

    def __init__(
        self,
        transaction_storage: Optional[TransactionStorageInterface] = None,
        session: Optional[SessionService] = None,
        validator: Optional[TransactionValidator] = None,
        sync_service: Optional[SimulatedCloudSync] = None,
        audit_logger: Optional[AuditLogger] = None,
        store: Optional[TransactionStore] = None,
    ):
        settings = get_settings()
        self._storage = transaction_storage or InMemoryTransactionStorage()
        self._session = session or SessionService()
        self._validator = validator or TransactionValidator()
        self._sync_service = sync_service or SimulatedCloudSync(
            delay_seconds=settings.sync.delay_seconds
        )
        self._audit_logger = audit_logger
        self._store = store or TransactionStore()
        self._export_settings = settings.export

    @property
    def store(self) -> TransactionStore:
        return self._store

    @property
    def session(self) -> SessionService:
        return self._session

    @property
    def audit_logger(self) -> Optional[AuditLogger]:
        return self._audit_logger

    async def load(self) -> int:
        """
        Load the stored collection into the store.

        Unreadable storage degrades to an empty ledger.

        Returns:
            Number of transactions loaded
        """
        try:
            transactions = await self._storage.load_all()
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_load_failed(error_message=str(e))
            transactions = []

        self._store.replace_all(transactions)

        if self._audit_logger:
            await self._audit_logger.log_storage_loaded(len(self._store))

        return len(self._store)

    async def add_transaction(
        self,
        draft: TransactionDraft,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Transaction, ValidationResult]:
        """
        Validate a draft and insert it.

        Returns:
            (transaction, validation_result); the result may carry warnings

        Raises:
            TransactionValidationError: If the draft is rejected.
                The ledger is left unchanged.
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            transaction, result = self._validator.build_transaction(draft)
        except TransactionValidationError as e:
            if self._audit_logger:
                issues = [
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in e.result.errors
                ]
                await self._audit_logger.log_transaction_rejected(
                    issues=issues,
                    correlation_id=correlation_id,
                )
            raise

        self._store.append(transaction)

        if self._audit_logger:
            await self._audit_logger.log_transaction_added(
                transaction_id=transaction.id,
                transaction_type=transaction.type.value,
                category=transaction.category,
                amount=str(transaction.amount),
                correlation_id=correlation_id,
            )

        await self._persist(correlation_id)
        return transaction, result

    async def delete_transaction(
        self,
        transaction_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Remove a transaction by id.

        Returns:
            True if it was removed, False if no such transaction exists
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            self._store.remove(transaction_id)
        except TransactionNotFoundError:
            if self._audit_logger:
                await self._audit_logger.log_transaction_not_found(
                    transaction_id=transaction_id,
                    correlation_id=correlation_id,
                )
            return False

        if self._audit_logger:
            await self._audit_logger.log_transaction_deleted(
                transaction_id=transaction_id,
                correlation_id=correlation_id,
            )

        await self._persist(correlation_id)
        return True

    def monthly_report(self, month: int, year: int) -> MonthlyReport:
        """Filtered transactions, summary and breakdown for one month."""
        period = MonthPeriod(month=month, year=year)
        return build_monthly_report(self._store.all(), period)

    async def export_csv(
        self,
        month: int,
        year: int,
        correlation_id: Optional[UUID] = None,
    ) -> Union[CsvExport, Denied]:
        """
        Render the month as a CSV report (pro only).

        Returns:
            The export, or Denied when the user is not pro
        """
        correlation_id = correlation_id or create_correlation_id()

        denied = await self._gate(PremiumFeature.EXPORT, correlation_id)
        if denied is not None:
            return denied

        report = self.monthly_report(month, year)
        export = CsvExport(
            filename=report_filename(
                report.period,
                prefix=self._export_settings.report_prefix,
                extension=self._export_settings.file_extension,
            ),
            content=render_csv(report.transactions),
            media_type=self._export_settings.media_type,
            row_count=len(report.transactions),
        )

        if self._audit_logger:
            await self._audit_logger.log_export_completed(
                filename=export.filename,
                row_count=export.row_count,
                correlation_id=correlation_id,
            )

        return export

    async def sync(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> Union[SyncResult, Denied]:
        """
        Run the simulated cloud sync (pro only).

        Returns:
            The sync result, or Denied when the user is not pro
        """
        correlation_id = correlation_id or create_correlation_id()

        denied = await self._gate(PremiumFeature.SYNC, correlation_id)
        if denied is not None:
            return denied

        result = await self._sync_service.sync(self._store.all())

        if self._audit_logger:
            await self._audit_logger.log_sync_completed(
                transaction_count=result.transaction_count,
                correlation_id=correlation_id,
            )

        return result

    async def _gate(
        self,
        feature: PremiumFeature,
        correlation_id: UUID,
    ) -> Optional[Denied]:
        """The single premium check for a gated operation."""
        gate = self._session.check(feature)
        if isinstance(gate, Denied):
            if self._audit_logger:
                user = self._session.current_user
                await self._audit_logger.log_feature_denied(
                    feature=feature.value,
                    reason=gate.reason,
                    user_id=user.id if user else None,
                    correlation_id=correlation_id,
                )
            return gate
        return None

    async def _persist(self, correlation_id: Optional[UUID] = None) -> bool:
        """Save the whole collection; failures are logged, not raised."""
        try:
            return await self._storage.save_all(self._store.all())
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_save_failed(
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            return False


class SessionFlow:
    """
    Orchestrates the mock sign-in lifecycle, with auditing.
    """

    def __init__(
        self,
        session: SessionService,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._session = session
        self._audit_logger = audit_logger

    @property
    def current_user(self) -> Optional[User]:
        return self._session.current_user

    async def restore(self) -> Optional[User]:
        return await self._session.restore()

    async def login(self, provider: str) -> User:
        user = await self._session.login(provider)
        if self._audit_logger:
            await self._audit_logger.log_user_logged_in(user.id, provider)
        return user

    async def logout(self) -> None:
        user = self._session.current_user
        await self._session.logout()
        if self._audit_logger and user:
            await self._audit_logger.log_user_logged_out(user.id)

    async def subscribe(self) -> User:
        """
        Upgrade the signed-in user to pro.

        Raises:
            SessionError: If nobody is signed in
        """
        user = await self._session.subscribe()
        if self._audit_logger:
            await self._audit_logger.log_user_upgraded(user.id)
        return user


def create_app_components(
    use_storage: bool = True,
) -> tuple[LedgerFlow, SessionFlow]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to persist to the local data directory.
                    Set to False for an in-memory ledger.

    Returns:
        (ledger_flow, session_flow)
    """
    settings = get_settings()

    if use_storage:
        storage_settings = settings.storage
        kv_store = KeyValueStore(
            storage_settings.store_path,
            write_attempts=storage_settings.write_attempts,
        )
        transaction_storage = LocalTransactionStorage(
            kv_store, key=storage_settings.transactions_key
        )
        session = SessionService(
            LocalSessionStorage(kv_store, key=storage_settings.user_key)
        )
        audit_logger = AuditLogger(JsonLinesAuditStorage(storage_settings.audit_path))
    else:
        transaction_storage = InMemoryTransactionStorage()
        session = SessionService()
        audit_logger = AuditLogger()  # Local-only logging

    ledger_flow = LedgerFlow(
        transaction_storage=transaction_storage,
        session=session,
        audit_logger=audit_logger,
    )
    session_flow = SessionFlow(session=session, audit_logger=audit_logger)

    return ledger_flow, session_flow
