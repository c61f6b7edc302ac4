"""Shared fixtures for Pocket Ledger tests."""

from datetime import date
from decimal import Decimal

import pytest

from pocket_ledger.audit import AuditLogger
from pocket_ledger.models import Transaction, TransactionType
from pocket_ledger.orchestrator import LedgerFlow
from pocket_ledger.services import (
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
    SessionService,
    SimulatedCloudSync,
)


def _make_transaction(
    day: str,
    transaction_type: TransactionType,
    category: str,
    amount: str,
    note: str = "",
) -> Transaction:
    return Transaction(
        date=date.fromisoformat(day),
        type=transaction_type,
        category=category,
        amount=Decimal(amount),
        note=note,
    )


@pytest.fixture
def make_transaction():
    """Factory for transactions: make_transaction('2024-03-01', EXPENSE, 'Food', '50')."""
    return _make_transaction


@pytest.fixture
def example_transactions():
    """Two March 2024 records and one April 2024 record."""
    return [
        _make_transaction("2024-03-01", TransactionType.EXPENSE, "Food", "50"),
        _make_transaction("2024-03-02", TransactionType.INCOME, "Salary", "1000"),
        _make_transaction("2024-04-01", TransactionType.EXPENSE, "Food", "20"),
    ]


@pytest.fixture
def transaction_storage():
    return InMemoryTransactionStorage()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def session():
    return SessionService()


@pytest.fixture
def ledger_flow(transaction_storage, audit_storage, session):
    """A LedgerFlow wired to in-memory backends and an instant sync."""
    return LedgerFlow(
        transaction_storage=transaction_storage,
        session=session,
        sync_service=SimulatedCloudSync(delay_seconds=0),
        audit_logger=AuditLogger(audit_storage),
    )
