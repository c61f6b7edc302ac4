"""
Simulated Cloud Sync

No data leaves the machine: a sync waits a fixed delay and reports success.
"""

import asyncio
from typing import Sequence

from pocket_ledger.models.transaction import SyncResult, Transaction


class SimulatedCloudSync:
    """Pretends to upload the ledger."""

    def __init__(self, delay_seconds: float = 2.0):
        self._delay_seconds = delay_seconds

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    async def sync(self, transactions: Sequence[Transaction]) -> SyncResult:
        await asyncio.sleep(self._delay_seconds)
        return SyncResult(
            transaction_count=len(transactions),
            message="Data synced to the cloud!",
        )
