"""In-memory transaction manager for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from agora.domain.repository import TransactionManager

from .database import InMemoryDatabase


class InMemoryTransactionManager(TransactionManager):
    """Snapshot/restore implementation of TransactionManager."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Restore the snapshot taken on entry if the block raises."""
        snapshot = self.database.snapshot()
        try:
            yield
        except Exception:
            self.database.restore(snapshot)
            raise
