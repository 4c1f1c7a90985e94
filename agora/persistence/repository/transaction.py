"""PostgreSQL transaction manager."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.repository import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Runs atomic blocks as SAVEPOINTs on the request session.

    The outer transaction is still committed or rolled back once per
    request by the session provider.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction manager with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Open a SAVEPOINT, released on success and rolled back on error."""
        async with self.session.begin_nested():
            yield
