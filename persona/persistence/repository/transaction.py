"""PostgreSQL implementation of TransactionManager."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from persona.domain.error import VoteOperationError
from persona.domain.repository import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Savepoints on the request's database session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with the request session.

        Args:
            session: SQLAlchemy async session shared with the repositories
        """
        self.session = session

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Run the block inside SAVEPOINT / RELEASE SAVEPOINT.

        On an exception the block's writes are rolled back to the savepoint,
        which also clears an aborted-transaction state left by a failed
        statement.
        """
        try:
            async with self.session.begin_nested():
                yield
        except SQLAlchemyError as e:
            # Raised by SAVEPOINT or RELEASE itself; the block's own storage
            # errors arrive already wrapped by the domain services.
            raise VoteOperationError("run savepoint", "transaction", e) from e
