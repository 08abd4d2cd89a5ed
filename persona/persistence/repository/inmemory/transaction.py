"""In-memory transaction manager for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from persona.domain.repository import TransactionManager

from .comment import InMemoryCommentRepository
from .vote import InMemoryVoteRepository


class InMemoryTransactionManager(TransactionManager):
    """Savepoints over the in-memory stores.

    A savepoint copies both stores and puts the copies back if the block
    raises. Restoring replaces the whole store, so blocks must not overlap
    with writes from other tasks.
    """

    def __init__(
        self,
        comment_repository: InMemoryCommentRepository,
        vote_repository: InMemoryVoteRepository,
    ) -> None:
        self.comment_repository = comment_repository
        self.vote_repository = vote_repository

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        comments = self.comment_repository.snapshot()
        votes = self.vote_repository.snapshot()
        try:
            yield
        except Exception:
            self.comment_repository.restore(comments)
            self.vote_repository.restore(votes)
            raise
