"""Mock persistence providers for testing."""

from dishka import Scope, provide

from persona.domain.repository import (
    CommentRepository,
    TransactionManager,
    VoteRepository,
)
from persona.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryTransactionManager,
    InMemoryVoteRepository,
)
from persona.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so that requests served by one container see the same
    comments and votes. Each test builds its own container, so tests stay
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_comment_store(self) -> InMemoryCommentRepository:
        """Provide the in-memory comment store."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_vote_store(self) -> InMemoryVoteRepository:
        """Provide the in-memory vote store."""
        return InMemoryVoteRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(
        self, store: InMemoryCommentRepository
    ) -> CommentRepository:
        """Provide in-memory comment repository."""
        return store

    @provide(scope=Scope.APP)
    def get_vote_repository(self, store: InMemoryVoteRepository) -> VoteRepository:
        """Provide in-memory vote repository."""
        return store

    @provide(scope=Scope.APP)
    def get_transaction_manager(
        self,
        comment_store: InMemoryCommentRepository,
        vote_store: InMemoryVoteRepository,
    ) -> TransactionManager:
        """Provide savepoints over both in-memory stores."""
        return InMemoryTransactionManager(comment_store, vote_store)
