"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .transaction import InMemoryTransactionManager
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryTransactionManager",
    "InMemoryVoteRepository",
]
