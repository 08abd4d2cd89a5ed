"""PostgreSQL repository implementations."""

from persona.persistence.repository.comment import PostgresCommentRepository
from persona.persistence.repository.transaction import PostgresTransactionManager
from persona.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresTransactionManager",
    "PostgresVoteRepository",
]
