"""Repository interfaces for the persona domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from persona.domain.repository.comment import CommentRepository
from persona.domain.repository.transaction import TransactionManager
from persona.domain.repository.vote import VoteRepository

__all__ = [
    "CommentRepository",
    "TransactionManager",
    "VoteRepository",
]
