"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from persona.domain.model.comment import Comment
from persona.domain.value import CommentId, PersonalitySystem, VoteStats


class CommentRepository(ABC):
    """Repository for Comment entity, including its vote tally.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, with its current tally.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments at once (batch query).

        Missing IDs are skipped.

        Args:
            comment_ids: IDs to look up

        Returns:
            Comments that exist, in no particular order
        """
        pass

    @abstractmethod
    async def exists(self, comment_id: CommentId) -> bool:
        """Check whether a comment exists.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            True if the comment exists
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Create a comment with an all-zero tally.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def increment_vote(
        self,
        comment_id: CommentId,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> None:
        """Atomically add one vote for a value to the comment's tally.

        Increments both the per-value counter and total_votes.

        Args:
            comment_id: Comment ID
            personality_system: System of the vote
            personality_value: Canonical value voted for
        """
        pass

    @abstractmethod
    async def decrement_vote(
        self,
        comment_id: CommentId,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> bool:
        """Atomically remove one vote for a value from the comment's tally.

        Counters never go below zero. When the per-value counter is already
        zero nothing changes, so total_votes stays equal to the sum of
        counters.

        Args:
            comment_id: Comment ID
            personality_system: System of the vote
            personality_value: Canonical value to decrement

        Returns:
            True if a counter was decremented, False if it was clamped
        """
        pass

    @abstractmethod
    async def replace_tally(self, comment_id: CommentId, stats: VoteStats) -> None:
        """Overwrite the comment's tally (repair pass).

        Sets every counter from stats and total_votes to stats.total().

        Args:
            comment_id: Comment ID
            stats: Tally recomputed from authoritative vote records
        """
        pass
