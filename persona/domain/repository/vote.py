"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from persona.domain.model.stats import CommentVoteCount, PersonalityValueCount
from persona.domain.model.vote import Vote, VoteValueChange
from persona.domain.value import CommentId, PersonalitySystem


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.

    All mutations are single-statement operations against the store;
    implementations must not read a vote, change it in memory and write
    the whole record back.
    """

    @abstractmethod
    async def find_active_vote(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
    ) -> Optional[Vote]:
        """Find a voter's active vote on a comment for one system.

        Args:
            comment_id: ID of the comment
            voter_identifier: Anonymous voter token
            personality_system: Personality system of the vote

        Returns:
            The active vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create).

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            DuplicateVoteError: If an active vote already exists for this
                comment/voter/system combination
        """
        pass

    @abstractmethod
    async def update_value(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> Optional[VoteValueChange]:
        """Change the value of the matching active vote.

        The previous value is read in the same atomic step as the write, so
        of two concurrent changes each one reports the value it replaced.

        Args:
            comment_id: ID of the comment
            voter_identifier: Anonymous voter token
            personality_system: Personality system of the vote
            personality_value: New canonical value

        Returns:
            The replaced value and the updated vote, or None if no active
            vote matched
        """
        pass

    @abstractmethod
    async def deactivate(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
    ) -> Optional[Vote]:
        """Deactivate the matching active vote (soft delete).

        Args:
            comment_id: ID of the comment
            voter_identifier: Anonymous voter token
            personality_system: Personality system of the vote

        Returns:
            The vote as it was before deactivation, or None if no active
            vote matched
        """
        pass

    @abstractmethod
    async def find_by_comment(
        self,
        comment_id: CommentId,
        personality_system: Optional[PersonalitySystem] = None,
    ) -> List[Vote]:
        """Find active votes on a comment, newest first.

        Args:
            comment_id: ID of the comment
            personality_system: Optional system filter

        Returns:
            List of active votes
        """
        pass

    @abstractmethod
    async def find_by_voter(
        self,
        voter_identifier: str,
        personality_system: Optional[PersonalitySystem] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Vote]:
        """Find a voter's active votes, newest first.

        Args:
            voter_identifier: Anonymous voter token
            personality_system: Optional system filter
            limit: Maximum number of votes to return
            offset: Number of votes to skip

        Returns:
            Page of active votes
        """
        pass

    @abstractmethod
    async def count_active(
        self,
        comment_id: Optional[CommentId] = None,
        personality_system: Optional[PersonalitySystem] = None,
        voter_identifier: Optional[str] = None,
    ) -> int:
        """Count active votes matching all given filters.

        Returns:
            Number of active votes
        """
        pass

    @abstractmethod
    async def top_voted_comments(
        self,
        personality_system: Optional[PersonalitySystem] = None,
        limit: int = 10,
    ) -> List[CommentVoteCount]:
        """Group active votes by comment and return the largest groups.

        Sorted by vote count descending; ties are broken by comment ID
        ascending so results are deterministic.

        Args:
            personality_system: Only count votes for this system
            limit: Maximum number of comments to return

        Returns:
            Vote counts per comment
        """
        pass

    @abstractmethod
    async def value_counts(
        self, comment_id: Optional[CommentId] = None
    ) -> List[PersonalityValueCount]:
        """Count active votes per (system, value).

        Args:
            comment_id: Only count votes on this comment

        Returns:
            Counts ordered by system then value
        """
        pass
