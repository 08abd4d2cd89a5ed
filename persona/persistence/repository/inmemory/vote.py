"""In-memory vote repository for testing."""

from collections import defaultdict
from datetime import datetime
from typing import Optional

from persona.domain.error import DuplicateVoteError
from persona.domain.model import (
    CommentVoteCount,
    PersonalityValueCount,
    Vote,
    VoteValueChange,
)
from persona.domain.repository.vote import VoteRepository
from persona.domain.value import CommentId, PersonalitySystem


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Methods never await between reading and writing the vote list, so each
    call is atomic with respect to other tasks on the event loop.
    """

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    def _find_active_index(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
    ) -> Optional[int]:
        for i, vote in enumerate(self._votes):
            if (
                vote.active
                and vote.comment_id == comment_id
                and vote.voter_identifier == voter_identifier
                and vote.personality_system == personality_system
            ):
                return i
        return None

    def _active(self) -> list[Vote]:
        return [v for v in self._votes if v.active]

    def all_votes(self) -> list[Vote]:
        """Every stored record, deactivated ones included."""
        return list(self._votes)

    def snapshot(self) -> list[Vote]:
        return list(self._votes)

    def restore(self, state: list[Vote]) -> None:
        self._votes = list(state)

    async def find_active_vote(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
    ) -> Optional[Vote]:
        """Find a voter's active vote on a comment for one system."""
        index = self._find_active_index(comment_id, voter_identifier, personality_system)
        return self._votes[index] if index is not None else None

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            DuplicateVoteError: If an active vote already holds the slot
        """
        if vote.active and (
            self._find_active_index(
                vote.comment_id, vote.voter_identifier, vote.personality_system
            )
            is not None
        ):
            raise DuplicateVoteError(str(vote.comment_id), vote.personality_system.value)

        self._votes.append(vote)
        return vote

    async def update_value(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> Optional[VoteValueChange]:
        """Change the value of the matching active vote."""
        index = self._find_active_index(comment_id, voter_identifier, personality_system)
        if index is None:
            return None

        prior = self._votes[index]
        updated = prior.model_copy(
            update={"personality_value": personality_value, "updated_at": datetime.now()}
        )
        self._votes[index] = updated
        return VoteValueChange(previous_value=prior.personality_value, vote=updated)

    async def deactivate(
        self,
        comment_id: CommentId,
        voter_identifier: str,
        personality_system: PersonalitySystem,
    ) -> Optional[Vote]:
        """Deactivate the matching active vote, returning its prior state."""
        index = self._find_active_index(comment_id, voter_identifier, personality_system)
        if index is None:
            return None

        prior = self._votes[index]
        self._votes[index] = prior.model_copy(
            update={"active": False, "updated_at": datetime.now()}
        )
        return prior

    async def find_by_comment(
        self,
        comment_id: CommentId,
        personality_system: Optional[PersonalitySystem] = None,
    ) -> list[Vote]:
        """Find active votes on a comment, newest first."""
        votes = [
            v
            for v in self._active()
            if v.comment_id == comment_id
            and (personality_system is None or v.personality_system == personality_system)
        ]
        votes.sort(key=lambda v: v.created_at, reverse=True)
        return votes

    async def find_by_voter(
        self,
        voter_identifier: str,
        personality_system: Optional[PersonalitySystem] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Vote]:
        """Find a voter's active votes, newest first."""
        votes = [
            v
            for v in self._active()
            if v.voter_identifier == voter_identifier
            and (personality_system is None or v.personality_system == personality_system)
        ]
        votes.sort(key=lambda v: v.created_at, reverse=True)
        return votes[offset : offset + limit]

    async def count_active(
        self,
        comment_id: Optional[CommentId] = None,
        personality_system: Optional[PersonalitySystem] = None,
        voter_identifier: Optional[str] = None,
    ) -> int:
        """Count active votes matching all given filters."""
        return sum(
            1
            for v in self._active()
            if (comment_id is None or v.comment_id == comment_id)
            and (personality_system is None or v.personality_system == personality_system)
            and (voter_identifier is None or v.voter_identifier == voter_identifier)
        )

    async def top_voted_comments(
        self,
        personality_system: Optional[PersonalitySystem] = None,
        limit: int = 10,
    ) -> list[CommentVoteCount]:
        """Group active votes by comment, most votes first."""
        groups: dict[CommentId, list[Vote]] = defaultdict(list)
        for vote in self._active():
            if personality_system is None or vote.personality_system == personality_system:
                groups[vote.comment_id].append(vote)

        counts = [
            CommentVoteCount(
                comment_id=comment_id,
                total_votes=len(votes),
                personality_systems=sorted(
                    {v.personality_system for v in votes}, key=lambda s: s.value
                ),
            )
            for comment_id, votes in groups.items()
        ]
        counts.sort(key=lambda c: (-c.total_votes, str(c.comment_id)))
        return counts[:limit]

    async def value_counts(
        self, comment_id: Optional[CommentId] = None
    ) -> list[PersonalityValueCount]:
        """Count active votes per (system, value)."""
        counts: dict[tuple[PersonalitySystem, str], int] = defaultdict(int)
        for vote in self._active():
            if comment_id is None or vote.comment_id == comment_id:
                counts[(vote.personality_system, vote.personality_value)] += 1

        return [
            PersonalityValueCount(
                personality_system=system, personality_value=value, count=count
            )
            for (system, value), count in sorted(
                counts.items(), key=lambda i: (i[0][0].value, i[0][1])
            )
        ]
