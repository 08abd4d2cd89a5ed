"""Vote entity.

Votes attach a personality type to a comment on a personality profile.
Each voter can hold one active vote per personality system per comment.
"""

from datetime import datetime

from pydantic import Field

from persona.domain.model.common import DomainModel
from persona.domain.value import (
    CommentId,
    PersonalitySystem,
    ProfileId,
    VoteId,
    VoteOutcome,
)


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One active vote per (comment, voter, personality system), enforced by
      a partial unique index on active votes
    - Removal deactivates the vote instead of deleting it, so history is kept
    - personality_value is always stored in the catalog's canonical casing
    - voter_identifier is an anonymous per-client token, not a user account
    """

    id: VoteId
    comment_id: CommentId
    profile_id: ProfileId
    voter_identifier: str = Field(min_length=1, max_length=100)
    personality_system: PersonalitySystem
    personality_value: str = Field(min_length=1)
    active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class VoteSubmission(DomainModel):
    """Result of submitting a vote."""

    outcome: VoteOutcome
    vote: Vote

    @property
    def is_update(self) -> bool:
        """Whether the voter already had a vote for this system.

        Unchanged resubmissions count as updates so that repeating a
        request is reported the same way as the first repeat.
        """
        return self.outcome != VoteOutcome.SUBMITTED


class VoteValueChange(DomainModel):
    """A vote's value as it was replaced by an update."""

    previous_value: str
    vote: Vote
