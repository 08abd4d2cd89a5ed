"""Read models produced by vote aggregation queries."""

import math
from typing import Optional

from persona.domain.model.common import DomainModel
from persona.domain.model.vote import Vote
from persona.domain.value import CommentId, PersonalitySystem, ProfileId


class CommentVoteCount(DomainModel):
    """Active vote count for one comment."""

    comment_id: CommentId
    total_votes: int
    personality_systems: list[PersonalitySystem]


class PersonalityValueCount(DomainModel):
    """Active vote count for one (system, value) pair."""

    personality_system: PersonalitySystem
    personality_value: str
    count: int


class ValueCount(DomainModel):
    """Count for one value within a personality system."""

    value: str
    count: int


class PersonalitySystemStats(DomainModel):
    """Active vote counts for every voted value of one system."""

    personality_system: PersonalitySystem
    values: list[ValueCount]
    total_votes: int


class CommentSummary(DomainModel):
    """Minimal comment projection used in vote listings."""

    id: CommentId
    profile_id: ProfileId
    author: str
    content: str


class TopVotedComment(DomainModel):
    """Comment ranked by its number of active votes."""

    comment: CommentSummary
    vote_count: int
    personality_systems: list[PersonalitySystem]


class VoteHistoryEntry(DomainModel):
    """One vote in a voter's history.

    comment is None when the voted comment no longer exists.
    """

    vote: Vote
    comment: Optional[CommentSummary] = None


class Pagination(DomainModel):
    """Page position within a result set."""

    page: int
    limit: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "Pagination":
        total_pages = math.ceil(total_count / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


class VoteHistoryPage(DomainModel):
    """Page of a voter's vote history."""

    entries: list[VoteHistoryEntry]
    pagination: Pagination
