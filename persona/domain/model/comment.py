"""Comment entity.

Comments are written on personality profiles and collect personality votes.
Each comment carries a denormalized tally of its active votes.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from persona.domain.model.common import DomainModel
from persona.domain.value import CommentId, ProfileId, VoteStats


class Comment(DomainModel):
    """Comment entity.

    The tally (vote_stats + total_votes) is derived state. It is only
    changed through atomic increment/decrement operations on the
    repository, never by saving a modified copy of the comment.
    Invariant: total_votes == vote_stats.total()
    """

    id: CommentId
    profile_id: ProfileId
    author: str = Field(min_length=1, max_length=100)
    title: Optional[str] = Field(default=None, max_length=200)
    content: str = Field(min_length=1, max_length=1000)
    is_visible: bool = True
    vote_stats: VoteStats = Field(default_factory=VoteStats)
    total_votes: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
