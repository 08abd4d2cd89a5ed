"""Response items shared by vote use cases."""

from datetime import datetime

from pydantic import BaseModel

from persona.domain.model import CommentSummary, Vote
from persona.domain.value import PersonalitySystem


class VoteItem(BaseModel):
    """Public view of a vote.

    The voter identifier and the active flag are never exposed.
    """

    vote_id: str
    comment_id: str
    profile_id: int
    personality_system: PersonalitySystem
    personality_value: str
    created_at: datetime

    @classmethod
    def from_vote(cls, vote: Vote) -> "VoteItem":
        return cls(
            vote_id=str(vote.id),
            comment_id=str(vote.comment_id),
            profile_id=vote.profile_id,
            personality_system=vote.personality_system,
            personality_value=vote.personality_value,
            created_at=vote.created_at,
        )


class CommentSummaryItem(BaseModel):
    """Minimal comment view attached to vote listings."""

    comment_id: str
    profile_id: int
    author: str
    content: str

    @classmethod
    def from_summary(cls, summary: CommentSummary) -> "CommentSummaryItem":
        return cls(
            comment_id=str(summary.id),
            profile_id=summary.profile_id,
            author=summary.author,
            content=summary.content,
        )
