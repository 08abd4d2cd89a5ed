"""Domain model entities for persona votes."""

from persona.domain.model.comment import Comment
from persona.domain.model.stats import (
    CommentSummary,
    CommentVoteCount,
    Pagination,
    PersonalitySystemStats,
    PersonalityValueCount,
    TopVotedComment,
    ValueCount,
    VoteHistoryEntry,
    VoteHistoryPage,
)
from persona.domain.model.vote import Vote, VoteSubmission, VoteValueChange

__all__ = [
    "Comment",
    "CommentSummary",
    "CommentVoteCount",
    "Pagination",
    "PersonalitySystemStats",
    "PersonalityValueCount",
    "TopVotedComment",
    "ValueCount",
    "Vote",
    "VoteHistoryEntry",
    "VoteHistoryPage",
    "VoteSubmission",
    "VoteValueChange",
]
