"""Vote statistics use cases."""

from .get_comment_vote_stats import (
    GetCommentVoteStatsRequest,
    GetCommentVoteStatsResponse,
    GetCommentVoteStatsUseCase,
)
from .get_personality_stats import (
    GetPersonalityStatsRequest,
    GetPersonalityStatsResponse,
    GetPersonalityStatsUseCase,
)
from .get_top_voted_comments import (
    GetTopVotedCommentsRequest,
    GetTopVotedCommentsResponse,
    GetTopVotedCommentsUseCase,
)
from .get_vote_count import GetVoteCountRequest, GetVoteCountResponse, GetVoteCountUseCase
from .get_vote_history import (
    GetVoteHistoryRequest,
    GetVoteHistoryResponse,
    GetVoteHistoryUseCase,
)
from .list_personality_values import (
    ListPersonalityValuesResponse,
    ListPersonalityValuesUseCase,
)

__all__ = [
    "GetCommentVoteStatsRequest",
    "GetCommentVoteStatsResponse",
    "GetCommentVoteStatsUseCase",
    "GetPersonalityStatsRequest",
    "GetPersonalityStatsResponse",
    "GetPersonalityStatsUseCase",
    "GetTopVotedCommentsRequest",
    "GetTopVotedCommentsResponse",
    "GetTopVotedCommentsUseCase",
    "GetVoteCountRequest",
    "GetVoteCountResponse",
    "GetVoteCountUseCase",
    "GetVoteHistoryRequest",
    "GetVoteHistoryResponse",
    "GetVoteHistoryUseCase",
    "ListPersonalityValuesResponse",
    "ListPersonalityValuesUseCase",
]
