"""Vote use cases."""

from .common import CommentSummaryItem, VoteItem
from .get_user_vote import GetUserVoteRequest, GetUserVoteResponse, GetUserVoteUseCase
from .list_comment_votes import (
    ListCommentVotesRequest,
    ListCommentVotesResponse,
    ListCommentVotesUseCase,
)
from .remove_vote import RemoveVoteRequest, RemoveVoteResponse, RemoveVoteUseCase
from .submit_bulk_votes import (
    BulkVoteItem,
    SubmitBulkVotesRequest,
    SubmitBulkVotesResponse,
    SubmitBulkVotesUseCase,
)
from .submit_vote import SubmitVoteRequest, SubmitVoteResponse, SubmitVoteUseCase

__all__ = [
    "BulkVoteItem",
    "CommentSummaryItem",
    "GetUserVoteRequest",
    "GetUserVoteResponse",
    "GetUserVoteUseCase",
    "ListCommentVotesRequest",
    "ListCommentVotesResponse",
    "ListCommentVotesUseCase",
    "RemoveVoteRequest",
    "RemoveVoteResponse",
    "RemoveVoteUseCase",
    "SubmitBulkVotesRequest",
    "SubmitBulkVotesResponse",
    "SubmitBulkVotesUseCase",
    "SubmitVoteRequest",
    "SubmitVoteResponse",
    "SubmitVoteUseCase",
    "VoteItem",
]
