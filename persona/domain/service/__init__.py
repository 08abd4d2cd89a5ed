"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .vote_service import VoteService
from .vote_stats_service import VoteStatsService
from .voter_identity import resolve_voter_identifier

__all__ = [
    "CommentService",
    "Service",
    "VoteService",
    "VoteStatsService",
    "resolve_voter_identifier",
]
