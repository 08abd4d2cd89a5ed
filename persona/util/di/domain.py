"""Domain layer DI providers."""

from dishka import Scope, provide

from persona.config import VotingSettings
from persona.domain.repository import CommentRepository, VoteRepository
from persona.domain.service import CommentService, VoteService, VoteStatsService
from persona.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances sharing one transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        comment_service: CommentService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            comment_service=comment_service,
        )

    @provide
    def get_vote_stats_service(
        self,
        vote_repository: VoteRepository,
        comment_service: CommentService,
        voting_settings: VotingSettings,
    ) -> VoteStatsService:
        """Provide vote statistics domain service."""
        return VoteStatsService(
            vote_repository=vote_repository,
            comment_service=comment_service,
            max_top_limit=voting_settings.top_comments_max_limit,
            max_history_limit=voting_settings.history_max_limit,
        )
