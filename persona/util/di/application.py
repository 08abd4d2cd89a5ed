"""Application layer DI providers."""

from dishka import Scope, provide

from persona.application.usecase.comment import CreateCommentUseCase, GetCommentUseCase
from persona.application.usecase.stats import (
    GetCommentVoteStatsUseCase,
    GetPersonalityStatsUseCase,
    GetTopVotedCommentsUseCase,
    GetVoteCountUseCase,
    GetVoteHistoryUseCase,
    ListPersonalityValuesUseCase,
)
from persona.application.usecase.vote import (
    GetUserVoteUseCase,
    ListCommentVotesUseCase,
    RemoveVoteUseCase,
    SubmitBulkVotesUseCase,
    SubmitVoteUseCase,
)
from persona.domain.repository import TransactionManager
from persona.domain.service import CommentService, VoteService, VoteStatsService
from persona.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_vote_use_case(self, vote_service: VoteService) -> SubmitVoteUseCase:
        """Provide submit vote use case."""
        return SubmitVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(self, vote_service: VoteService) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_vote_use_case(
        self, vote_service: VoteService
    ) -> GetUserVoteUseCase:
        """Provide get user vote use case."""
        return GetUserVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_list_comment_votes_use_case(
        self, vote_service: VoteService
    ) -> ListCommentVotesUseCase:
        """Provide list comment votes use case."""
        return ListCommentVotesUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_submit_bulk_votes_use_case(
        self, vote_service: VoteService, transaction_manager: TransactionManager
    ) -> SubmitBulkVotesUseCase:
        """Provide bulk vote submission use case."""
        return SubmitBulkVotesUseCase(
            vote_service=vote_service, transaction_manager=transaction_manager
        )

    # Statistics use cases
    @provide(scope=Scope.REQUEST)
    def get_comment_vote_stats_use_case(
        self, vote_stats_service: VoteStatsService
    ) -> GetCommentVoteStatsUseCase:
        """Provide comment vote stats use case."""
        return GetCommentVoteStatsUseCase(vote_stats_service=vote_stats_service)

    @provide(scope=Scope.REQUEST)
    def get_top_voted_comments_use_case(
        self, vote_stats_service: VoteStatsService
    ) -> GetTopVotedCommentsUseCase:
        """Provide top voted comments use case."""
        return GetTopVotedCommentsUseCase(vote_stats_service=vote_stats_service)

    @provide(scope=Scope.REQUEST)
    def get_personality_stats_use_case(
        self, vote_stats_service: VoteStatsService
    ) -> GetPersonalityStatsUseCase:
        """Provide personality stats use case."""
        return GetPersonalityStatsUseCase(vote_stats_service=vote_stats_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_history_use_case(
        self, vote_stats_service: VoteStatsService
    ) -> GetVoteHistoryUseCase:
        """Provide vote history use case."""
        return GetVoteHistoryUseCase(vote_stats_service=vote_stats_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_count_use_case(
        self, vote_stats_service: VoteStatsService
    ) -> GetVoteCountUseCase:
        """Provide vote count use case."""
        return GetVoteCountUseCase(vote_stats_service=vote_stats_service)

    @provide(scope=Scope.APP)
    def get_list_personality_values_use_case(self) -> ListPersonalityValuesUseCase:
        """Provide personality value catalog use case."""
        return ListPersonalityValuesUseCase()

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)
