"""Get vote history use case."""

from pydantic import BaseModel

from persona.application.usecase.vote.common import CommentSummaryItem, VoteItem
from persona.domain.service import VoteStatsService


class VoteHistoryItem(BaseModel):
    """Vote in a voter's history.

    comment is None when the comment has since been removed.
    """

    vote: VoteItem
    comment: CommentSummaryItem | None


class PaginationItem(BaseModel):
    """Pagination metadata."""

    page: int
    limit: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class GetVoteHistoryRequest(BaseModel):
    """Get vote history request."""

    voter_identifier: str
    personality_system: str | None = None
    page: int = 1
    limit: int = 20


class GetVoteHistoryResponse(BaseModel):
    """Get vote history response."""

    votes: list[VoteHistoryItem]
    pagination: PaginationItem
    personality_system: str | None


class GetVoteHistoryUseCase:
    """Use case for paging through the caller's own votes."""

    def __init__(self, vote_stats_service: VoteStatsService) -> None:
        """Initialize vote history use case.

        Args:
            vote_stats_service: Vote statistics domain service
        """
        self.vote_stats_service = vote_stats_service

    async def execute(self, request: GetVoteHistoryRequest) -> GetVoteHistoryResponse:
        """Execute vote history flow.

        Args:
            request: Vote history request

        Returns:
            One page of active votes, newest first

        Raises:
            ValidationError: If paging parameters or the system are invalid
        """
        history = await self.vote_stats_service.get_vote_history(
            voter_identifier=request.voter_identifier,
            personality_system=request.personality_system,
            page=request.page,
            limit=request.limit,
        )

        return GetVoteHistoryResponse(
            votes=[
                VoteHistoryItem(
                    vote=VoteItem.from_vote(entry.vote),
                    comment=(
                        CommentSummaryItem.from_summary(entry.comment)
                        if entry.comment
                        else None
                    ),
                )
                for entry in history.entries
            ],
            pagination=PaginationItem(**history.pagination.model_dump()),
            personality_system=(
                request.personality_system.strip().lower()
                if request.personality_system
                else None
            ),
        )
