"""Get top voted comments use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from persona.application.usecase.vote.common import CommentSummaryItem
from persona.domain.service import VoteStatsService
from persona.domain.value import PersonalitySystem


class TopVotedCommentItem(BaseModel):
    """Ranked comment in response."""

    comment: CommentSummaryItem
    vote_count: int
    personality_systems: list[PersonalitySystem]


class GetTopVotedCommentsRequest(BaseModel):
    """Get top voted comments request."""

    personality_system: str | None = None
    limit: int = 10


class GetTopVotedCommentsResponse(BaseModel):
    """Get top voted comments response."""

    comments: list[TopVotedCommentItem]
    personality_system: str | None
    limit: int
    last_updated: datetime


class GetTopVotedCommentsUseCase:
    """Use case for ranking comments by number of active votes."""

    def __init__(self, vote_stats_service: VoteStatsService) -> None:
        """Initialize top voted comments use case.

        Args:
            vote_stats_service: Vote statistics domain service
        """
        self.vote_stats_service = vote_stats_service

    async def execute(
        self, request: GetTopVotedCommentsRequest
    ) -> GetTopVotedCommentsResponse:
        """Execute top voted comments flow.

        Args:
            request: Top voted comments request

        Returns:
            Ranked comments, most voted first
        """
        with logfire.span(
            "get_top_voted_comments.execute",
            personality_system=request.personality_system,
            limit=request.limit,
        ):
            ranked = await self.vote_stats_service.get_top_voted_comments(
                request.personality_system, request.limit
            )

            return GetTopVotedCommentsResponse(
                comments=[
                    TopVotedCommentItem(
                        comment=CommentSummaryItem.from_summary(entry.comment),
                        vote_count=entry.vote_count,
                        personality_systems=entry.personality_systems,
                    )
                    for entry in ranked
                ],
                personality_system=(
                    request.personality_system.strip().lower()
                    if request.personality_system
                    else None
                ),
                limit=request.limit,
                last_updated=datetime.now(),
            )
