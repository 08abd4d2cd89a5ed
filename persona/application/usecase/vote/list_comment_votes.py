"""List comment votes use case."""

import logfire
from pydantic import BaseModel

from persona.domain.service import VoteService

from .common import VoteItem


class ListCommentVotesRequest(BaseModel):
    """List comment votes request."""

    comment_id: str
    personality_system: str | None = None


class ListCommentVotesResponse(BaseModel):
    """List comment votes response."""

    comment_id: str
    personality_system: str | None
    votes: list[VoteItem]
    count: int


class ListCommentVotesUseCase:
    """Use case for listing the active votes on a comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize list comment votes use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(
        self, request: ListCommentVotesRequest
    ) -> ListCommentVotesResponse:
        """Execute list comment votes flow.

        Args:
            request: List comment votes request

        Returns:
            Active votes on the comment, newest first
        """
        with logfire.span("list_comment_votes.execute", comment_id=request.comment_id):
            votes = await self.vote_service.get_comment_votes(
                request.comment_id, request.personality_system
            )
            items = [VoteItem.from_vote(vote) for vote in votes]

            return ListCommentVotesResponse(
                comment_id=request.comment_id,
                personality_system=(
                    request.personality_system.strip().lower()
                    if request.personality_system
                    else None
                ),
                votes=items,
                count=len(items),
            )
