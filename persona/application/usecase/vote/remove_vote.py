"""Remove vote use case."""

from pydantic import BaseModel

from persona.domain.service import VoteService

from .common import VoteItem


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    comment_id: str  # UUID string
    personality_system: str
    voter_identifier: str


class RemoveVoteResponse(BaseModel):
    """Remove vote response."""

    removed: bool
    message: str
    vote: VoteItem | None = None


class RemoveVoteUseCase:
    """Use case for removing a personality vote from a comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize remove vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RemoveVoteRequest) -> RemoveVoteResponse:
        """Execute remove vote flow.

        Removing a vote that does not exist is reported, not raised.

        Args:
            request: Remove vote request

        Returns:
            Remove vote response
        """
        removed = await self.vote_service.remove_vote(
            comment_id=request.comment_id,
            voter_identifier=request.voter_identifier,
            personality_system=request.personality_system,
        )

        if removed:
            return RemoveVoteResponse(
                removed=True,
                message="Vote removed successfully",
                vote=VoteItem.from_vote(removed),
            )
        else:
            return RemoveVoteResponse(
                removed=False,
                message="No vote found to remove",
            )
