"""Get user vote use case."""

from pydantic import BaseModel

from persona.domain.service import VoteService

from .common import VoteItem


class GetUserVoteRequest(BaseModel):
    """Get user vote request."""

    comment_id: str
    personality_system: str
    voter_identifier: str


class GetUserVoteResponse(BaseModel):
    """Get user vote response."""

    vote: VoteItem | None


class GetUserVoteUseCase:
    """Use case for reading the caller's own vote on a comment."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetUserVoteRequest) -> GetUserVoteResponse:
        vote = await self.vote_service.get_user_vote(
            comment_id=request.comment_id,
            voter_identifier=request.voter_identifier,
            personality_system=request.personality_system,
        )
        return GetUserVoteResponse(vote=VoteItem.from_vote(vote) if vote else None)
