"""Get vote count use case."""

from pydantic import BaseModel

from persona.domain.service import VoteStatsService


class GetVoteCountRequest(BaseModel):
    """Get vote count request."""

    comment_id: str | None = None
    personality_system: str | None = None


class GetVoteCountResponse(BaseModel):
    """Get vote count response."""

    count: int
    comment_id: str | None
    personality_system: str | None


class GetVoteCountUseCase:
    """Use case for counting active votes."""

    def __init__(self, vote_stats_service: VoteStatsService) -> None:
        self.vote_stats_service = vote_stats_service

    async def execute(self, request: GetVoteCountRequest) -> GetVoteCountResponse:
        count = await self.vote_stats_service.get_vote_count(
            comment_id=request.comment_id,
            personality_system=request.personality_system,
        )
        return GetVoteCountResponse(
            count=count,
            comment_id=request.comment_id,
            personality_system=(
                request.personality_system.strip().lower()
                if request.personality_system
                else None
            ),
        )
