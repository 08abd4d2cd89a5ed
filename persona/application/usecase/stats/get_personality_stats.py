"""Get personality system stats use case."""

from datetime import datetime

from pydantic import BaseModel

from persona.domain.service import VoteStatsService
from persona.domain.value import PersonalitySystem


class ValueCountItem(BaseModel):
    """Vote count for one personality value."""

    value: str
    count: int


class PersonalitySystemStatsItem(BaseModel):
    """Vote counts for one personality system."""

    personality_system: PersonalitySystem
    values: list[ValueCountItem]
    total_votes: int


class GetPersonalityStatsRequest(BaseModel):
    """Get personality stats request."""

    comment_id: str | None = None


class GetPersonalityStatsResponse(BaseModel):
    """Get personality stats response."""

    comment_id: str | None
    personality_stats: list[PersonalitySystemStatsItem]
    last_updated: datetime


class GetPersonalityStatsUseCase:
    """Use case for counting active votes per personality value."""

    def __init__(self, vote_stats_service: VoteStatsService) -> None:
        self.vote_stats_service = vote_stats_service

    async def execute(
        self, request: GetPersonalityStatsRequest
    ) -> GetPersonalityStatsResponse:
        stats = await self.vote_stats_service.get_personality_system_stats(
            request.comment_id
        )

        return GetPersonalityStatsResponse(
            comment_id=request.comment_id,
            personality_stats=[
                PersonalitySystemStatsItem(
                    personality_system=system_stats.personality_system,
                    values=[
                        ValueCountItem(value=v.value, count=v.count)
                        for v in system_stats.values
                    ],
                    total_votes=system_stats.total_votes,
                )
                for system_stats in stats
            ],
            last_updated=datetime.now(),
        )
