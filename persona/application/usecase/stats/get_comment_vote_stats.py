"""Get comment vote stats use case."""

from pydantic import BaseModel

from persona.domain.service import VoteStatsService


class GetCommentVoteStatsRequest(BaseModel):
    """Get comment vote stats request."""

    comment_id: str


class GetCommentVoteStatsResponse(BaseModel):
    """Get comment vote stats response.

    vote_stats always contains every personality system, possibly empty.
    """

    comment_id: str
    vote_stats: dict[str, dict[str, int]]
    total_votes: int


class GetCommentVoteStatsUseCase:
    """Use case for reading a comment's vote tally."""

    def __init__(self, vote_stats_service: VoteStatsService) -> None:
        """Initialize comment vote stats use case.

        Args:
            vote_stats_service: Vote statistics domain service
        """
        self.vote_stats_service = vote_stats_service

    async def execute(
        self, request: GetCommentVoteStatsRequest
    ) -> GetCommentVoteStatsResponse:
        """Execute comment vote stats flow.

        Raises:
            ValidationError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
        """
        comment, stats = await self.vote_stats_service.get_comment_stats(
            request.comment_id
        )
        return GetCommentVoteStatsResponse(
            comment_id=str(comment.id),
            vote_stats=stats.to_dict(),
            total_votes=comment.total_votes,
        )
