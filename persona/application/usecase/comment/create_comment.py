"""Create comment use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from persona.domain.service import CommentService
from persona.domain.service.vote_validation import validate_profile_id


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    profile_id: int
    author: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1, max_length=1000)
    title: str | None = Field(default=None, max_length=200)


class CommentResponse(BaseModel):
    """Comment with its vote tally."""

    comment_id: str
    profile_id: int
    author: str
    title: str | None
    content: str
    vote_stats: dict[str, dict[str, int]]
    total_votes: int
    created_at: datetime
    updated_at: datetime


class CreateCommentUseCase:
    """Use case for writing a comment on a personality profile."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The new comment with an empty tally

        Raises:
            ValidationError: If the profile ID is out of range
        """
        comment = await self.comment_service.create_comment(
            profile_id=validate_profile_id(request.profile_id),
            author=request.author,
            content=request.content,
            title=request.title,
        )

        return CommentResponse(
            comment_id=str(comment.id),
            profile_id=comment.profile_id,
            author=comment.author,
            title=comment.title,
            content=comment.content,
            vote_stats=comment.vote_stats.to_dict(),
            total_votes=comment.total_votes,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
