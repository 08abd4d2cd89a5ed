"""Get comment use case."""

from pydantic import BaseModel

from persona.domain.error import NotFoundError
from persona.domain.service import CommentService
from persona.domain.service.vote_validation import validate_comment_id

from .create_comment import CommentResponse


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str


class GetCommentUseCase:
    """Use case for reading one comment with its tally."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> CommentResponse:
        """Execute get comment flow.

        Raises:
            ValidationError: If the comment ID is malformed
            NotFoundError: If the comment does not exist
        """
        comment_id = validate_comment_id(request.comment_id)
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if not comment:
            raise NotFoundError("Comment", str(comment_id))

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
