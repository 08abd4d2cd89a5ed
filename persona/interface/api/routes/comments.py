"""Comment routes.

Only what voting needs: creating a comment on a profile and reading it
back with its tally.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from persona.application.usecase.comment import (
    CommentResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    GetCommentRequest,
    GetCommentUseCase,
)
from persona.domain.error import DomainError
from persona.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    author: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1, max_length=1000)
    title: str | None = Field(default=None, max_length=200)


@router.post(
    "/profiles/{profile_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    profile_id: int,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CommentResponse:
    """Create a comment on a personality profile.

    Args:
        profile_id: Numeric profile ID
        request: Comment content
        create_comment_use_case: Create comment use case from DI

    Returns:
        Created comment with an empty tally

    Raises:
        HTTPException: If the profile ID is out of range
    """
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                profile_id=profile_id,
                author=request.author,
                content=request.content,
                title=request.title,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/comments/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> CommentResponse:
    """Get a comment with its vote tally."""
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(comment_id=comment_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
