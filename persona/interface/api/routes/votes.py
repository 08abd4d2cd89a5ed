"""Vote routes.

Votes are anonymous: the voter is identified from the request's address
and user agent, never from a request field.
"""

from datetime import datetime
from typing import Any

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from persona.application.usecase.stats import (
    GetCommentVoteStatsRequest,
    GetCommentVoteStatsResponse,
    GetCommentVoteStatsUseCase,
    GetPersonalityStatsRequest,
    GetPersonalityStatsResponse,
    GetPersonalityStatsUseCase,
    GetTopVotedCommentsRequest,
    GetTopVotedCommentsResponse,
    GetTopVotedCommentsUseCase,
    GetVoteCountRequest,
    GetVoteCountResponse,
    GetVoteCountUseCase,
    GetVoteHistoryRequest,
    GetVoteHistoryResponse,
    GetVoteHistoryUseCase,
    ListPersonalityValuesResponse,
    ListPersonalityValuesUseCase,
)
from persona.application.usecase.vote import (
    GetUserVoteRequest,
    GetUserVoteResponse,
    GetUserVoteUseCase,
    ListCommentVotesRequest,
    ListCommentVotesResponse,
    ListCommentVotesUseCase,
    RemoveVoteRequest,
    RemoveVoteResponse,
    RemoveVoteUseCase,
    SubmitBulkVotesRequest,
    SubmitBulkVotesResponse,
    SubmitBulkVotesUseCase,
    SubmitVoteRequest,
    SubmitVoteResponse,
    SubmitVoteUseCase,
)
from persona.config import VotingSettings
from persona.domain.error import DomainError
from persona.domain.value import VoteOutcome
from persona.interface.api.voter import voter_identifier_from_request
from persona.interface.error import to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class SubmitVoteAPIRequest(BaseModel):
    """API request for casting a vote.

    Missing fields are left empty so the domain reports them as a 400 with
    field details, like any other invalid input.
    """

    personality_system: str = ""
    personality_value: str = ""
    profile_id: int | None = None


class BulkVotesAPIRequest(BaseModel):
    """API request for bulk vote submission.

    votes is checked by the use case so a non-list is reported as a
    validation error rather than a schema error.
    """

    votes: Any = None


class VoteHealthResponse(BaseModel):
    """Vote subsystem health."""

    status: str
    service: str
    timestamp: datetime
    total_votes: int


# ============================================================================
# Per-comment votes
# ============================================================================


@router.post("/comments/{comment_id}/vote", response_model=SubmitVoteResponse)
async def submit_vote(
    comment_id: str,
    body: SubmitVoteAPIRequest,
    request: Request,
    response: Response,
    submit_vote_use_case: FromDishka[SubmitVoteUseCase],
    voting: FromDishka[VotingSettings],
) -> SubmitVoteResponse:
    """Cast or change a personality vote on a comment.

    Returns 201 when a new vote was recorded and 200 when an existing vote
    was updated or left unchanged.

    Raises:
        HTTPException: 400 invalid input, 404 unknown comment, 409 concurrent
            duplicate, 500 storage failure
    """
    try:
        result = await submit_vote_use_case.execute(
            SubmitVoteRequest(
                comment_id=comment_id,
                personality_system=body.personality_system,
                personality_value=body.personality_value,
                voter_identifier=voter_identifier_from_request(
                    request, voting.user_agent_prefix_length
                ),
                profile_id=body.profile_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e

    response.status_code = (
        status.HTTP_201_CREATED
        if result.outcome == VoteOutcome.SUBMITTED
        else status.HTTP_200_OK
    )
    return result


@router.get("/comments/{comment_id}/votes", response_model=ListCommentVotesResponse)
async def list_comment_votes(
    comment_id: str,
    list_comment_votes_use_case: FromDishka[ListCommentVotesUseCase],
    personality_system: str | None = None,
) -> ListCommentVotesResponse:
    """List active votes on a comment, newest first."""
    try:
        return await list_comment_votes_use_case.execute(
            ListCommentVotesRequest(
                comment_id=comment_id, personality_system=personality_system
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get(
    "/comments/{comment_id}/votes/stats", response_model=GetCommentVoteStatsResponse
)
async def get_comment_vote_stats(
    comment_id: str,
    comment_vote_stats_use_case: FromDishka[GetCommentVoteStatsUseCase],
) -> GetCommentVoteStatsResponse:
    """Get a comment's vote tally, read from the comment itself."""
    try:
        return await comment_vote_stats_use_case.execute(
            GetCommentVoteStatsRequest(comment_id=comment_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get(
    "/comments/{comment_id}/votes/{personality_system}",
    response_model=GetUserVoteResponse,
)
async def get_user_vote(
    comment_id: str,
    personality_system: str,
    request: Request,
    get_user_vote_use_case: FromDishka[GetUserVoteUseCase],
    voting: FromDishka[VotingSettings],
) -> GetUserVoteResponse:
    """Get the caller's own vote on a comment for one system.

    Raises:
        HTTPException: 404 if the caller has no vote for this system
    """
    try:
        result = await get_user_vote_use_case.execute(
            GetUserVoteRequest(
                comment_id=comment_id,
                personality_system=personality_system,
                voter_identifier=voter_identifier_from_request(
                    request, voting.user_agent_prefix_length
                ),
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e

    if result.vote is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "Not Found",
                "message": "No vote found for this personality system",
            },
        )
    return result


@router.delete(
    "/comments/{comment_id}/votes/{personality_system}",
    response_model=RemoveVoteResponse,
)
async def remove_vote(
    comment_id: str,
    personality_system: str,
    request: Request,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    voting: FromDishka[VotingSettings],
) -> RemoveVoteResponse:
    """Remove the caller's vote on a comment for one system.

    Removing a vote that does not exist succeeds with removed=false.
    """
    try:
        return await remove_vote_use_case.execute(
            RemoveVoteRequest(
                comment_id=comment_id,
                personality_system=personality_system,
                voter_identifier=voter_identifier_from_request(
                    request, voting.user_agent_prefix_length
                ),
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


# ============================================================================
# Cross-comment statistics
# ============================================================================


@router.get("/votes/personality-values", response_model=ListPersonalityValuesResponse)
async def list_personality_values(
    list_personality_values_use_case: FromDishka[ListPersonalityValuesUseCase],
) -> ListPersonalityValuesResponse:
    """List the values accepted for each personality system."""
    return await list_personality_values_use_case.execute()


@router.get("/votes/top-comments", response_model=GetTopVotedCommentsResponse)
async def get_top_voted_comments(
    top_voted_comments_use_case: FromDishka[GetTopVotedCommentsUseCase],
    voting: FromDishka[VotingSettings],
    personality_system: str | None = None,
    limit: int | None = None,
) -> GetTopVotedCommentsResponse:
    """Rank comments by number of active votes."""
    try:
        return await top_voted_comments_use_case.execute(
            GetTopVotedCommentsRequest(
                personality_system=personality_system,
                limit=limit or voting.top_comments_default_limit,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/votes/stats", response_model=GetPersonalityStatsResponse)
async def get_personality_stats(
    personality_stats_use_case: FromDishka[GetPersonalityStatsUseCase],
    comment_id: str | None = None,
) -> GetPersonalityStatsResponse:
    """Count active votes per personality value, optionally for one comment."""
    try:
        return await personality_stats_use_case.execute(
            GetPersonalityStatsRequest(comment_id=comment_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/votes/count", response_model=GetVoteCountResponse)
async def get_vote_count(
    vote_count_use_case: FromDishka[GetVoteCountUseCase],
    comment_id: str | None = None,
    personality_system: str | None = None,
) -> GetVoteCountResponse:
    """Count active votes, optionally by comment and/or system."""
    try:
        return await vote_count_use_case.execute(
            GetVoteCountRequest(
                comment_id=comment_id, personality_system=personality_system
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/votes/history", response_model=GetVoteHistoryResponse)
async def get_vote_history(
    request: Request,
    vote_history_use_case: FromDishka[GetVoteHistoryUseCase],
    voting: FromDishka[VotingSettings],
    personality_system: str | None = None,
    page: int = 1,
    limit: int | None = None,
) -> GetVoteHistoryResponse:
    """Page through the caller's own votes, newest first."""
    try:
        return await vote_history_use_case.execute(
            GetVoteHistoryRequest(
                voter_identifier=voter_identifier_from_request(
                    request, voting.user_agent_prefix_length
                ),
                personality_system=personality_system,
                page=page,
                limit=limit or voting.history_default_limit,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/votes/bulk", response_model=SubmitBulkVotesResponse)
async def submit_bulk_votes(
    body: BulkVotesAPIRequest,
    request: Request,
    submit_bulk_votes_use_case: FromDishka[SubmitBulkVotesUseCase],
    voting: FromDishka[VotingSettings],
) -> SubmitBulkVotesResponse:
    """Submit several votes in one request (testing and admin use).

    Each entry succeeds or fails on its own; the response lists both.
    """
    try:
        return await submit_bulk_votes_use_case.execute(
            SubmitBulkVotesRequest(
                votes=body.votes,
                voter_identifier=voter_identifier_from_request(
                    request, voting.user_agent_prefix_length
                ),
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/votes/health", response_model=VoteHealthResponse)
async def vote_health(
    vote_count_use_case: FromDishka[GetVoteCountUseCase],
) -> VoteHealthResponse | JSONResponse:
    """Check that votes can be counted."""
    try:
        result = await vote_count_use_case.execute(GetVoteCountRequest())
    except DomainError as e:
        logfire.error("Vote service health check failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "service": "votes",
                "timestamp": datetime.now().isoformat(),
                "error": "Vote storage unavailable",
            },
        )

    return VoteHealthResponse(
        status="healthy",
        service="votes",
        timestamp=datetime.now(),
        total_votes=result.count,
    )
