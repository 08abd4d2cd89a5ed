"""Submit vote use case."""

from pydantic import BaseModel

from persona.domain.service import VoteService
from persona.domain.value import VoteOutcome

from .common import VoteItem

_MESSAGES = {
    VoteOutcome.SUBMITTED: "Vote submitted successfully",
    VoteOutcome.UPDATED: "Vote updated successfully",
    VoteOutcome.UNCHANGED: "Vote unchanged",
}


class SubmitVoteRequest(BaseModel):
    """Submit vote request."""

    comment_id: str  # UUID string
    personality_system: str
    personality_value: str
    voter_identifier: str  # Derived from the caller's address and agent
    profile_id: int | None = None


class SubmitVoteResponse(BaseModel):
    """Submit vote response."""

    vote: VoteItem
    outcome: VoteOutcome
    is_update: bool
    message: str


class SubmitVoteUseCase:
    """Use case for casting or changing a personality vote on a comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize submit vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: SubmitVoteRequest) -> SubmitVoteResponse:
        """Execute submit vote flow.

        Args:
            request: Submit vote request

        Returns:
            Submit vote response with the stored vote and outcome

        Raises:
            ValidationError: If input is invalid
            NotFoundError: If the comment does not exist
            DuplicateVoteError: If a concurrent submission won the insert
            VoteOperationError: If storage fails
        """
        submission = await self.vote_service.submit_vote(
            comment_id=request.comment_id,
            personality_system=request.personality_system,
            personality_value=request.personality_value,
            voter_identifier=request.voter_identifier,
            profile_id=request.profile_id,
        )

        return SubmitVoteResponse(
            vote=VoteItem.from_vote(submission.vote),
            outcome=submission.outcome,
            is_update=submission.is_update,
            message=_MESSAGES[submission.outcome],
        )
