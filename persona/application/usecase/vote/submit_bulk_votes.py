"""Bulk vote submission use case."""

from typing import Any

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from persona.domain.error import DomainError, ValidationError, VoteOperationError
from persona.domain.repository import TransactionManager
from persona.domain.service import VoteService
from persona.domain.value import VoteOutcome

from .common import VoteItem


class BulkVoteItem(BaseModel):
    """One vote in a bulk submission."""

    comment_id: str
    personality_system: str
    personality_value: str
    voter_identifier: str | None = None  # Defaults to the caller's identifier
    profile_id: int | None = None


class SubmitBulkVotesRequest(BaseModel):
    """Bulk vote submission request.

    votes is validated element by element, so one malformed entry does not
    reject the rest.
    """

    votes: Any
    voter_identifier: str


class BulkVoteSuccess(BaseModel):
    """Successfully processed entry."""

    index: int
    outcome: VoteOutcome
    is_update: bool
    vote: VoteItem


class BulkVoteFailure(BaseModel):
    """Entry that could not be processed."""

    index: int
    error: str
    details: dict[str, str] = {}


class BulkVoteSummary(BaseModel):
    """Counts over all entries."""

    total: int
    successful: int
    failed: int


class SubmitBulkVotesResponse(BaseModel):
    """Bulk vote submission response."""

    message: str
    results: list[BulkVoteSuccess]
    errors: list[BulkVoteFailure]
    summary: BulkVoteSummary


class SubmitBulkVotesUseCase:
    """Use case for submitting many votes in one request (testing and admin)."""

    def __init__(
        self, vote_service: VoteService, transaction_manager: TransactionManager
    ) -> None:
        """Initialize bulk vote use case.

        Args:
            vote_service: Vote domain service
            transaction_manager: Savepoints that isolate each entry's writes
        """
        self.vote_service = vote_service
        self.transaction_manager = transaction_manager

    async def execute(self, request: SubmitBulkVotesRequest) -> SubmitBulkVotesResponse:
        """Execute bulk vote flow.

        Entries are processed in order, each inside its own savepoint. Each
        entry either succeeds with its submission outcome or fails with a
        reason; a failed entry's writes are undone and the remaining entries
        still run, including after a storage failure.

        Args:
            request: Bulk vote request

        Returns:
            Per-entry results, failures and a summary

        Raises:
            ValidationError: If votes is not a list
        """
        if not isinstance(request.votes, list):
            raise ValidationError(
                "Votes must be an array", {"votes": "Votes must be an array"}
            )

        results: list[BulkVoteSuccess] = []
        errors: list[BulkVoteFailure] = []

        with logfire.span("submit_bulk_votes.execute", total=len(request.votes)):
            for index, raw in enumerate(request.votes):
                try:
                    item = BulkVoteItem.model_validate(raw)
                except PydanticValidationError as e:
                    errors.append(
                        BulkVoteFailure(
                            index=index,
                            error="Invalid vote entry",
                            details={
                                ".".join(str(p) for p in err["loc"]) or "entry": err["msg"]
                                for err in e.errors()
                            },
                        )
                    )
                    continue

                try:
                    async with self.transaction_manager.savepoint():
                        submission = await self.vote_service.submit_vote(
                            comment_id=item.comment_id,
                            personality_system=item.personality_system,
                            personality_value=item.personality_value,
                            voter_identifier=item.voter_identifier
                            or request.voter_identifier,
                            profile_id=item.profile_id,
                        )
                except VoteOperationError as e:
                    logfire.error(
                        "Bulk vote entry failed in storage", index=index, error=str(e)
                    )
                    errors.append(
                        BulkVoteFailure(index=index, error="Failed to submit vote")
                    )
                    continue
                except DomainError as e:
                    errors.append(
                        BulkVoteFailure(
                            index=index,
                            error=str(e),
                            details=e.details if isinstance(e, ValidationError) else {},
                        )
                    )
                    continue

                results.append(
                    BulkVoteSuccess(
                        index=index,
                        outcome=submission.outcome,
                        is_update=submission.is_update,
                        vote=VoteItem.from_vote(submission.vote),
                    )
                )

            logfire.info(
                "Bulk vote submission completed",
                successful=len(results),
                failed=len(errors),
            )

        return SubmitBulkVotesResponse(
            message="Bulk vote submission completed",
            results=results,
            errors=errors,
            summary=BulkVoteSummary(
                total=len(request.votes),
                successful=len(results),
                failed=len(errors),
            ),
        )
