"""Vote domain service.

Keeps vote records and comment tallies in step. Every state change of a
vote record is followed by the matching tally adjustment:

- new vote:        create record, then increment new value
- changed value:   update record, then decrement old value, increment new
- same value:      nothing is written
- removal:         deactivate record, then decrement its value

Both writes go through the request's database session, so the request
transaction commits or rolls back them together.
"""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import SQLAlchemyError

from persona.domain.error import DuplicateVoteError, NotFoundError, VoteOperationError
from persona.domain.model.comment import Comment
from persona.domain.model.vote import Vote, VoteSubmission
from persona.domain.repository import VoteRepository
from persona.domain.value import (
    CommentId,
    PersonalitySystem,
    ProfileId,
    VoteId,
    VoteOutcome,
    VoteStats,
)

from .base import Service
from .comment_service import CommentService
from .vote_validation import (
    validate_comment_id,
    validate_personality_system,
    validate_personality_value,
    validate_profile_id,
    validate_voter_identifier,
)


class VoteService(Service):
    """Domain service for vote submission and removal."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            comment_service: Comment domain service (owns the tallies)
        """
        self.vote_repository = vote_repository
        self.comment_service = comment_service

    async def submit_vote(
        self,
        comment_id: str | CommentId,
        personality_system: str | PersonalitySystem,
        personality_value: str,
        voter_identifier: str,
        profile_id: int | None = None,
    ) -> VoteSubmission:
        """Submit or change a voter's vote on a comment.

        Args:
            comment_id: Comment ID (UUID string or CommentId)
            personality_system: System name, any case
            personality_value: Value, any case
            voter_identifier: Anonymous voter token
            profile_id: Profile the comment belongs to; defaults to the
                comment's own profile

        Returns:
            Submission outcome and the vote as stored

        Raises:
            ValidationError: If any input is malformed or not in the catalog
            NotFoundError: If the comment does not exist
            DuplicateVoteError: If a concurrent submission created the vote
                between lookup and insert
            VoteOperationError: If the store fails
        """
        with logfire.span(
            "vote_service.submit_vote",
            comment_id=str(comment_id),
            personality_system=str(personality_system),
        ):
            cid = validate_comment_id(comment_id)
            system = validate_personality_system(personality_system)
            value = validate_personality_value(system, personality_value)
            voter = validate_voter_identifier(voter_identifier)
            pid = validate_profile_id(profile_id) if profile_id is not None else None

            vote_written = False
            try:
                comment = await self.comment_service.get_comment_by_id(cid)
                if not comment:
                    logfire.warn("Vote on non-existent comment", comment_id=str(cid))
                    raise NotFoundError("Comment", str(cid))

                existing = await self.vote_repository.find_active_vote(
                    cid, voter, system
                )

                if existing and existing.personality_value == value:
                    logfire.info(
                        "Vote unchanged",
                        comment_id=str(cid),
                        personality_system=system.value,
                        personality_value=value,
                    )
                    return VoteSubmission(outcome=VoteOutcome.UNCHANGED, vote=existing)

                if existing:
                    change = await self.vote_repository.update_value(
                        cid, voter, system, value
                    )
                    if change and change.previous_value == value:
                        # A concurrent change already set this value
                        return VoteSubmission(
                            outcome=VoteOutcome.UNCHANGED, vote=change.vote
                        )
                    if change:
                        vote_written = True
                        # Decrement what the write replaced; the lookup above
                        # may predate a concurrent change
                        await self.comment_service.decrement_vote(
                            cid, system, change.previous_value
                        )
                        await self.comment_service.increment_vote(cid, system, value)
                        logfire.info(
                            "Vote updated",
                            comment_id=str(cid),
                            personality_system=system.value,
                            old_value=change.previous_value,
                            new_value=value,
                        )
                        return VoteSubmission(
                            outcome=VoteOutcome.UPDATED, vote=change.vote
                        )

                    # Removed concurrently after the lookup; its removal
                    # already decremented the tally, so vote afresh.
                    logfire.warn(
                        "Vote disappeared before update",
                        comment_id=str(cid),
                        personality_system=system.value,
                    )

                saved = await self._create_vote(comment, pid, voter, system, value)
                vote_written = True
                await self.comment_service.increment_vote(cid, system, value)
                logfire.info(
                    "Vote submitted",
                    comment_id=str(cid),
                    vote_id=str(saved.id),
                    personality_system=system.value,
                    personality_value=value,
                )
                return VoteSubmission(outcome=VoteOutcome.SUBMITTED, vote=saved)

            except SQLAlchemyError as e:
                self._log_storage_failure("submit vote", cid, vote_written, e)
                raise VoteOperationError("submit vote", f"comment {cid}", e) from e

    async def remove_vote(
        self,
        comment_id: str | CommentId,
        voter_identifier: str,
        personality_system: str | PersonalitySystem,
    ) -> Vote | None:
        """Remove (deactivate) a voter's vote for one system.

        A missing vote is not an error.

        Args:
            comment_id: Comment ID
            voter_identifier: Anonymous voter token
            personality_system: System name, any case

        Returns:
            The removed vote, or None if there was nothing to remove

        Raises:
            ValidationError: If any input is malformed
            VoteOperationError: If the store fails
        """
        with logfire.span(
            "vote_service.remove_vote",
            comment_id=str(comment_id),
            personality_system=str(personality_system),
        ):
            cid = validate_comment_id(comment_id)
            system = validate_personality_system(personality_system)
            voter = validate_voter_identifier(voter_identifier)

            vote_written = False
            try:
                # Lookup and deactivation in one statement: the returned
                # record is the state before deactivation.
                removed = await self.vote_repository.deactivate(cid, voter, system)
                if not removed:
                    logfire.info(
                        "No vote to remove",
                        comment_id=str(cid),
                        personality_system=system.value,
                    )
                    return None

                vote_written = True
                await self.comment_service.decrement_vote(
                    cid, system, removed.personality_value
                )
                logfire.info(
                    "Vote removed",
                    comment_id=str(cid),
                    vote_id=str(removed.id),
                    personality_system=system.value,
                    personality_value=removed.personality_value,
                )
                return removed

            except SQLAlchemyError as e:
                self._log_storage_failure("remove vote", cid, vote_written, e)
                raise VoteOperationError("remove vote", f"comment {cid}", e) from e

    async def get_user_vote(
        self,
        comment_id: str | CommentId,
        voter_identifier: str,
        personality_system: str | PersonalitySystem,
    ) -> Vote | None:
        """Get a voter's active vote for one system.

        Returns:
            The active vote, or None
        """
        cid = validate_comment_id(comment_id)
        system = validate_personality_system(personality_system)
        voter = validate_voter_identifier(voter_identifier)

        try:
            return await self.vote_repository.find_active_vote(cid, voter, system)
        except SQLAlchemyError as e:
            raise VoteOperationError("get vote", f"comment {cid}", e) from e

    async def get_comment_votes(
        self,
        comment_id: str | CommentId,
        personality_system: str | PersonalitySystem | None = None,
    ) -> list[Vote]:
        """List active votes on a comment, newest first.

        Args:
            comment_id: Comment ID
            personality_system: Optional system filter

        Returns:
            Active votes
        """
        cid = validate_comment_id(comment_id)
        system = (
            validate_personality_system(personality_system)
            if personality_system
            else None
        )

        with logfire.span(
            "vote_service.get_comment_votes",
            comment_id=str(cid),
            personality_system=system.value if system else None,
        ):
            try:
                votes = await self.vote_repository.find_by_comment(cid, system)
            except SQLAlchemyError as e:
                raise VoteOperationError("list votes", f"comment {cid}", e) from e
            logfire.info("Comment votes retrieved", comment_id=str(cid), count=len(votes))
            return votes

    async def reconcile_tally(self, comment_id: str | CommentId) -> bool:
        """Recompute a comment's tally from its active vote records.

        The vote records are authoritative; the tally is overwritten when
        it disagrees with them. Safe to run repeatedly.

        Args:
            comment_id: Comment ID

        Returns:
            True if the tally was out of step and has been repaired

        Raises:
            NotFoundError: If the comment does not exist
            VoteOperationError: If the store fails
        """
        cid = validate_comment_id(comment_id)

        with logfire.span("vote_service.reconcile_tally", comment_id=str(cid)):
            comment = await self.comment_service.get_comment_by_id(cid)
            if not comment:
                raise NotFoundError("Comment", str(cid))

            try:
                counts = await self.vote_repository.value_counts(cid)
            except SQLAlchemyError as e:
                raise VoteOperationError("count votes", f"comment {cid}", e) from e

            expected = VoteStats.from_counts(
                [(c.personality_system, c.personality_value, c.count) for c in counts]
            )

            if (
                _nonzero(comment.vote_stats) == _nonzero(expected)
                and comment.total_votes == expected.total()
            ):
                logfire.info("Tally consistent", comment_id=str(cid))
                return False

            logfire.warn(
                "Tally out of step with vote records",
                comment_id=str(cid),
                tally_total=comment.total_votes,
                vote_total=expected.total(),
            )
            try:
                await self.comment_service.replace_tally(cid, expected)
            except SQLAlchemyError as e:
                raise VoteOperationError("replace tally", f"comment {cid}", e) from e
            return True

    async def _create_vote(
        self,
        comment: Comment,
        profile_id: ProfileId | None,
        voter_identifier: str,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> Vote:
        """Insert a new active vote (raises DuplicateVoteError on a race)."""
        now = datetime.now()
        vote = Vote(
            id=VoteId(uuid4()),
            comment_id=comment.id,
            profile_id=profile_id if profile_id is not None else comment.profile_id,
            voter_identifier=voter_identifier,
            personality_system=personality_system,
            personality_value=personality_value,
            active=True,
            created_at=now,
            updated_at=now,
        )

        try:
            return await self.vote_repository.save(vote)
        except DuplicateVoteError:
            logfire.warn(
                "Duplicate vote attempt",
                comment_id=str(comment.id),
                personality_system=personality_system.value,
            )
            raise

    @staticmethod
    def _log_storage_failure(
        operation: str, comment_id: CommentId, vote_written: bool, error: Exception
    ) -> None:
        if vote_written:
            # Vote record changed but its tally adjustment did not complete
            logfire.error(
                "Tally adjustment failed after vote write",
                operation=operation,
                comment_id=str(comment_id),
                error=str(error),
            )
        else:
            logfire.error(
                "Vote storage operation failed",
                operation=operation,
                comment_id=str(comment_id),
                error=str(error),
            )


def _nonzero(stats: VoteStats) -> dict[str, dict[str, int]]:
    return {
        system: {value: count for value, count in counts.items() if count}
        for system, counts in stats.to_dict().items()
    }
